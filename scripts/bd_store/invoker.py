"""Run the bd executable with an explicit working directory."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import conf
from log import route_log
from routing import StoreCommandError, StoreExecutableNotFoundError, StoreTimeoutError

from .context import StoreContext


@dataclass
class InvocationResult:
    """Outcome of one bd process."""

    argv: list[str]
    cwd: Path
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def json(self) -> Any:
        """Parse stdout as JSON (for ``--json`` commands)."""
        return json.loads(self.stdout)

    def to_dict(self) -> dict[str, Any]:
        return {
            "argv": self.argv,
            "cwd": str(self.cwd),
            "returncode": self.returncode,
            "stdout": self.stdout,
            "stderr": self.stderr,
        }


class StoreInvoker:
    """Spawns bd in the directory named by a StoreContext.

    The calling process's own working directory is never used. Failures
    are raised, never retried.
    """

    def __init__(
        self,
        command: Sequence[str] | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        self.command = list(command) if command is not None else list(conf.BD_COMMAND)
        self.timeout = timeout if timeout is not None else conf.bd_timeout()
        self._env = env

    def build_argv(self, operation: str, args: Sequence[str] = ()) -> list[str]:
        return [*self.command, operation, *args]

    def child_env(self) -> dict[str, str]:
        env = dict(self._env if self._env is not None else os.environ)
        for key in conf.STRIPPED_ENV_VARS:
            env.pop(key, None)
        return env

    def invoke(
        self,
        operation: str,
        args: Sequence[str],
        context: StoreContext | str | os.PathLike | None,
        check: bool = True,
    ) -> InvocationResult:
        """Run ``bd <operation> <args>`` in the context directory.

        Args:
            operation: bd sub-command (``show``, ``create``, ``init``).
            args: Arguments after the sub-command.
            context: StoreContext, or a town-root path. Empty context raises
                ContextMissingError before anything is spawned.
            check: Raise StoreCommandError on a non-zero exit.

        Returns:
            InvocationResult with exit code and captured output.
        """
        ctx = StoreContext.coerce(context)
        cwd = ctx.validate()
        argv = self.build_argv(operation, args)
        route_log(f"bd {operation} {' '.join(args)} (cwd={cwd}, {ctx.kind})")

        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=str(cwd),
                env=self.child_env(),
            )
        except subprocess.TimeoutExpired as exc:
            stderr = exc.stderr.decode(errors="replace") if isinstance(exc.stderr, bytes) else (exc.stderr or "")
            route_log(f"ERROR: bd {operation} timed out after {self.timeout}s in {cwd}")
            raise StoreTimeoutError(argv, cwd, self.timeout, stderr) from exc
        except FileNotFoundError as exc:
            route_log(f"ERROR: bd executable not found: {argv[0]}")
            raise StoreExecutableNotFoundError(argv, cwd) from exc

        result = InvocationResult(
            argv=argv,
            cwd=cwd,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
        if not result.ok:
            route_log(f"bd {operation} exited {result.returncode} in {cwd}: {result.stderr.strip()}")
            if check:
                raise StoreCommandError(argv, cwd, result.returncode, result.stderr)
        return result
