"""Error types shared by the routing table, resolver, and bd invoker."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class RoutingError(Exception):
    """Base class for every beadroute failure."""


class RoutingConfigError(RoutingError):
    """The routing table is malformed or ambiguous."""

    def __init__(self, message: str, source: Path | None = None, line_no: int | None = None):
        self.source = source
        self.line_no = line_no
        if source is not None and line_no is not None:
            message = f"{source}:{line_no}: {message}"
        elif source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class DuplicatePrefixError(RoutingConfigError):
    """Two routes claim the same prefix."""

    def __init__(self, prefix: str, source: Path | None = None, line_no: int | None = None):
        self.prefix = prefix
        super().__init__(f"duplicate route prefix {prefix!r}", source=source, line_no=line_no)


class ContextMissingError(RoutingError):
    """A bd invocation was attempted without a usable routing context."""


class StoreCommandError(RoutingError):
    """The bd executable failed. Exit code and stderr are kept verbatim."""

    def __init__(
        self,
        argv: Sequence[str],
        cwd: Path,
        returncode: int | None,
        stderr: str = "",
        message: str | None = None,
    ):
        self.argv = list(argv)
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = f"{' '.join(self.argv)} exited with code {returncode} in {cwd}"
            if stderr.strip():
                message += f": {stderr.strip()}"
        super().__init__(message)


class StoreTimeoutError(StoreCommandError):
    """bd did not finish within the configured timeout and was killed."""

    def __init__(self, argv: Sequence[str], cwd: Path, timeout: float, stderr: str = ""):
        self.timeout = timeout
        super().__init__(
            argv, cwd, None, stderr,
            message=f"{' '.join(argv)} timed out after {timeout}s in {cwd}",
        )


class StoreExecutableNotFoundError(StoreCommandError):
    """The bd executable could not be started."""

    def __init__(self, argv: Sequence[str], cwd: Path):
        super().__init__(
            argv, cwd, None,
            message=f"store executable not found: {argv[0]!r}",
        )


class RecordNotFoundError(RoutingError):
    """bd ran in a valid context but could not show the record."""

    def __init__(self, identifier: str, cwd: Path, returncode: int | None, stderr: str = ""):
        self.identifier = identifier
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr
        message = f"record {identifier!r} not found (bd show in {cwd} exited {returncode})"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class TownNotFoundError(RoutingError):
    """No town root above the starting directory."""

    def __init__(self, start: Path):
        self.start = start
        super().__init__(f"no town root found at or above {start}")
