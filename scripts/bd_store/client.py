"""Thin bd client: existence checks, show/create/init, and rig provisioning."""

from __future__ import annotations

import json
import os
from pathlib import Path, PurePosixPath
from typing import Any

from log import route_log
from routing import RecordNotFoundError, Route, StoreCommandError, append_route

from .context import StoreContext
from .invoker import InvocationResult, StoreInvoker

ContextLike = StoreContext | str | os.PathLike | None


class StoreClient:
    """bd operations keyed by an explicit StoreContext.

    Every method takes ``context``; there is no default. Callers that only
    know their own location must discover the town root first.
    """

    def __init__(self, invoker: StoreInvoker | None = None) -> None:
        self.invoker = invoker or StoreInvoker()

    def exists(self, identifier: str, context: ContextLike) -> bool:
        """True when ``bd show <id> --json`` exits 0 in the context directory.

        Only a non-zero bd exit counts as "does not exist". A missing
        context, a timeout, or a missing executable is raised instead.
        """
        result = self.invoker.invoke("show", [identifier, "--json"], context, check=False)
        if not result.ok:
            route_log(
                f"{identifier} not found via bd show (exit {result.returncode}, "
                f"cwd={result.cwd}): {result.stderr.strip()}"
            )
        return result.ok

    def verify_exists(self, identifier: str, context: ContextLike) -> None:
        """Raise RecordNotFoundError unless bd can show ``identifier``."""
        result = self.invoker.invoke("show", [identifier, "--json"], context, check=False)
        if not result.ok:
            raise RecordNotFoundError(identifier, result.cwd, result.returncode, result.stderr)

    def show(self, identifier: str, context: ContextLike) -> Any:
        """Parsed ``bd show --json`` output."""
        result = self.invoker.invoke("show", [identifier, "--json"], context)
        try:
            return result.json()
        except json.JSONDecodeError as exc:
            raise StoreCommandError(
                result.argv, result.cwd, result.returncode, result.stderr,
                message=f"bd show {identifier} returned invalid JSON: {exc}",
            ) from exc

    def create(
        self,
        identifier: str,
        title: str,
        context: ContextLike,
        issue_type: str = "task",
    ) -> InvocationResult:
        return self.invoker.invoke(
            "create",
            [f"--id={identifier}", f"--title={title}", f"--type={issue_type}"],
            context,
        )

    def init(self, prefix: str, context: ContextLike) -> InvocationResult:
        return self.invoker.invoke("init", [f"--prefix={prefix}"], context)


def provision_rig(
    town_root: str | Path,
    rig_path: str,
    prefix: str,
    client: StoreClient | None = None,
) -> Route:
    """Initialize a store at ``town_root/rig_path`` and route ``prefix`` to it.

    ``prefix`` may be given with or without its trailing ``-``; bd init
    receives the bare form and the route stores the dashed form.
    """
    client = client or StoreClient()
    bare = prefix.rstrip("-")
    if not bare:
        raise ValueError(f"invalid rig prefix: {prefix!r}")
    route = Route(prefix=f"{bare}-", path=rig_path)

    store_dir = Path(town_root).joinpath(*PurePosixPath(rig_path).parts)
    store_dir.mkdir(parents=True, exist_ok=True)
    client.init(bare, StoreContext.store(store_dir))
    append_route(town_root, route)
    route_log(f"Provisioned rig {rig_path!r} with prefix {route.prefix!r}")
    return route
