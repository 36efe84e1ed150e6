"""Working-directory context handed to every bd invocation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from conf import BEADS_DIR_NAME
from routing import ContextMissingError, RouteResolver


class ContextKind(StrEnum):
    TOWN_ROOT = "town_root"    # bd routes through .beads/routes.jsonl itself
    STORE_DIR = "store_dir"    # already resolved to the owning rig


@dataclass(frozen=True)
class StoreContext:
    """Directory bd runs in, and whether it is the town root or a resolved store."""

    directory: Path
    kind: ContextKind = ContextKind.TOWN_ROOT

    @classmethod
    def town(cls, town_root: str | Path) -> StoreContext:
        return cls(Path(town_root), ContextKind.TOWN_ROOT)

    @classmethod
    def store(cls, store_dir: str | Path) -> StoreContext:
        return cls(Path(store_dir), ContextKind.STORE_DIR)

    @classmethod
    def for_identifier(cls, town_root: str | Path, identifier: str) -> StoreContext:
        """Resolve ``identifier`` through the town table to its store directory."""
        return cls.store(RouteResolver(town_root).resolve(identifier))

    @classmethod
    def coerce(cls, context: StoreContext | str | os.PathLike | None) -> StoreContext:
        """Accept a StoreContext or a town-root path; refuse anything empty."""
        if isinstance(context, StoreContext):
            return context
        if context is None:
            raise ContextMissingError(
                "bd invocation requires a routing context (town root or store directory); got None"
            )
        raw = os.fspath(context)
        if not raw.strip():
            raise ContextMissingError(
                "bd invocation requires a routing context (town root or store directory); got ''"
            )
        return cls.town(raw)

    def validate(self) -> Path:
        """Check the directory is usable and return it.

        Relative paths are refused: they would be resolved against the
        caller's working directory.
        """
        directory = self.directory
        if not directory.is_absolute():
            raise ContextMissingError(
                f"{self.kind} context must be an absolute path, got {str(directory)!r}"
            )
        if not directory.is_dir():
            raise ContextMissingError(f"{self.kind} context directory does not exist: {directory}")
        if self.kind == ContextKind.TOWN_ROOT and not (directory / BEADS_DIR_NAME).is_dir():
            raise ContextMissingError(
                f"{directory} is not a town root (no {BEADS_DIR_NAME} directory); "
                "bd cannot find routes.jsonl from there"
            )
        return directory
