"""Locate the town root above a starting directory."""

from __future__ import annotations

from pathlib import Path

from conf import BEADS_DIR_NAME, ROUTES_FILE_NAME, TOWN_MARKER

from .errors import TownNotFoundError


def find_town_root_or_none(start: str | Path) -> Path | None:
    """Walk up from ``start``.

    The first directory holding ``mayor/town.json`` wins. Failing that, the
    first directory holding ``.beads/routes.jsonl`` is used.
    """
    start = Path(start).resolve()
    candidates = [start] + list(start.parents)

    for parent in candidates:
        if (parent / TOWN_MARKER).is_file():
            return parent
    for parent in candidates:
        if (parent / BEADS_DIR_NAME / ROUTES_FILE_NAME).is_file():
            return parent
    return None


def find_town_root(start: str | Path) -> Path:
    town_root = find_town_root_or_none(start)
    if town_root is None:
        raise TownNotFoundError(Path(start))
    return town_root
