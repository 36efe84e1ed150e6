"""Load and write the town routing table (``.beads/routes.jsonl``).

One JSON object per line, in insertion order. This module owns the file
format and its validation; prefix matching lives in ``resolver``.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from conf import BEADS_DIR_NAME, ROUTES_FILE_NAME
from log import route_log

from .errors import DuplicatePrefixError, RoutingConfigError
from .route import Route


def routes_path(beads_dir: str | Path) -> Path:
    """Location of the routing table inside a ``.beads`` directory."""
    return Path(beads_dir) / ROUTES_FILE_NAME


def town_beads_dir(town_root: str | Path) -> Path:
    return Path(town_root) / BEADS_DIR_NAME


# -- Validation --

def validate_routes(routes: Iterable[Route], source: Path | None = None) -> list[Route]:
    """Reject duplicate prefixes. Returns the routes as a list, order kept."""
    seen: set[str] = set()
    result: list[Route] = []
    for route in routes:
        if route.prefix in seen:
            raise DuplicatePrefixError(route.prefix, source=source)
        seen.add(route.prefix)
        result.append(route)
    return result


# -- Persistence --

def load_routes(beads_dir: str | Path) -> list[Route]:
    """Read the routing table.

    A missing file means routing is disabled and yields ``[]``. Any bad
    line fails the whole load; nothing is skipped except blank lines.
    """
    path = routes_path(beads_dir)
    if not path.exists():
        return []

    routes: list[Route] = []
    seen: set[str] = set()
    with open(path, "rb") as fh:
        for line_no, raw in enumerate(fh, start=1):
            try:
                line = raw.decode("utf-8").strip()
            except UnicodeDecodeError as exc:
                raise RoutingConfigError(
                    f"route is not valid UTF-8: {exc.reason}", source=path, line_no=line_no
                ) from exc
            if not line:
                continue
            try:
                route = Route.model_validate_json(line)
            except ValidationError as exc:
                problems = "; ".join(err["msg"] for err in exc.errors())
                raise RoutingConfigError(
                    f"malformed route: {problems}", source=path, line_no=line_no
                ) from exc
            if route.prefix in seen:
                raise DuplicatePrefixError(route.prefix, source=path, line_no=line_no)
            seen.add(route.prefix)
            routes.append(route)
    return routes


def write_routes(beads_dir: str | Path, routes: Iterable[Route]) -> Path:
    """Overwrite the routing table with ``routes``.

    Creates ``beads_dir`` if needed. The file is replaced atomically so
    concurrent readers see either the old or the new table.
    """
    path = routes_path(beads_dir)
    routes = validate_routes(routes, source=path)
    content = "".join(route.to_line() + "\n" for route in routes)

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    route_log(f"Wrote {len(routes)} route(s) to {path}")
    return path


# -- Maintenance --

def append_route(town_root: str | Path, route: Route) -> list[Route]:
    """Add ``route`` to the town table, replacing an entry with the same prefix in place."""
    beads_dir = town_beads_dir(town_root)
    routes = load_routes(beads_dir)
    for i, existing in enumerate(routes):
        if existing.prefix == route.prefix:
            route_log(f"Replacing route {existing.prefix!r}: {existing.path} -> {route.path}")
            routes[i] = route
            break
    else:
        routes.append(route)
    write_routes(beads_dir, routes)
    return routes


def remove_route(town_root: str | Path, prefix: str) -> bool:
    """Drop the route for ``prefix``. Returns True if one was removed."""
    beads_dir = town_beads_dir(town_root)
    routes = load_routes(beads_dir)
    kept = [r for r in routes if r.prefix != prefix]
    if len(kept) == len(routes):
        return False
    write_routes(beads_dir, kept)
    return True


def prefix_for_rig(town_root: str | Path, rig_name: str) -> str | None:
    """Prefix (without the trailing ``-``) of the rig whose route path starts with ``rig_name``."""
    for route in load_routes(town_beads_dir(town_root)):
        if route.rig_name == rig_name:
            return route.prefix.rstrip("-")
    return None

