"""Resolve a bead identifier to the directory of the store that owns it."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Sequence

from .route import Route
from .routes_table import load_routes, town_beads_dir


def match_route(routes: Sequence[Route], identifier: str) -> Route | None:
    """Pick the route owning ``identifier``.

    Longest matching prefix wins; equal lengths keep table order.
    """
    best: Route | None = None
    for route in routes:
        if not route.matches(identifier):
            continue
        if best is None or len(route.prefix) > len(best.prefix):
            best = route
    return best


def route_dir(town_root: str | Path, route: Route | None) -> Path:
    """Absolute store directory for ``route``; the town root when there is none."""
    root = Path(town_root)
    if route is None or route.is_town_route:
        return root
    return root.joinpath(*PurePosixPath(route.path).parts)


class RouteResolver:
    """Resolver over one town's routing table.

    The table is read on first use and kept in memory; call ``reload()``
    after the table changes on disk.
    """

    def __init__(self, town_root: str | Path, routes: Sequence[Route] | None = None):
        self.town_root = Path(town_root)
        self._routes: list[Route] | None = list(routes) if routes is not None else None

    @property
    def routes(self) -> list[Route]:
        if self._routes is None:
            self._routes = load_routes(town_beads_dir(self.town_root))
        return list(self._routes)

    def reload(self) -> list[Route]:
        self._routes = None
        return self.routes

    def route_for(self, identifier: str) -> Route | None:
        return match_route(self.routes, identifier)

    def resolve(self, identifier: str) -> Path:
        return route_dir(self.town_root, self.route_for(identifier))


def resolve(town_root: str | Path, identifier: str) -> Path:
    """Store directory for ``identifier``, reading the table fresh from disk."""
    return RouteResolver(town_root).resolve(identifier)
