"""Prefix routing for multi-rig bead towns."""

from .errors import (
    ContextMissingError,
    DuplicatePrefixError,
    RecordNotFoundError,
    RoutingConfigError,
    RoutingError,
    StoreCommandError,
    StoreExecutableNotFoundError,
    StoreTimeoutError,
    TownNotFoundError,
)
from .resolver import RouteResolver, match_route, resolve, route_dir
from .route import Route
from .routes_table import (
    append_route,
    load_routes,
    prefix_for_rig,
    remove_route,
    routes_path,
    town_beads_dir,
    validate_routes,
    write_routes,
)
from .workspace import find_town_root, find_town_root_or_none
