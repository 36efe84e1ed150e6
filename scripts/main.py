#!/usr/bin/env python3
"""
beadroute - Main Entry Point
Resolves bead identifiers to rig stores and runs bd with the right context.
"""
import argparse
import json
import sys
from pathlib import Path

from bd_store import StoreClient, StoreContext, StoreInvoker, provision_rig
from log import route_log
from routing import (
    Route,
    RouteResolver,
    RoutingError,
    append_route,
    find_town_root,
    remove_route,
)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2

# =============================================================================
# COMMANDS
# =============================================================================

def cmd_routes_list(town_root: Path, args: argparse.Namespace) -> int:
    for route in RouteResolver(town_root).routes:
        print(f"{route.prefix}\t{route.path}")
    return EXIT_OK


def cmd_routes_add(town_root: Path, args: argparse.Namespace) -> int:
    append_route(town_root, Route(prefix=args.prefix, path=args.path))
    return EXIT_OK


def cmd_routes_remove(town_root: Path, args: argparse.Namespace) -> int:
    if not remove_route(town_root, args.prefix):
        print(f"No route for prefix {args.prefix!r}", file=sys.stderr)
        return EXIT_NOT_FOUND
    return EXIT_OK


def cmd_resolve(town_root: Path, args: argparse.Namespace) -> int:
    print(RouteResolver(town_root).resolve(args.identifier))
    return EXIT_OK


def cmd_exists(town_root: Path, args: argparse.Namespace) -> int:
    found = _client(args).exists(args.identifier, StoreContext.town(town_root))
    print("true" if found else "false")
    return EXIT_OK if found else EXIT_NOT_FOUND


def cmd_show(town_root: Path, args: argparse.Namespace) -> int:
    data = _client(args).show(args.identifier, StoreContext.town(town_root))
    print(json.dumps(data, indent=2))
    return EXIT_OK


def cmd_provision(town_root: Path, args: argparse.Namespace) -> int:
    route = provision_rig(town_root, args.path, args.prefix, client=_client(args))
    print(f"{route.prefix}\t{route.path}")
    return EXIT_OK


def _client(args: argparse.Namespace) -> StoreClient:
    return StoreClient(StoreInvoker(timeout=args.timeout))


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beadroute",
        description="Prefix routing for bead stores in a multi-rig town.",
    )
    parser.add_argument("--town", type=Path, default=None,
                        help="Town root (default: discovered from the current directory)")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Seconds before a bd invocation is killed")
    sub = parser.add_subparsers(dest="command", required=True)

    routes = sub.add_parser("routes", help="Inspect or edit routes.jsonl")
    routes_sub = routes.add_subparsers(dest="routes_command", required=True)
    routes_sub.add_parser("list").set_defaults(handler=cmd_routes_list)
    add = routes_sub.add_parser("add")
    add.add_argument("prefix")
    add.add_argument("path")
    add.set_defaults(handler=cmd_routes_add)
    remove = routes_sub.add_parser("remove")
    remove.add_argument("prefix")
    remove.set_defaults(handler=cmd_routes_remove)

    for name, handler in (("resolve", cmd_resolve), ("exists", cmd_exists), ("show", cmd_show)):
        p = sub.add_parser(name)
        p.add_argument("identifier")
        p.set_defaults(handler=handler)

    provision = sub.add_parser("provision", help="bd init a rig and add its route")
    provision.add_argument("prefix")
    provision.add_argument("path")
    provision.set_defaults(handler=cmd_provision)
    return parser


# =============================================================================
# MAIN LOGIC
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        # Only place the process working directory is consulted.
        town_root = args.town.resolve() if args.town else find_town_root(Path.cwd())
        return args.handler(town_root, args)
    except (RoutingError, ValueError) as exc:
        route_log(f"ERROR: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
