"""
Rubber CLI — Command-Line Interface
===================================

Command-line access to the facade operations.

Usage:
    rubber indices
    rubber exists people
    rubber create-index people --mappings '{"properties": {"name": {"type": "text"}}}'
    rubber mappings people _doc
    rubber get people _doc 42
    rubber search people '{"query": {"match": {"name": "joe"}}}'
    rubber all people
    rubber refresh people
    rubber delete-index people -f

Hosts and credentials come from --hosts / --api-key or RUBBER_* variables.
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from .config import Settings
from .core import Rubber
from .logs import setup_logging
from .node import Node


def get_hosts(args, settings: Settings) -> List[str]:
    """Extract hosts from args, falling back to settings."""
    if args.hosts:
        return args.hosts.split(",")
    return settings.host_list


def open_rubber(args, settings: Settings) -> Rubber:
    node = Node(settings)
    node.connect(get_hosts(args, settings), api_key=args.api_key)
    return Rubber(node)


def emit(value: Any) -> None:
    print(json.dumps(value, indent=2, default=str))


def cmd_indices(es: Rubber, args) -> int:
    """List all indices."""
    indices = es.list_indices()

    print(f"\n{'Index':<40} {'Health':<8} {'Docs':>12} {'Size':>10}")
    print("-" * 75)

    for idx in indices:
        print(
            f"{idx.index or '':<40} "
            f"{idx.health or '':<8} "
            f"{idx.docs_count or '':>12} "
            f"{idx.store_size or '':>10}"
        )
    return 0


def cmd_exists(es: Rubber, args) -> int:
    found = bool(es.exists(args.index))
    print("yes" if found else "no")
    return 0 if found else 1


def cmd_create_index(es: Rubber, args) -> int:
    """Create a new index."""
    spec = {"mappings": json.loads(args.mappings)}
    if args.settings:
        spec["settings"] = json.loads(args.settings)
    created = es.create_index(args.index, spec)
    print(f"Created index: {args.index}" if created else f"Index not created: {args.index}")
    return 0 if created else 1


def cmd_delete_index(es: Rubber, args) -> int:
    """Delete an index."""
    if not args.force:
        confirm = input(f"Delete index '{args.index}'? [y/N] ")
        if confirm.lower() != "y":
            print("Aborted.")
            return 1

    deleted = es.delete_index(args.index)
    print(f"Deleted index: {args.index}" if deleted else f"Index not deleted: {args.index}")
    return 0 if deleted else 1


def cmd_mappings(es: Rubber, args) -> int:
    body = es.mappings(args.index, args.type)
    if body is None:
        print(f"No mappings for {args.index}", file=sys.stderr)
        return 1
    emit(body)
    return 0


def cmd_get(es: Rubber, args) -> int:
    doc = es.get(args.index, args.type, args.id)
    if doc is None:
        print(f"Not found: {args.index}/{args.type}/{args.id}", file=sys.stderr)
        return 1
    emit(doc)
    return 0


def cmd_search(es: Rubber, args) -> int:
    """Search an index."""
    results = es.search(args.index, json.loads(args.query))
    if results is None:
        print(f"No such index: {args.index}", file=sys.stderr)
        return 1
    emit([{"id": hit.id, "source": hit.source} for hit in results])
    return 0


def cmd_all(es: Rubber, args) -> int:
    emit([{"id": hit.id, "source": hit.source} for hit in es.all(args.index)])
    return 0


def cmd_refresh(es: Rubber, args) -> int:
    es.refresh_index(args.index)
    print(f"Refreshed index: {args.index}")
    return 0


COMMANDS = {
    "indices": cmd_indices,
    "exists": cmd_exists,
    "create-index": cmd_create_index,
    "delete-index": cmd_delete_index,
    "mappings": cmd_mappings,
    "get": cmd_get,
    "search": cmd_search,
    "all": cmd_all,
    "refresh": cmd_refresh,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rubber",
        description="Rubber — Elasticsearch comfort functions",
    )

    # Global options
    parser.add_argument(
        "--hosts",
        help="Elasticsearch hosts (comma-separated)",
        default=None,
    )
    parser.add_argument(
        "--api-key",
        dest="api_key",
        help="Elasticsearch API key",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Log level (debug, info, warning, error)",
        default=None,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("indices", help="List all indices")

    exists_parser = subparsers.add_parser("exists", help="Check an index exists")
    exists_parser.add_argument("index", help="Index name")

    create_parser = subparsers.add_parser("create-index", help="Create an index")
    create_parser.add_argument("index", help="Index name")
    create_parser.add_argument("--mappings", required=True, help="Mappings as JSON")
    create_parser.add_argument("--settings", help="Settings as JSON (replaces the defaults)")

    delete_parser = subparsers.add_parser("delete-index", help="Delete an index")
    delete_parser.add_argument("index", help="Index name")
    delete_parser.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    mappings_parser = subparsers.add_parser("mappings", help="Show index mappings")
    mappings_parser.add_argument("index", help="Index name")
    mappings_parser.add_argument("type", nargs="?", help="Document type")

    get_parser = subparsers.add_parser("get", help="Fetch a document")
    get_parser.add_argument("index", help="Index name")
    get_parser.add_argument("type", help="Document type")
    get_parser.add_argument("id", help="Document id")

    search_parser = subparsers.add_parser("search", help="Search an index")
    search_parser.add_argument("index", help="Index name")
    search_parser.add_argument("query", help="Search body as JSON")

    all_parser = subparsers.add_parser("all", help="Dump every document of an index")
    all_parser.add_argument("index", help="Index name")

    refresh_parser = subparsers.add_parser("refresh", help="Refresh an index")
    refresh_parser.add_argument("index", help="Index name")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 2

    settings = Settings()
    setup_logging(args.log_level or settings.log_level, settings.log_format)

    with open_rubber(args, settings) as es:
        return command(es, args)


if __name__ == "__main__":
    sys.exit(main())
