"""Command-line entry point — inspect and edit a store file."""

from __future__ import annotations

import argparse
import json
import logging
import sqlite3
import sys

from sqlitecollections.config import load_config
from sqlitecollections.errors import DuplicateKeyError, StoreError
from sqlitecollections.indexed import IndexedStore
from sqlitecollections.registry import open_store, registered_kinds

logger = logging.getLogger("sqlitecollections")

_handler: logging.Handler | None = None

_READ_COMMANDS = {"dump", "count", "get", "backup"}


def _setup_logging(log_level: str, log_format: str) -> None:
    """Configure root logger based on config."""
    global _handler
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps(
                {
                    "time": "%(asctime)s",
                    "level": "%(levelname)s",
                    "logger": "%(name)s",
                    "message": "%(message)s",
                }
            )
        )
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.setLevel(level)
    root.addHandler(handler)
    _handler = handler


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlitecollections",
        description="Inspect and edit SQLite-backed key-value and list stores.",
    )
    parser.add_argument("--kind", choices=registered_kinds(), default="keyed")
    parser.add_argument("--table", default=None, help="table name (defaults per store kind)")
    parser.add_argument("--env-file", default=None, help="optional .env file with store settings")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("dump", help="print every entry as a JSON line")
    p.add_argument("path")

    p = sub.add_parser("count", help="print the number of entries")
    p.add_argument("path")

    p = sub.add_parser("get", help="print the value stored at a key or index")
    p.add_argument("path")
    p.add_argument("key")

    p = sub.add_parser("set", help="store a value (omit VALUE to store null)")
    p.add_argument("path")
    p.add_argument("key")
    p.add_argument("value", nargs="?", default=None)

    p = sub.add_parser("add", help="keyed: add KEY [VALUE] without replacing; indexed: append VALUE")
    p.add_argument("path")
    p.add_argument("items", nargs="+")

    p = sub.add_parser("delete", help="remove a key or index")
    p.add_argument("path")
    p.add_argument("key")

    p = sub.add_parser("compact", help="renumber an indexed store densely")
    p.add_argument("path")

    p = sub.add_parser("backup", help="copy the store file")
    p.add_argument("path")
    p.add_argument("destination")

    return parser


def _position(store, raw: str, parser: argparse.ArgumentParser):
    """Convert a CLI key argument to the store's key type."""
    if not isinstance(store, IndexedStore):
        return raw
    try:
        return int(raw)
    except ValueError:
        parser.error(f"index must be an integer, got {raw!r}")


def _run(store, args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    indexed = isinstance(store, IndexedStore)

    if args.command == "dump":
        if indexed:
            for index, value in store.entries():
                print(json.dumps({"index": index, "value": value}))
        else:
            for key, value in store.iterate():
                print(json.dumps({"key": key, "value": value}))
        return 0

    if args.command == "count":
        print(store.count())
        return 0

    if args.command == "get":
        position = _position(store, args.key, parser)
        if indexed:
            print(json.dumps(store.get(position)))
            return 0
        found, value = store.try_get(position)
        if not found:
            print(f"not found: {args.key}", file=sys.stderr)
            return 1
        print(json.dumps(value))
        return 0

    if args.command == "set":
        store.set(_position(store, args.key, parser), args.value)
        return 0

    if args.command == "add":
        if indexed:
            if len(args.items) != 1:
                parser.error("indexed add takes exactly one VALUE")
            print(store.add(args.items[0]))
        else:
            if len(args.items) > 2:
                parser.error("keyed add takes KEY [VALUE]")
            key, value = args.items[0], (args.items[1] if len(args.items) > 1 else None)
            store.add(key, value)
        return 0

    if args.command == "delete":
        position = _position(store, args.key, parser)
        removed = store.remove_at(position) if indexed else store.remove(position)
        if not removed:
            print(f"not found: {args.key}", file=sys.stderr)
            return 1
        return 0

    if args.command == "compact":
        if not indexed:
            print("error: compact is only available for indexed stores", file=sys.stderr)
            return 2
        print(store.compact())
        return 0

    if args.command == "backup":
        print(store.backup(args.destination))
        return 0

    parser.error(f"unknown command: {args.command}")
    return 2


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, open the store, and run one command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.env_file)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _setup_logging(config.log_level, config.log_format)

    try:
        with open_store(
            args.kind,
            args.path,
            read_only=args.command in _READ_COMMANDS,
            table_name=args.table,
            config=config,
        ) as store:
            return _run(store, args, parser)
    except DuplicateKeyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (StoreError, ValueError, IndexError, TypeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except sqlite3.Error:
        logger.exception("Store operation failed")
        return 2


if __name__ == "__main__":
    sys.exit(main())
