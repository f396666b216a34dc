#!/usr/bin/env python3
"""
flixrec - Main Entry Point
Routes user / video / view commands to the record engine.
"""
import argparse
import sys

from command_handlers import (
    handle_add_views,
    handle_create,
    handle_delete,
    handle_list,
    handle_show_views,
    handle_update,
    report_error,
)
from command_handlers.reporting import eprint
from flix_records import FlixConfig, FlixRecords, User, Video
from flix_utils import conf, log
from flix_utils.log import flix_log
from record_store import (
    U32_MAX,
    AutoConfirmation,
    ConsoleConfirmation,
    Record,
    RecordIndexError,
    RecordManager,
    RecordStoreError,
    StoreCorrupt,
)

# =============================================================================
# EXIT CODES
# =============================================================================

EXIT_OK = 0
EXIT_FAILED = 1  # no query, not found, ambiguous, duplicate, invalid field
EXIT_CORRUPT = 2
EXIT_INTERNAL = 3

# =============================================================================
# ENTITY KINDS
# Each kind gets create / update / delete / list subcommands built from its
# declared fields.
# =============================================================================

ENTITIES: dict[str, type[Record]] = {
    "user": User,
    "video": Video,
}

# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def u32(text: str) -> int:
    """argparse type for unsigned 32-bit integers."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if not 0 <= value <= U32_MAX:
        raise argparse.ArgumentTypeError(f"{value} is outside 0..{U32_MAX}")
    return value


def _field_type(record_class: type[Record], name: str):
    return u32 if record_class.model_fields[name].annotation is int else str


def _option(name: str) -> str:
    return "--" + name.replace("_", "-")


def _add_query_options(parser: argparse.ArgumentParser, record_class: type[Record], prefix: str = "") -> None:
    kind = record_class.record_type
    parser.add_argument(_option(prefix + "id"), type=u32, default=None,
                        help=f"The ID of the {kind} to query")
    for name in record_class.query_fields:
        parser.add_argument(_option(prefix + name), type=_field_type(record_class, name), default=None,
                            help=f"The {name} of the {kind} to query")


def _add_entity_parser(subparsers, kind: str, record_class: type[Record]) -> None:
    entity = subparsers.add_parser(kind, help=f"Create, update, delete, or list {kind}s")
    actions = entity.add_subparsers(dest="action", required=True)

    create = actions.add_parser("create", help=f"Create a new {kind}")
    for name in record_class.field_names():
        if record_class.model_fields[name].is_required():
            create.add_argument(name, type=_field_type(record_class, name), help=f"The {name} of the {kind}")

    update = actions.add_parser("update", help=f"Update an existing {kind} by any of its query fields")
    _add_query_options(update, record_class, prefix="query_")
    for name in record_class.field_names():
        update.add_argument(_option("new_" + name), type=_field_type(record_class, name), default=None,
                            help=f"The new {name} of the {kind}")

    delete = actions.add_parser("delete", help=f"Delete an existing {kind}")
    _add_query_options(delete, record_class)

    listing = actions.add_parser("list", help=f"List one or more {kind}s")
    listing.add_argument("-a", "--all", action="store_true", help=f"Show all {kind}s")
    _add_query_options(listing, record_class)


def _add_view_parser(subparsers) -> None:
    view = subparsers.add_parser("view", help="Add or show views on a video")
    actions = view.add_subparsers(dest="action", required=True)

    add = actions.add_parser("add", help="Add one or more views to a video")
    _add_query_options(add, Video)
    add.add_argument("number_to_add", type=u32, nargs="?", default=1, help="The number of views to add")

    show = actions.add_parser("show", help="Show the views on a video")
    _add_query_options(show, Video)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flixrec",
        description="Manage users, videos and view counts stored in local record files",
    )
    parser.add_argument("--records-path", default=None,
                        help="Directory holding the collection files (default: ~/.flixrec/records)")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Answer yes to every confirmation prompt")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Mirror log lines to stderr")

    subparsers = parser.add_subparsers(dest="entity", required=True)
    for kind, record_class in ENTITIES.items():
        _add_entity_parser(subparsers, kind, record_class)
    _add_view_parser(subparsers)
    return parser

# =============================================================================
# DISPATCH
# =============================================================================

def _query_from_args(manager: RecordManager, args: argparse.Namespace, prefix: str = ""):
    values = {name: getattr(args, prefix + name) for name in manager.record_class.query_fields}
    return manager.query(id=getattr(args, prefix + "id"), **values)


def dispatch(records: FlixRecords, args: argparse.Namespace) -> int:
    """Run the handler selected by ``args`` and return its exit code."""
    if args.entity == "view":
        query = _query_from_args(records.videos, args)
        if args.action == "add":
            return handle_add_views(records.videos, query, args.number_to_add)
        return handle_show_views(records.videos, query)

    manager: RecordManager = getattr(records, f"{args.entity}s")
    field_names = manager.record_class.field_names()

    if args.action == "create":
        fields = {name: getattr(args, name) for name in field_names if hasattr(args, name)}
        return handle_create(manager, fields)
    if args.action == "update":
        changes = {name: getattr(args, "new_" + name) for name in field_names}
        return handle_update(manager, _query_from_args(manager, args, prefix="query_"), changes)
    if args.action == "delete":
        return handle_delete(manager, _query_from_args(manager, args))
    query = None if args.all else _query_from_args(manager, args)
    return handle_list(manager, query)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "all", False):
        record_class = ENTITIES[args.entity]
        names = ["id", *record_class.query_fields]
        if any(getattr(args, name) is not None for name in names):
            parser.error("--all cannot be combined with a query")

    try:
        config = FlixConfig.from_json(conf.CONFIG_PATH)
    except StoreCorrupt as exc:
        eprint(str(exc))
        return EXIT_CORRUPT
    log.LOG = config.log_enabled
    log.LOG_TO_STDERR = config.log_to_stderr or args.verbose

    confirmation = AutoConfirmation(True) if args.yes else ConsoleConfirmation()
    records = FlixRecords(
        records_path=config.resolve_records_path(args.records_path, conf.RECORDS_PATH),
        confirmation=confirmation,
    )
    kind = "video" if args.entity == "view" else args.entity
    flix_log(f"Command: {args.entity} {args.action} (records: {records.records_path})")

    try:
        return dispatch(records, args)
    except StoreCorrupt as exc:
        flix_log(f"ERROR: {exc}")
        eprint(str(exc))
        return EXIT_CORRUPT
    except RecordIndexError as exc:
        flix_log(f"INTERNAL ERROR: {exc}")
        eprint(f"Internal error: {exc}")
        return EXIT_INTERNAL
    except RecordStoreError as exc:
        flix_log(f"{args.entity} {args.action} failed: {exc}")
        report_error(exc, args.action, kind)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
