"""create / update / delete / list handlers shared by every entity kind."""

from __future__ import annotations

from typing import Any

from record_store import Query, RecordManager

from .reporting import report_changes


def handle_create(manager: RecordManager, fields: dict[str, Any]) -> int:
    record = manager.create(**fields)
    print(f"{manager.kind.capitalize()} created successfully")
    print(f"ID: {record.id}")
    return 0


def handle_update(manager: RecordManager, query: Query, changes: dict[str, Any]) -> int:
    """Apply ``changes`` and print a line per changed field."""
    requested = [name for name, value in changes.items() if value is not None]
    result = manager.update(query, **changes)
    if result.cancelled:
        return 0
    print(f"{manager.kind.capitalize()} updated successfully.")
    report_changes(result, requested)
    return 0


def handle_delete(manager: RecordManager, query: Query) -> int:
    result = manager.delete(query)
    if result.cancelled:
        return 0
    print(f"{manager.kind.capitalize()} deleted successfully.")
    return 0


def handle_list(manager: RecordManager, query: Query | None) -> int:
    """Print every record, or every record matching ``query``."""
    for record in manager.list(query):
        print(record.describe())
    return 0
