"""Operator-facing messages for command results and engine errors."""

from __future__ import annotations

import sys

from record_store import (
    AmbiguousQuery,
    DuplicateField,
    MutationResult,
    RecordNotFound,
    RecordStoreError,
)

# What each action is called in failure messages.
ACTION_VERBS = {
    "create": "Create",
    "update": "Update",
    "delete": "Delete",
    "add": "Update",
}


def field_label(name: str) -> str:
    return "ID" if name == "id" else name.capitalize()


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def report_error(exc: RecordStoreError, action: str, kind: str) -> None:
    """Print ``exc`` to stderr, prefixed by the action that failed."""
    if isinstance(exc, DuplicateField) and action == "create":
        eprint(f"{kind.capitalize()} not generated. Given {exc.field} already exists")
        return
    verb = ACTION_VERBS.get(action)
    if verb and isinstance(exc, (AmbiguousQuery, RecordNotFound, DuplicateField)):
        eprint(f"{verb} failed. {exc}")
    else:
        eprint(str(exc))
    if isinstance(exc, AmbiguousQuery):
        for name, count in exc.counts.items():
            eprint(f"{field_label(name)} matches: {count}")


def report_changes(result: MutationResult, fields: list[str]) -> None:
    """One "X changed from a to b" line per requested field."""
    for name in fields:
        print(f"{field_label(name)} changed from {result.before[name]} to {result.after[name]}")
