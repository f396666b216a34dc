"""Errors raised by the record store engine."""

from __future__ import annotations

from pathlib import Path


class RecordStoreError(Exception):
    """Base class for every engine error the command shell reports."""


class NoQueryProvided(RecordStoreError):
    """An update/delete/lookup was invoked without any predicate."""

    def __init__(self, query_fields: tuple[str, ...] = ()):
        self.query_fields = query_fields
        names = ["ID", *query_fields]
        if len(names) <= 2:
            hint = " or ".join(names)
        else:
            hint = ", ".join(names[:-1]) + ", or " + names[-1]
        super().__init__(f"No query given. Please provide an {hint}")


class RecordNotFound(RecordStoreError):
    """Zero records matched the query."""

    def __init__(self, record_type: str):
        self.record_type = record_type
        super().__init__(f"No {record_type} found from given query.")


class AmbiguousQuery(RecordStoreError):
    """More than one record matched a single-target query.

    ``counts`` maps each present predicate ("id" first, then the entity's
    query fields) to the number of records counted under it.
    """

    def __init__(self, record_type: str, counts: dict[str, int]):
        self.record_type = record_type
        self.counts = dict(counts)
        super().__init__(f"Multiple {record_type}s found from given query.")


class DuplicateField(RecordStoreError):
    """A uniqueness-constrained field value already exists in the collection."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Given {field} already exists: {value!r}")


class InvalidField(RecordStoreError):
    """A proposed field value failed validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {reason}")


class StoreCorrupt(RecordStoreError):
    """The collection file exists but cannot be parsed. Never repaired."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Collection file {self.path} is corrupt: {reason}")


class RecordIndexError(RecordStoreError):
    """A matched record could not be re-located in its collection.

    This is an internal invariant breach; the operation is aborted before
    anything is written.
    """

    def __init__(self, record_type: str, uid: int):
        self.record_type = record_type
        self.uid = uid
        super().__init__(
            f"{record_type.capitalize()} {uid} was found but its index wasn't. This should never happen."
        )
