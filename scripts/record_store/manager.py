"""RecordManager — find, confirm, apply and persist for one collection."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from .confirm import Confirmation, ConsoleConfirmation
from .errors import (
    AmbiguousQuery,
    DuplicateField,
    InvalidField,
    NoQueryProvided,
    RecordIndexError,
    RecordNotFound,
)
from .ids import generate_id
from .query import MatchKind, Query, match_all, match_one
from .record import Record
from .record_list import RecordList


@dataclass
class MutationResult:
    """Before/after snapshots of one mutated record.

    ``after`` is None for a deletion. When ``cancelled`` is set the operator
    declined a confirmation and nothing was written.
    """

    before: Record | None = None
    after: Record | None = None
    cancelled: bool = False

    def changes(self) -> dict[str, tuple[Any, Any]]:
        """Fields whose value differs between ``before`` and ``after``."""
        if self.before is None or self.after is None:
            return {}
        old, new = self.before.to_dict(), self.after.to_dict()
        return {name: (old[name], new[name]) for name in old if old[name] != new[name]}


class RecordManager:
    """Generic create / update / delete / list engine over one ``RecordList``.

    Nothing here knows about users or videos; the entity's ``query_fields``,
    ``unique_fields`` and ``guarded_fields`` drive every decision. Each
    mutating operation writes the whole collection once, and only after it
    has fully succeeded in memory. Progress goes to the optional ``log``
    callable; the engine never opens a log file of its own.
    """

    def __init__(
        self,
        records: RecordList,
        confirmation: Confirmation | None = None,
        id_factory: Callable[[Iterable[int]], int] | None = None,
        log: Callable[[str], None] | None = None,
    ):
        self.records = records
        self.record_class = records.record_class
        self.confirmation = confirmation or ConsoleConfirmation()
        self.log = log
        self._id_factory = id_factory or partial(generate_id, log=log)

    @property
    def kind(self) -> str:
        return str(self.record_class.record_type)

    def query(self, id: int | None = None, **values: Any) -> Query:
        """Shortcut for ``Query.build`` bound to this collection's record class."""
        return Query.build(self.record_class, id=id, **values)

    # -- Lookup --

    def find(self, query: Query) -> Record:
        """Resolve ``query`` to exactly one record."""
        self._require(query)
        outcome = match_one(self.records, query)
        if outcome.kind is MatchKind.NOT_FOUND:
            raise RecordNotFound(self.kind)
        if outcome.kind is MatchKind.AMBIGUOUS:
            raise AmbiguousQuery(self.kind, outcome.counts)
        return outcome.record

    def list(self, query: Query | None = None) -> list[Record]:
        """All records when ``query`` is None, otherwise every record matching any predicate."""
        if query is None:
            return self.records.records
        self._require(query)
        found = match_all(self.records, query)
        if not found:
            raise RecordNotFound(self.kind)
        return found

    # -- Mutations --

    def create(self, **fields: Any) -> Record:
        """Validate, allocate an id, append and persist a new record."""
        if "id" in fields:
            raise InvalidField("id", "ids are assigned by the store")
        self._check_unique(fields)
        record = self._validate({"id": self._id_factory(self.records.ids()), **fields})
        self.records.append(record)
        self.records.save()
        self._log(f"Created {self.kind} {record.id}")
        return record

    def update(self, query: Query, **changes: Any) -> MutationResult:
        """Apply the non-None ``changes`` to the single record matching ``query``.

        Fields left out (or None) keep their current value. Changing a guarded
        field asks for confirmation first.
        """
        self._require(query)
        if "id" in changes:
            raise InvalidField("id", "ids are immutable")
        changes = {name: value for name, value in changes.items() if value is not None}

        before = self.find(query)
        index = self._locate(before)
        after = self._validate({**before.to_dict(), **changes})
        self._check_unique(changes, exclude_id=before.id)

        for name in self.record_class.guarded_fields:
            if name not in changes:
                continue
            if not self.confirmation.confirm(
                f"Are you sure you want to set the {name} of {after.display_name} to {changes[name]}?",
                decline_message=f"{self.kind.capitalize()} update aborted.",
                default=True,
            ):
                self._log(f"Update of {self.kind} {before.id} cancelled at {name} confirmation")
                return MutationResult(before=before, after=before, cancelled=True)

        self.records.replace(index, after)
        self.records.save()
        result = MutationResult(before=before, after=after)
        self._log(f"Updated {self.kind} {before.id}: {sorted(result.changes())}")
        return result

    def increment(self, query: Query, field: str, amount: int = 1) -> MutationResult:
        """Add ``amount`` to a counter field of the single record matching ``query``."""
        self._require(query)
        if field not in self.record_class.field_names():
            raise InvalidField(field, f"not a {self.kind} field")
        if amount < 0:
            raise InvalidField("amount", "must not be negative")

        before = self.find(query)
        index = self._locate(before)
        after = self._validate({**before.to_dict(), field: before[field] + amount})

        self.records.replace(index, after)
        self.records.save()
        self._log(f"Added {amount} to {field} of {self.kind} {before.id}")
        return MutationResult(before=before, after=after)

    def delete(self, query: Query) -> MutationResult:
        """Remove the single record matching ``query`` after confirmation."""
        target = self.find(query)
        index = self._locate(target)
        if not self.confirmation.confirm(
            f"Are you sure you want to delete this {self.kind}?",
            detail=target.describe(),
            decline_message=f"{self.kind.capitalize()} deletion cancelled.",
            default=True,
        ):
            self._log(f"Deletion of {self.kind} {target.id} cancelled")
            return MutationResult(before=target, cancelled=True)

        removed = self.records.pop(index)
        self.records.save()
        self._log(f"Deleted {self.kind} {removed.id}")
        return MutationResult(before=removed)

    # -- Internals --

    def _log(self, message: str) -> None:
        if self.log is not None:
            self.log(message)

    def _require(self, query: Query) -> None:
        if query.is_empty():
            raise NoQueryProvided(self.record_class.query_fields)

    def _locate(self, record: Record) -> int:
        # Re-locate by equality; positions are never carried over from the match.
        index = self.records.index_of(record)
        if index is None:
            raise RecordIndexError(self.kind, record.id)
        return index

    def _check_unique(self, values: dict[str, Any], exclude_id: int | None = None) -> None:
        for name in self.record_class.unique_fields:
            if name not in values:
                continue
            for record in self.records:
                if record.id == exclude_id:
                    continue
                if record[name] == values[name]:
                    raise DuplicateField(name, values[name])

    def _validate(self, data: dict[str, Any]) -> Record:
        try:
            return self.record_class.from_dict(data)
        except ValidationError as exc:
            error = exc.errors()[0]
            name = ".".join(str(part) for part in error["loc"]) or self.kind
            raise InvalidField(name, error["msg"]) from exc
