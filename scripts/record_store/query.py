"""Query predicates and match classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Iterable, Iterator

from .record import Record


@dataclass(frozen=True)
class Query:
    """Optional equality predicates, kept in priority order.

    ``id`` always comes first, then the entity's ``query_fields`` in their
    declared order, whatever order the caller passed them in.
    """

    predicates: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def build(cls, record_class: type[Record], id: int | None = None, **values: Any) -> Query:
        """Build a query for ``record_class``, dropping predicates that are None."""
        unknown = set(values) - set(record_class.query_fields)
        if unknown:
            raise ValueError(
                f"{record_class.record_type} cannot be queried by: {', '.join(sorted(unknown))}"
            )
        predicates: list[tuple[str, Any]] = []
        if id is not None:
            predicates.append(("id", id))
        for name in record_class.query_fields:
            value = values.get(name)
            if value is not None:
                predicates.append((name, value))
        return cls(tuple(predicates))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.predicates]

    def is_empty(self) -> bool:
        return not self.predicates


class MatchKind(StrEnum):
    NOT_FOUND = "not_found"
    UNIQUE = "unique"
    AMBIGUOUS = "ambiguous"


@dataclass
class MatchOutcome:
    """Result of a single-target match.

    ``counts`` has one entry per present predicate, including zeros, so the
    caller can report e.g. "Name matches: 2" / "Email matches: 0".
    """

    kind: MatchKind
    record: Record | None = None
    counts: dict[str, int] = field(default_factory=dict)


def _scan(records: Iterable[Record], query: Query) -> Iterator[tuple[Record, str]]:
    # First matching predicate wins: a record is counted once, under the
    # earliest predicate it satisfies.
    for record in records:
        for name, value in query.predicates:
            if getattr(record, name) == value:
                yield record, name
                break


def match_one(records: Iterable[Record], query: Query) -> MatchOutcome:
    """Classify ``query`` against ``records`` as not found, unique or ambiguous."""
    counts = {name: 0 for name in query.names}
    matched: list[Record] = []
    for record, name in _scan(records, query):
        counts[name] += 1
        matched.append(record)

    if not matched:
        return MatchOutcome(MatchKind.NOT_FOUND, counts=counts)
    if len(matched) > 1:
        return MatchOutcome(MatchKind.AMBIGUOUS, counts=counts)
    return MatchOutcome(MatchKind.UNIQUE, record=matched[0], counts=counts)


def match_all(records: Iterable[Record], query: Query) -> list[Record]:
    """Every record satisfying any predicate, in collection order. Empty means not found."""
    return [record for record, _ in _scan(records, query)]
