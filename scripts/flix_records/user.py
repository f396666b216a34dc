"""User — a named account with a unique email address."""

from __future__ import annotations

from typing import ClassVar

from record_store import Record, RecordType


class User(Record):
    """A user record.

    Stored one per line in ``<records_path>/user.jsonl``. Users can be looked
    up by id, name or email; no two users share an email.
    """

    record_type: ClassVar[str] = RecordType.USER
    query_fields: ClassVar[tuple[str, ...]] = ("name", "email")
    unique_fields: ClassVar[tuple[str, ...]] = ("email",)

    name: str
    email: str
