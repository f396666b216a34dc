"""Video — a named video with a view counter."""

from __future__ import annotations

from typing import ClassVar

from record_store import U32, Record, RecordType


class Video(Record):
    """A video record, stored in ``<records_path>/video.jsonl``.

    Overwriting ``views`` through an update is guarded by a confirmation;
    adding views is not.
    """

    record_type: ClassVar[str] = RecordType.VIDEO
    query_fields: ClassVar[tuple[str, ...]] = ("name",)
    guarded_fields: ClassVar[tuple[str, ...]] = ("views",)

    name: str
    views: U32 = 0
