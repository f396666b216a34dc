"""FlixRecords — central manager for flixrec record collections.

Provides lazy access to:
- ``users``  — ``RecordManager`` over the ``User`` collection
- ``videos`` — ``RecordManager`` over the ``Video`` collection

Usage::

    from flix_records import FlixRecords

    records = FlixRecords(records_path=Path("/tmp/flix"))
    user = records.users.create(name="ada", email="ada@example.com")
"""

from __future__ import annotations

from pathlib import Path

from flix_utils.conf import collection_path
from flix_utils.log import flix_log
from record_store import Confirmation, ConsoleConfirmation, Record, RecordList, RecordManager

from .user import User
from .video import Video


class FlixRecords:
    """Manages flixrec record collections with lazy initialization."""

    def __init__(self, records_path: Path | None = None, confirmation: Confirmation | None = None):
        self._records_path = records_path
        self._confirmation = confirmation
        self._users: RecordManager | None = None
        self._videos: RecordManager | None = None

    @property
    def records_path(self) -> Path:
        if self._records_path is not None:
            return Path(self._records_path)
        from flix_utils.conf import RECORDS_PATH
        return RECORDS_PATH

    @property
    def confirmation(self) -> Confirmation:
        if self._confirmation is None:
            self._confirmation = ConsoleConfirmation()
        return self._confirmation

    def _manager(self, record_class: type[Record]) -> RecordManager:
        records = RecordList(
            list_path=collection_path(self.records_path, record_class.record_type),
            record_class=record_class,
            log=flix_log,
        )
        return RecordManager(records, confirmation=self.confirmation, log=flix_log)

    @property
    def users(self) -> RecordManager:
        if self._users is None:
            self._users = self._manager(User)
        return self._users

    @property
    def videos(self) -> RecordManager:
        if self._videos is None:
            self._videos = self._manager(Video)
        return self._videos

    def reset(self) -> None:
        """Clear cached collections so the next access re-loads from disk."""
        self._users = None
        self._videos = None
