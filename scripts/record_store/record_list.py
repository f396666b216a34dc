"""A typed collection of Records persisted as one JSONL snapshot."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from pydantic import ValidationError

from .errors import StoreCorrupt
from .record import Record


@dataclass
class RecordList:
    """Ordered collection of records persisted to a single file.

    The whole collection is read into memory by ``load`` and written back in
    full by ``save``. Each record is one JSON object per line, fields in
    declaration order, so saving an unchanged collection reproduces the file
    byte for byte.

    ``save`` writes a sibling temp file and ``os.replace``-s it over
    ``list_path``; readers see either the old or the new snapshot, never a
    mix. There is no locking: two processes doing load -> mutate -> save on
    the same file race, and the last writer wins. The replacement keeps the
    permissions of the file it replaces; a new file gets the umask default.
    """

    list_path: Path
    record_class: type[Record] = field(default=Record)
    log: Callable[[str], None] | None = field(default=None, repr=False, compare=False)
    _records: list[Record] = field(default_factory=list, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self.list_path = Path(self.list_path)

    # -- Persistence --

    def load(self) -> list[Record]:
        """Read all records from disk into memory.

        A missing file is an empty collection. A file that cannot be parsed
        raises ``StoreCorrupt``.
        """
        self._records = self._load_jsonl()
        self._loaded = True
        self._log(f"Loaded {len(self._records)} {self.record_class.record_type} record(s) from {self.list_path}")
        return list(self._records)

    def save(self) -> None:
        """Persist all in-memory records to disk, replacing the file atomically."""
        self._ensure_loaded()
        self.list_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.list_path.name}.", suffix=".tmp", dir=self.list_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                for record in self._records:
                    fh.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.list_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self._log(f"Saved {len(self._records)} {self.record_class.record_type} record(s) to {self.list_path}")

    # -- In-memory mutation (persist with ``save``) --

    def append(self, record: Record) -> None:
        self._ensure_loaded()
        self._records.append(record)

    def replace(self, index: int, record: Record) -> None:
        self._ensure_loaded()
        self._records[index] = record

    def pop(self, index: int) -> Record:
        self._ensure_loaded()
        return self._records.pop(index)

    def index_of(self, record: Record) -> int | None:
        """Position of the first record equal to ``record``, or None."""
        self._ensure_loaded()
        for i, r in enumerate(self._records):
            if r == record:
                return i
        return None

    # -- Collection access --

    @property
    def records(self) -> list[Record]:
        self._ensure_loaded()
        return list(self._records)

    def ids(self) -> set[int]:
        self._ensure_loaded()
        return {r.id for r in self._records}

    def __iter__(self) -> Iterator[Record]:
        self._ensure_loaded()
        return iter(list(self._records))

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._records)

    # -- JSONL backend --

    def _load_jsonl(self) -> list[Record]:
        if not self.list_path.exists():
            return []
        records: list[Record] = []
        seen_ids: set[int] = set()
        try:
            with open(self.list_path, "r", encoding="utf-8") as fh:
                for lineno, line in enumerate(fh, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    record = self._parse_line(line, lineno)
                    if record.id in seen_ids:
                        raise StoreCorrupt(self.list_path, f"line {lineno}: duplicate id {record.id}")
                    seen_ids.add(record.id)
                    records.append(record)
        except UnicodeDecodeError as exc:
            raise StoreCorrupt(self.list_path, f"not valid UTF-8 ({exc.reason})") from exc
        return records

    def _parse_line(self, line: str, lineno: int) -> Record:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise StoreCorrupt(self.list_path, f"line {lineno}: {exc.msg}") from exc
        if not isinstance(data, dict):
            raise StoreCorrupt(self.list_path, f"line {lineno}: expected an object")
        try:
            return self.record_class.from_dict(data)
        except ValidationError as exc:
            raise StoreCorrupt(
                self.list_path, f"line {lineno}: {exc.error_count()} invalid field(s)"
            ) from exc

    # -- Internals --

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(os.stat(self.list_path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _log(self, message: str) -> None:
        if self.log is not None:
            self.log(message)
