"""Record type constants used across the record_store layer."""

from enum import StrEnum


class RecordType(StrEnum):
    USER = "user"
    VIDEO = "video"
