"""File-backed record storage engine."""

from .confirm import AutoConfirmation, Confirmation, ConsoleConfirmation
from .errors import (
    AmbiguousQuery,
    DuplicateField,
    InvalidField,
    NoQueryProvided,
    RecordIndexError,
    RecordNotFound,
    RecordStoreError,
    StoreCorrupt,
)
from .ids import generate_id
from .manager import MutationResult, RecordManager
from .query import MatchKind, MatchOutcome, Query, match_all, match_one
from .record import U32, U32_MAX, Record
from .record_list import RecordList
from .record_types import RecordType
