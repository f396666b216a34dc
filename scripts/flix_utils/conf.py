"""flixrec - Central path configuration."""

from pathlib import Path

USER_HOME = Path.home()
FLIX_HOME = USER_HOME / ".flixrec"

RECORDS_PATH = FLIX_HOME / "records"
CONFIG_PATH = FLIX_HOME / "config.json"
LOG_FILE = FLIX_HOME / "flixrec.log"

COLLECTION_SUFFIX = ".jsonl"


def collection_path(records_path: Path, record_type: str) -> Path:
    """Return the collection file for a record type.

    Path: <records_path>/<record_type>.jsonl
    The directory is not created here; the store creates it on first save.
    """
    return Path(records_path) / f"{record_type}{COLLECTION_SUFFIX}"
