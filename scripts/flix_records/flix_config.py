"""FlixConfig — a typed record for global flixrec configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from record_store import StoreCorrupt


@dataclass
class FlixConfig:
    """Persistent configuration record.

    Stored at ``~/.flixrec/config.json``. A missing file means defaults.
    """

    records_path: str | None = None
    log_enabled: bool = True
    log_to_stderr: bool = False
    source_file: str | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        d = asdict(self)
        d.pop("source_file", None)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> FlixConfig:
        """Deserialize from a plain dict. Unknown keys are ignored.

        Values are validated against the field types; a wrong type raises
        pydantic's ``ValidationError``.
        """
        known = {f.name for f in fields(cls)} - {"source_file"}
        return TypeAdapter(cls).validate_python({k: v for k, v in data.items() if k in known})

    @classmethod
    def from_json(cls, path: str | Path) -> FlixConfig:
        """Load the config from a JSON file, or return defaults if missing.

        Unreadable JSON or a wrongly typed value raises ``StoreCorrupt``.
        """
        p = Path(path)
        if p.exists():
            try:
                data = json.loads(p.read_text(encoding="utf-8"))
            except UnicodeDecodeError as exc:
                raise StoreCorrupt(p, f"not valid UTF-8 ({exc.reason})") from exc
            except json.JSONDecodeError as exc:
                raise StoreCorrupt(p, exc.msg) from exc
            if not isinstance(data, dict):
                raise StoreCorrupt(p, "expected an object")
            try:
                config = cls.from_dict(data)
            except ValidationError as exc:
                error = exc.errors()[0]
                name = ".".join(str(part) for part in error["loc"])
                raise StoreCorrupt(p, f"{name}: {error['msg']}") from exc
        else:
            config = cls()
        config.source_file = str(p)
        return config

    def to_json(self, path: str | Path | None = None, indent: int = 2) -> None:
        """Write this config to a JSON file."""
        p = Path(path or self.source_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(
            json.dumps(self.to_dict(), indent=indent, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        self.source_file = str(p)

    def resolve_records_path(self, override: str | Path | None, default: Path) -> Path:
        """``override`` (the --records-path flag) wins, then this config, then ``default``."""
        if override is not None:
            return Path(override).expanduser()
        if self.records_path:
            return Path(self.records_path).expanduser()
        return default
