"""Base record — pure data contract shared by every entity kind.

No filesystem I/O here; see ``RecordList`` for persistence.

An entity kind subclasses ``Record``, adds its fields, and declares its
capabilities as class variables. The engine only ever talks to those
capabilities, never to a concrete entity.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound="Record")

U32_MAX = 2**32 - 1

# Unsigned 32-bit integer: ids and counters.
U32 = Annotated[int, Field(ge=0, le=U32_MAX)]


class Record(BaseModel):
    """Base record persisted as one line of a collection file."""

    model_config = ConfigDict(
        extra="forbid",
        use_enum_values=True,
    )

    # Collection file name stem.
    record_type: ClassVar[str] = ""
    # Queryable named fields, in predicate priority order (after ``id``).
    query_fields: ClassVar[tuple[str, ...]] = ()
    # Fields whose values must be unique within the collection.
    unique_fields: ClassVar[tuple[str, ...]] = ()
    # Fields whose overwrite on update needs operator confirmation.
    guarded_fields: ClassVar[tuple[str, ...]] = ()

    id: U32

    @property
    def display_name(self) -> str:
        """Human label used in prompts and reports."""
        return str(getattr(self, "name", self.id))

    @classmethod
    def field_names(cls) -> list[str]:
        """Entity-specific field names, excluding ``id``."""
        return [name for name in cls.model_fields if name != "id"]

    # -- Key-value access --

    def __getitem__(self, key: str) -> Any:
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    # -- Serialization --

    def to_dict(self) -> dict:
        """Serialize to a plain JSON-compatible dict, fields in declaration order."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls: type[T], data: dict) -> T:
        """Validate and build a record from a plain dict."""
        return cls.model_validate(data)

    def describe(self) -> str:
        """One-line rendering: ``User { id: 1, name: 'a', email: 'x' }``."""
        body = ", ".join(f"{key}: {value!r}" for key, value in self.to_dict().items())
        return f"{type(self).__name__} {{ {body} }}"
