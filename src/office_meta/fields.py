"""
The fixed set of metadata fields the package understands.

Each field is described once: its canonical key, the raw property names
accepted for it on read (in priority order), where it lives in the
package, and how an update value is validated before it is written.
The table is immutable module-level data.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .models.date_parts import is_iso_instant
from .results import FieldOutcome

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


class FieldKind(Enum):
    """Value shape of a metadata field."""

    TEXT = "text"
    DATE = "date"
    MINUTES = "minutes"


@dataclass(frozen=True)
class FieldDescriptor:
    """Description of one canonical metadata field.

    Attributes:
        key: Canonical field name (e.g. "lastModifiedBy")
        aliases: Raw property names accepted on read, first match wins
        qname: Prefixed core.xml element name, or None for app.xml fields
        kind: Value shape used for validation
    """

    key: str
    aliases: tuple[str, ...]
    qname: str | None
    kind: FieldKind

    @property
    def is_core(self) -> bool:
        return self.qname is not None

    def validate(self, value: Any) -> FieldOutcome:
        """Check an update value and return the text to serialize, or a skip reason."""
        if self.kind is FieldKind.DATE:
            if not isinstance(value, str):
                return FieldOutcome.skip(
                    self.key, f"expected an ISO-8601 string, got {type(value).__name__}"
                )
            if not is_iso_instant(value):
                return FieldOutcome.skip(self.key, f"{value!r} is not an ISO-8601 date-time")
            return FieldOutcome.accept(self.key, value.strip())

        if self.kind is FieldKind.MINUTES:
            minutes = parse_minutes(value)
            if minutes is None:
                return FieldOutcome.skip(
                    self.key, f"{value!r} is not a non-negative whole number of minutes"
                )
            return FieldOutcome.accept(self.key, str(minutes))

        if value is None:
            return FieldOutcome.skip(self.key, "no value given")
        return FieldOutcome.accept(self.key, str(value))


def parse_minutes(value: Any) -> int | None:
    """Parse a total-editing-time value; None if it isn't a non-negative integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value)
    elif isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        minutes = int(value.strip())
    else:
        return None
    return minutes if minutes >= 0 else None


FIELDS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor("title", ("title", "dc:title"), "dc:title", FieldKind.TEXT),
    FieldDescriptor("subject", ("subject", "dc:subject"), "dc:subject", FieldKind.TEXT),
    FieldDescriptor("creator", ("creator", "dc:creator"), "dc:creator", FieldKind.TEXT),
    FieldDescriptor(
        "description", ("description", "dc:description"), "dc:description", FieldKind.TEXT
    ),
    FieldDescriptor("keywords", ("keywords", "cp:keywords"), "cp:keywords", FieldKind.TEXT),
    FieldDescriptor("category", ("category", "cp:category"), "cp:category", FieldKind.TEXT),
    FieldDescriptor(
        "lastModifiedBy",
        ("lastModifiedBy", "cp:lastModifiedBy"),
        "cp:lastModifiedBy",
        FieldKind.TEXT,
    ),
    FieldDescriptor(
        "created", ("created", "dcterms:created", "createdDate"), "dcterms:created", FieldKind.DATE
    ),
    FieldDescriptor(
        "modified",
        ("modified", "dcterms:modified", "modifiedDate"),
        "dcterms:modified",
        FieldKind.DATE,
    ),
    FieldDescriptor("totalTime", ("totalTime", "TotalTime"), None, FieldKind.MINUTES),
)

FIELD_KEYS: tuple[str, ...] = tuple(f.key for f in FIELDS)
CORE_FIELDS: tuple[FieldDescriptor, ...] = tuple(f for f in FIELDS if f.is_core)
DATE_FIELD_KEYS = frozenset(f.key for f in FIELDS if f.kind is FieldKind.DATE)

_BY_KEY = {f.key: f for f in FIELDS}
_BY_ALIAS = {alias: f for f in FIELDS for alias in f.aliases}


def get_field(key: str) -> FieldDescriptor | None:
    """Look up a field by canonical key."""
    return _BY_KEY.get(key)


def resolve_key(name: str) -> str | None:
    """Map a canonical key or any alias to its canonical key."""
    field = _BY_KEY.get(name) or _BY_ALIAS.get(name)
    return field.key if field else None
