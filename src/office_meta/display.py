"""Human-readable rendering of metadata values for terminal output."""

from typing import Any

from .fields import DATE_FIELD_KEYS, FIELDS
from .models.date_parts import DateParts, is_iso_instant, parse_instant

FIELD_LABELS = {
    "title": "Title",
    "subject": "Subject",
    "creator": "Author",
    "description": "Description",
    "keywords": "Keywords",
    "category": "Category",
    "lastModifiedBy": "Last Modified By",
    "created": "Created Date",
    "modified": "Modified Date",
    "totalTime": "Total Editing Time",
}


def format_total_time(value: Any) -> str:
    """Render minutes as ``2h 5m (125 min)`` or ``45 min``."""
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return ""
    minutes = int(value)
    hours, rest = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {rest}m ({minutes} min)"
    return f"{minutes} min"


def format_meta_value(key: str, value: Any) -> str:
    """Render a metadata value for display.

    ISO instants in date fields render as ``YYYY-MM-DD HH:MM:SS (UTC)``;
    DateParts render with their offset.
    """
    if value is None or value == "":
        return ""

    if isinstance(value, DateParts):
        return str(value)

    if key == "totalTime":
        return format_total_time(value)

    if key in DATE_FIELD_KEYS and is_iso_instant(value):
        return parse_instant(value).strftime("%Y-%m-%d %H:%M:%S (UTC)")

    return str(value)


def format_metadata(meta: dict[str, Any]) -> list[tuple[str, str]]:
    """(label, rendered value) rows for the fields present in meta, in field order."""
    return [
        (FIELD_LABELS[f.key], format_meta_value(f.key, meta[f.key]))
        for f in FIELDS
        if f.key in meta
    ]
