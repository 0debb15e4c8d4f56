"""
Loading metadata updates from YAML or JSON files.

Example YAML file:
    ```yaml
    offset: +5
    updates:
      title: Quarterly Report
      creator: Finance Team
      created: 2024-01-01 09:30:00     # local time at the offset above
      modified: "2024-03-15T12:00:00Z" # explicit UTC instant
      totalTime: 95
    ```
"""

import json
import logging
import re
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .errors import UpdateFileError
from .fields import DATE_FIELD_KEYS, resolve_key
from .models.date_parts import DateParts, validate_offset

logger = logging.getLogger(__name__)

_ZONE_SUFFIX = re.compile(r"(?:[Zz]|[+-]\d{2}:?\d{2})$")


def _coerce_date(key: str, value: Any, offset: int) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value
        return DateParts(
            value.year, value.month, value.day, value.hour, value.minute, value.second, offset
        )
    if isinstance(value, date):
        return DateParts(value.year, value.month, value.day, offset=offset)
    if isinstance(value, Mapping):
        parts = {"offset": offset, **value}
        try:
            return DateParts(**parts)
        except (TypeError, ValueError) as e:
            raise UpdateFileError(f"Invalid date parts for {key}: {e}") from e
    if isinstance(value, str) and not _ZONE_SUFFIX.search(value.strip()):
        try:
            return DateParts.parse_local(value, offset)
        except ValueError:
            # Left for the core codec to validate and skip
            return value
    return value


def coerce_updates(data: Mapping[str, Any], offset: int = 0) -> dict[str, Any]:
    """Map field names (canonical or alias) to canonical keys and coerce dates.

    Local date values become DateParts at ``offset``; values carrying a zone
    are kept as instants. Unknown names are kept as-is; the codecs ignore them.
    """
    updates: dict[str, Any] = {}
    for name, value in data.items():
        key = resolve_key(str(name))
        if key is None:
            logger.warning("Unknown metadata field %r in updates", name)
            updates[str(name)] = value
            continue
        if key in DATE_FIELD_KEYS:
            value = _coerce_date(key, value, offset)
        updates[key] = value
    return updates


def load_updates(path: str | Path, offset: int = 0) -> dict[str, Any]:
    """Load metadata updates from a YAML (.yaml/.yml) or JSON (.json) file.

    The file holds a mapping of fields, either at the top level or under an
    ``updates`` key. An ``offset`` key overrides the offset argument.

    Raises:
        UpdateFileError: If the file is missing, unparseable, or the wrong shape
    """
    file_path = Path(path)
    if not file_path.exists():
        raise UpdateFileError(f"Updates file not found: {path}")

    suffix = file_path.suffix.lower()
    try:
        with open(file_path, encoding="utf-8") as f:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise UpdateFileError(
                    f"Unsupported updates file format: {suffix or '(none)'}",
                    hint="Use a .yaml, .yml or .json file",
                )
    except yaml.YAMLError as e:
        raise UpdateFileError(f"Failed to parse YAML: {e}") from e
    except json.JSONDecodeError as e:
        raise UpdateFileError(f"Failed to parse JSON: {e}") from e

    if not isinstance(data, dict):
        raise UpdateFileError("Updates file must contain a dictionary/object")

    try:
        offset = validate_offset(data.get("offset", offset))
    except ValueError as e:
        raise UpdateFileError(str(e)) from e

    if "updates" in data:
        fields = data["updates"]
        if not isinstance(fields, dict):
            raise UpdateFileError("'updates' must be a dictionary/object")
    else:
        fields = {k: v for k, v in data.items() if k != "offset"}

    return coerce_updates(fields, offset)
