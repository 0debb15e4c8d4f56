"""
Normalization of raw property names onto canonical field keys.

The codecs report properties under their raw names (``dc:title``,
``TotalTime``, ...). ``normalize_meta`` folds those onto the canonical keys
of ``FIELDS``, scanning each field's aliases in priority order.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .fields import FIELDS, FieldKind, parse_minutes
from .models.values import unwrap

logger = logging.getLogger(__name__)


def normalize_meta(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map raw properties to canonical keys.

    For each field the first alias present in ``raw`` wins, regardless of
    the order of ``raw``'s keys. XML values are unwrapped to their text.
    Fields with no alias present are omitted, never filled with "".

    Example:
        >>> normalize_meta({"dc:title": PlainText("Q3"), "title": "Quarterly"})
        {'title': 'Quarterly'}
    """
    result: dict[str, Any] = {}

    for field in FIELDS:
        for alias in field.aliases:
            if raw.get(alias) is None:
                continue

            value = unwrap(raw[alias])
            if field.kind is FieldKind.MINUTES:
                minutes = parse_minutes(value)
                if minutes is None:
                    logger.warning("Ignoring unreadable %s value %r", alias, value)
                    break
                value = minutes

            result[field.key] = value
            break

    return result
