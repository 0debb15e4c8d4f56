"""
Reading and writing normalized metadata for whole documents.

``read_meta`` and ``write_meta`` pick the codecs a format needs, run them
against a single in-memory package, and (for writes) save the result
exactly once to the requested output path.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from .app_props import read_app_meta, write_app_meta
from .constants import FORMAT_DOCX, READABLE_FORMATS, WRITABLE_FORMATS
from .core_props import read_core_meta, write_core_meta
from .errors import MissingOutputPathError, UnsupportedFormatError
from .fields import DATE_FIELD_KEYS
from .formats import detect_format
from .models.date_parts import DateParts, format_instant
from .normalize import normalize_meta
from .package import OOXMLPackage
from .results import WriteResult

logger = logging.getLogger(__name__)


def read_raw_meta(path: str | Path, format: str | None = None) -> dict[str, Any]:
    """Read raw properties (un-normalized) from a document.

    Args:
        path: Path to the document
        format: Format tag; detected from the extension when omitted

    Raises:
        UnsupportedFormatError: If the format is not docx, xlsx or pptx
    """
    format = detect_format(path) if format is None else format
    if format not in READABLE_FORMATS:
        raise UnsupportedFormatError(format, "read")

    with OOXMLPackage.open(path) as package:
        raw: dict[str, Any] = dict(read_core_meta(package))
        # Only word-processing documents carry a total editing time we read
        if format == FORMAT_DOCX:
            raw.update(read_app_meta(package))
    return raw


def read_meta(path: str | Path, format: str | None = None) -> dict[str, Any]:
    """Read a document's metadata as canonical fields.

    Example:
        >>> read_meta("report.docx")
        {'title': 'Report', 'creator': 'J. Doe', 'totalTime': 42}
    """
    return normalize_meta(read_raw_meta(path, format))


def _prepare_value(key: str, value: Any) -> Any:
    if key not in DATE_FIELD_KEYS:
        return value
    if isinstance(value, DateParts):
        return value.to_utc_instant()
    if isinstance(value, datetime):
        return format_instant(value)
    return value


def prepare_updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    """Convert date-part and datetime values for date fields to ISO instants.

    Other values are passed through for the codecs to validate.
    """
    return {key: _prepare_value(key, value) for key, value in updates.items()}


def write_meta(
    input_path: str | Path,
    format: str | None,
    updates: Mapping[str, Any],
    output_path: str | Path | None,
) -> WriteResult:
    """Write metadata updates and save the document to output_path.

    Core properties are written first, then app properties, against the
    same in-memory package; the package is then saved once. The input
    file is never modified unless output_path points at it.

    Args:
        input_path: Document to read
        format: Format tag; detected from the extension when None
        updates: Canonical field keys mapped to new values
        output_path: Destination path (required)

    Returns:
        WriteResult listing which fields were written or skipped

    Raises:
        MissingOutputPathError: If output_path is empty
        UnsupportedFormatError: If the format is not writable (only docx is)
        MissingCoreStreamError: If the document has no core.xml
        MissingAppStreamError: If the document has no app.xml
        OutputWriteError: If the output file cannot be written
    """
    if output_path is None or str(output_path).strip() in ("", "."):
        raise MissingOutputPathError()

    format = detect_format(input_path) if format is None else format
    if format not in WRITABLE_FORMATS:
        raise UnsupportedFormatError(format, "write")

    prepared = prepare_updates(updates)

    with OOXMLPackage.open(input_path) as package:
        outcomes = write_core_meta(package, prepared)
        outcomes += write_app_meta(package, prepared)
        package.save(output_path)

    result = WriteResult(Path(output_path), outcomes)
    logger.debug("%s", result)
    return result


def default_output_path(path: str | Path, output_dir: str | Path) -> Path:
    """Derive ``<output_dir>/<stem>.meta<ext>`` for path, creating output_dir.

    Example:
        >>> default_output_path("docs/report.docx", "out")
        PosixPath('out/report.meta.docx')
    """
    source = Path(path)
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{source.stem}.meta{source.suffix}"
