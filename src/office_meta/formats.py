"""Format detection from file extensions."""

from pathlib import Path


def detect_format(path: str | Path) -> str:
    """Return the lower-cased extension of path without the leading dot.

    Returns an empty string when the path has no extension. No check is
    made against the supported formats; the orchestrator rejects those.

    Example:
        >>> detect_format("Report.DOCX")
        'docx'
    """
    return Path(path).suffix[1:].lower()
