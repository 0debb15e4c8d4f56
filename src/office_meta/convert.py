"""
Conversion of legacy Word (.doc) files to .docx via LibreOffice.

The conversion is delegated to ``soffice --headless --convert-to docx``;
this package never reads .doc structure itself.

Usage:
    from office_meta.convert import convert_doc_to_docx

    docx_path = convert_doc_to_docx("old_report.doc")
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path

from .errors import ConversionError, DocumentNotFoundError

logger = logging.getLogger(__name__)

# Environment variable to specify a custom soffice executable
SOFFICE_PATH_ENV = "OFFICE_META_SOFFICE"

# Executable names searched on PATH, in order
SOFFICE_NAMES = ("soffice", "libreoffice")


def find_soffice(explicit: str | None = None) -> str | None:
    """Find the LibreOffice executable.

    Searches in order:
    1. The explicit path argument
    2. OFFICE_META_SOFFICE environment variable
    3. System PATH

    Returns:
        Path to the executable, or None if not found
    """
    for candidate in (explicit, os.environ.get(SOFFICE_PATH_ENV)):
        if candidate and os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            logger.debug("Using soffice at %s", candidate)
            return candidate

    for name in SOFFICE_NAMES:
        found = shutil.which(name)
        if found:
            logger.debug("Found soffice in PATH: %s", found)
            return found

    logger.debug("soffice not found")
    return None


def convert_doc_to_docx(
    path: str | Path,
    soffice_path: str | None = None,
    timeout: int = 120,
) -> Path:
    """Convert a .doc file to .docx in the same directory.

    Args:
        path: Path to the .doc file
        soffice_path: Explicit LibreOffice executable (optional)
        timeout: Maximum seconds to wait for the conversion

    Returns:
        Path of the converted .docx file

    Raises:
        DocumentNotFoundError: If the .doc file does not exist
        ConversionError: If LibreOffice is missing, fails, or produces no file
    """
    source = Path(path)
    if not source.is_file():
        raise DocumentNotFoundError(source)

    executable = find_soffice(soffice_path)
    if executable is None:
        raise ConversionError(
            "Could not convert .doc → .docx: LibreOffice was not found",
            hint=f"Install LibreOffice or set the {SOFFICE_PATH_ENV} environment variable",
        )

    out_dir = source.parent
    command = [
        executable,
        "--headless",
        "--convert-to",
        "docx",
        str(source),
        "--outdir",
        str(out_dir),
    ]
    logger.debug("Running %s", " ".join(command))

    try:
        subprocess.run(command, capture_output=True, check=True, timeout=timeout)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
        raise ConversionError(
            f"Could not convert .doc → .docx: {e}",
            hint="Make sure LibreOffice is installed and the file is not open elsewhere",
        ) from e

    output = out_dir / f"{source.stem}.docx"
    if not output.exists():
        raise ConversionError(f"Conversion failed: {output} was not created")

    logger.debug("Converted %s to %s", source, output)
    return output
