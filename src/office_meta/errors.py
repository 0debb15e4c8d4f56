"""
Custom exception classes for the office_meta package.

Every error carries a human-readable message and, where one helps, a
``hint`` suggesting how to resolve the problem. The CLI prints both.
"""

from pathlib import Path


class OfficeMetaError(Exception):
    """Base exception for all office_meta errors.

    Attributes:
        hint: Optional remediation text for the user
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        self.hint = hint
        super().__init__(message)


class DocumentNotFoundError(OfficeMetaError):
    """Raised when the input document does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}", hint="Check the file path and try again")


class EmptyFileError(OfficeMetaError):
    """Raised when the input document has zero length."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"File is empty: {self.path}",
            hint="The file may have been truncated during download or copy",
        )


class InvalidContainerError(OfficeMetaError):
    """Raised when the input bytes cannot be read as a ZIP container."""

    def __init__(self, path: str | Path | None, detail: str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        msg = "File is not a valid Office document"
        if self.path is not None:
            msg += f": {self.path}"
        if detail:
            msg += f" ({detail})"
        super().__init__(
            msg,
            hint="Only .docx, .xlsx and .pptx (ZIP-based) documents can be edited",
        )


class MissingStreamError(OfficeMetaError):
    """Raised when a required package entry does not exist.

    Attributes:
        entry_name: Name of the missing entry (e.g. ``docProps/core.xml``)
    """

    def __init__(self, entry_name: str, hint: str | None = None) -> None:
        self.entry_name = entry_name
        super().__init__(f"{entry_name} is missing", hint=hint)


class MissingCoreStreamError(MissingStreamError):
    """Raised when ``docProps/core.xml`` is absent from the package."""

    def __init__(self, entry_name: str = "docProps/core.xml") -> None:
        super().__init__(
            entry_name,
            hint="Open and re-save the document in an Office application to restore it",
        )


class MissingAppStreamError(MissingStreamError):
    """Raised when writing app properties to a package without ``docProps/app.xml``."""

    def __init__(self, entry_name: str = "docProps/app.xml") -> None:
        super().__init__(
            entry_name,
            hint="Total editing time can only be updated in documents saved by Office",
        )


class MalformedStreamError(OfficeMetaError):
    """Raised when a property stream is not well-formed or has an unexpected root.

    Attributes:
        entry_name: Name of the offending entry
    """

    def __init__(self, entry_name: str, detail: str) -> None:
        self.entry_name = entry_name
        super().__init__(f"Invalid {entry_name} structure: {detail}")


class UnsupportedFormatError(OfficeMetaError):
    """Raised when a format tag has no reader or writer.

    Attributes:
        format: The offending format tag
        operation: "read" or "write"
    """

    def __init__(self, format: str, operation: str = "read") -> None:
        self.format = format
        self.operation = operation
        shown = f".{format}" if format else "(no extension)"
        super().__init__(
            f"Format {shown} is not supported for {operation}",
            hint=(
                "Metadata can be read from .docx, .xlsx and .pptx and written to .docx"
            ),
        )


class MissingOutputPathError(OfficeMetaError):
    """Raised when a write is requested without an output path."""

    def __init__(self) -> None:
        super().__init__("outputPath is required")


class OutputWriteError(OfficeMetaError):
    """Raised when the serialized package cannot be written to disk.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = Path(path)
        super().__init__(
            f"Could not write {self.path}: {detail}",
            hint="Check that the destination is writable and has free space",
        )


class ConversionError(OfficeMetaError):
    """Raised when a legacy .doc file cannot be converted to .docx."""


class UpdateFileError(OfficeMetaError):
    """Raised when an updates file cannot be parsed or has the wrong shape."""


class ConfigError(OfficeMetaError):
    """Raised when configuration values are invalid."""
