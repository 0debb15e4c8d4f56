"""
OOXMLPackage class for reading and rewriting Office document ZIP containers.

This module keeps ZIP handling separate from the property codecs. Entries
are held in memory in their original order together with their ZIP
headers, so serializing an unmodified package reproduces the original
entry set and re-serializing the same modifications is deterministic.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import Any, BinaryIO

from .errors import (
    DocumentNotFoundError,
    EmptyFileError,
    InvalidContainerError,
    MissingStreamError,
    OutputWriteError,
)

logger = logging.getLogger(__name__)


class OOXMLPackage:
    """An opened OOXML ZIP package, owned by one read-modify-write session.

    Example:
        >>> with OOXMLPackage.open("report.docx") as pkg:
        ...     core = pkg.read_entry("docProps/core.xml")
        ...     # Modify core...
        ...     pkg.replace_entry("docProps/core.xml", core)
        ...     pkg.save("report.meta.docx")
    """

    def __init__(
        self,
        entries: list[tuple[zipfile.ZipInfo, bytes]],
        source_path: Path | None = None,
        comment: bytes = b"",
    ) -> None:
        """Initialize package from already-read entries.

        Use the class methods `open()` or `from_bytes()` instead of
        calling this constructor directly.

        Args:
            entries: (header, data) pairs in archive order
            source_path: Original source file path, if opened from disk
            comment: ZIP archive comment to carry over on save
        """
        self._infos: dict[str, zipfile.ZipInfo] = {}
        self._data: dict[str, bytes] = {}
        for info, data in entries:
            self._infos[info.filename] = info
            self._data[info.filename] = data
        self._source_path = source_path
        self._comment = comment
        self._modified: set[str] = set()

    @classmethod
    def open(cls, source: str | Path | BinaryIO) -> "OOXMLPackage":
        """Open an OOXML package from a file path or file-like object.

        Args:
            source: Path to an Office document or a binary stream holding one

        Returns:
            OOXMLPackage with every entry loaded

        Raises:
            DocumentNotFoundError: If the path does not exist
            EmptyFileError: If the file has zero length
            InvalidContainerError: If the bytes are not a ZIP container
        """
        source_path: Path | None = None

        if isinstance(source, str | Path):
            source_path = Path(source)
            if not source_path.is_file():
                raise DocumentNotFoundError(source_path)
            data = source_path.read_bytes()
        else:
            data = source.read()

        if not data:
            raise EmptyFileError(source_path or "<stream>")

        try:
            with zipfile.ZipFile(io.BytesIO(data), "r") as zip_ref:
                entries = [(info, zip_ref.read(info)) for info in zip_ref.infolist()]
                comment = zip_ref.comment
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as e:
            raise InvalidContainerError(source_path, str(e)) from e

        logger.debug("Opened package %s with %d entries", source_path or "<stream>", len(entries))
        return cls(entries, source_path, comment)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OOXMLPackage":
        """Open an OOXML package from bytes."""
        return cls.open(io.BytesIO(data))

    @property
    def source_path(self) -> Path | None:
        """Get the original source file path, if available."""
        return self._source_path

    @property
    def entry_names(self) -> list[str]:
        """Names of all entries, in archive order."""
        return list(self._infos)

    @property
    def modified_entries(self) -> set[str]:
        """Names of entries replaced since the package was opened."""
        return set(self._modified)

    def has_entry(self, entry_name: str) -> bool:
        """Check if a package entry exists."""
        return entry_name in self._data

    def read_entry_bytes(self, entry_name: str) -> bytes | None:
        """Get the raw bytes of an entry, or None if it doesn't exist."""
        return self._data.get(entry_name)

    def read_entry(self, entry_name: str) -> str | None:
        """Get the decoded text of an entry.

        Args:
            entry_name: Path within the package (e.g., "docProps/core.xml")

        Returns:
            The entry's text, or None if the entry doesn't exist
        """
        data = self._data.get(entry_name)
        if data is None:
            return None
        return data.decode("utf-8-sig")

    def replace_entry(self, entry_name: str, content: str | bytes) -> None:
        """Overwrite an existing entry's content in memory.

        Text is encoded as UTF-8. Nothing is written to disk until `save()`.

        Raises:
            MissingStreamError: If the entry does not already exist
        """
        if entry_name not in self._data:
            raise MissingStreamError(entry_name)
        data = content.encode("utf-8") if isinstance(content, str) else content
        self._data[entry_name] = data
        self._modified.add(entry_name)
        logger.debug("Replaced entry %s (%d bytes)", entry_name, len(data))

    def save_to_bytes(self) -> bytes:
        """Serialize the package to ZIP bytes.

        Entries keep their original order, timestamps, and compression.
        """
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zip_ref:
            for name, info in self._infos.items():
                zip_ref.writestr(info, self._data[name])
            zip_ref.comment = self._comment
        return buffer.getvalue()

    def save(self, output_path: str | Path) -> None:
        """Write the package to output_path in a single write.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        output_path = Path(output_path)
        data = self.save_to_bytes()
        try:
            output_path.write_bytes(data)
        except OSError as e:
            raise OutputWriteError(output_path, e.strerror or str(e)) from e
        logger.debug("Saved package to %s (%d bytes)", output_path, len(data))

    def close(self) -> None:
        """Release in-memory entry data."""
        self._data.clear()
        self._infos.clear()

    def __enter__(self) -> "OOXMLPackage":
        """Context manager support."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager cleanup."""
        self.close()
