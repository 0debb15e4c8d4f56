"""
office_meta - Read and edit descriptive metadata of Office Open XML documents.

This package reads the core and app property streams of .docx, .xlsx and
.pptx packages into a normalized mapping, and writes changes back into
.docx packages while leaving every other part of the archive untouched.

Example:
    >>> from office_meta import DateParts, read_meta, write_meta
    >>> meta = read_meta("report.docx")
    >>> write_meta(
    ...     "report.docx",
    ...     "docx",
    ...     {"title": "Final Report", "created": DateParts(2024, 1, 1, 9, offset=2)},
    ...     "report.meta.docx",
    ... )
"""

__version__ = "0.1.0"
__all__ = [
    "OOXMLPackage",
    "DateParts",
    "PlainText",
    "TypedText",
    "FIELDS",
    "FieldDescriptor",
    "FieldOutcome",
    "WriteResult",
    "days_in_month",
    "detect_format",
    "normalize_meta",
    "read_core_meta",
    "write_core_meta",
    "read_app_meta",
    "write_app_meta",
    "read_meta",
    "read_raw_meta",
    "write_meta",
    "default_output_path",
    "convert_doc_to_docx",
    "OfficeMetaError",
    "DocumentNotFoundError",
    "EmptyFileError",
    "InvalidContainerError",
    "MissingStreamError",
    "MissingCoreStreamError",
    "MissingAppStreamError",
    "MalformedStreamError",
    "UnsupportedFormatError",
    "MissingOutputPathError",
    "OutputWriteError",
    "ConversionError",
    "UpdateFileError",
    "ConfigError",
]

# Import codecs
from .app_props import read_app_meta, write_app_meta

# Import legacy conversion
from .convert import convert_doc_to_docx
from .core_props import read_core_meta, write_core_meta
from .errors import (
    ConfigError,
    ConversionError,
    DocumentNotFoundError,
    EmptyFileError,
    InvalidContainerError,
    MalformedStreamError,
    MissingAppStreamError,
    MissingCoreStreamError,
    MissingOutputPathError,
    MissingStreamError,
    OfficeMetaError,
    OutputWriteError,
    UnsupportedFormatError,
    UpdateFileError,
)

# Import field table and normalization
from .fields import FIELDS, FieldDescriptor
from .formats import detect_format

# Import orchestration
from .meta import default_output_path, read_meta, read_raw_meta, write_meta

# Import value models
from .models import DateParts, PlainText, TypedText, days_in_month
from .normalize import normalize_meta

# Import package class
from .package import OOXMLPackage

# Import result types
from .results import FieldOutcome, WriteResult
