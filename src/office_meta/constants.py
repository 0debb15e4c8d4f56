"""
Centralized constants for OOXML property-stream namespaces and entry names.

Import from here rather than repeating namespace URLs in the codecs.
"""

# =============================================================================
# Package Entries
# =============================================================================

CORE_PROPS_ENTRY = "docProps/core.xml"
APP_PROPS_ENTRY = "docProps/app.xml"


# =============================================================================
# Core Properties Namespaces
# =============================================================================

CP_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
DCTERMS_NAMESPACE = "http://purl.org/dc/terms/"
DCMITYPE_NAMESPACE = "http://purl.org/dc/dcmitype/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Declarations every written core.xml root must carry
CORE_NSMAP = {
    "cp": CP_NAMESPACE,
    "dc": DC_NAMESPACE,
    "dcterms": DCTERMS_NAMESPACE,
    "dcmitype": DCMITYPE_NAMESPACE,
    "xsi": XSI_NAMESPACE,
}


# =============================================================================
# App (Extended) Properties Namespaces
# =============================================================================

EXTENDED_PROPERTIES_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
)
VT_NAMESPACE = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"


# =============================================================================
# Element Names
# =============================================================================

CORE_ROOT_TAG = f"{{{CP_NAMESPACE}}}coreProperties"
APP_ROOT_LOCALNAME = "Properties"
TOTAL_TIME_LOCALNAME = "TotalTime"

# xsi:type attribute carried by typed date elements
XSI_TYPE_ATTR = f"{{{XSI_NAMESPACE}}}type"
W3CDTF_TYPE = "dcterms:W3CDTF"


# =============================================================================
# Serialization
# =============================================================================

# Office writes double-quoted, standalone declarations
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


# =============================================================================
# Formats
# =============================================================================

FORMAT_DOCX = "docx"
FORMAT_XLSX = "xlsx"
FORMAT_PPTX = "pptx"
FORMAT_DOC = "doc"

READABLE_FORMATS = frozenset({FORMAT_DOCX, FORMAT_XLSX, FORMAT_PPTX})
WRITABLE_FORMATS = frozenset({FORMAT_DOCX})

# Directory used for derived output files when not overwriting in place
DEFAULT_OUTPUT_DIR = "office-meta-output"

# Inclusive range of accepted UTC offsets, in hours
MIN_UTC_OFFSET = -12
MAX_UTC_OFFSET = 14


def qualified_name(prefixed: str) -> str:
    """Convert a prefixed core.xml name (e.g. ``dc:title``) to Clark notation."""
    prefix, local = prefixed.split(":", 1)
    return f"{{{CORE_NSMAP[prefix]}}}{local}"
