"""
Scalar values read from property-stream XML elements.

An element either holds bare text (``<dc:title>Report</dc:title>``) or
text plus attributes (``<dcterms:created xsi:type="dcterms:W3CDTF">...``).
Both shapes are modelled explicitly so the normalizer can unwrap them
without guessing.
"""

from dataclasses import dataclass
from typing import Any

from lxml import etree

from ..constants import XSI_TYPE_ATTR


@dataclass(frozen=True)
class PlainText:
    """Text content of an element that carries no attributes."""

    text: str


@dataclass(frozen=True)
class TypedText:
    """Text content of an element that carries attributes.

    Attributes:
        text: The element's text content
        type_attribute: Value of ``xsi:type`` (e.g. ``dcterms:W3CDTF``), if any
    """

    text: str
    type_attribute: str | None = None


XmlValue = PlainText | TypedText


def from_element(element: etree._Element) -> XmlValue:
    """Build the value variant for a property element."""
    text = element.text or ""
    if len(element.attrib):
        return TypedText(text, element.get(XSI_TYPE_ATTR))
    return PlainText(text)


def unwrap(value: Any) -> Any:
    """Return the scalar behind an XML value; other values pass through."""
    if isinstance(value, (PlainText, TypedText)):
        return value.text
    return value
