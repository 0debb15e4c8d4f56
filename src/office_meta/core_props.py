"""
Reader and writer for the core properties stream (``docProps/core.xml``).

The stream is always re-parsed from the package and edited in place, so
elements and attributes this module does not know about survive a
read-modify-write cycle. Output is pretty-printed the way Office and
most OOXML libraries write core.xml.
"""

import logging
from collections.abc import Mapping
from typing import Any

from lxml import etree

from .constants import (
    CORE_NSMAP,
    CORE_PROPS_ENTRY,
    CORE_ROOT_TAG,
    W3CDTF_TYPE,
    XML_DECLARATION,
    XSI_TYPE_ATTR,
    qualified_name,
)
from .errors import MalformedStreamError, MissingCoreStreamError
from .fields import CORE_FIELDS, FieldKind, get_field
from .models.values import XmlValue, from_element
from .package import OOXMLPackage
from .results import FieldOutcome

logger = logging.getLogger(__name__)


def _load_core_root(package: OOXMLPackage, parser: etree.XMLParser) -> etree._Element:
    data = package.read_entry_bytes(CORE_PROPS_ENTRY)
    if data is None:
        raise MissingCoreStreamError(CORE_PROPS_ENTRY)
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise MalformedStreamError(CORE_PROPS_ENTRY, str(e)) from e


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=False, resolve_entities=False)


def read_core_meta(package: OOXMLPackage) -> dict[str, XmlValue]:
    """Read the known core properties, keyed by prefixed element name.

    Returns:
        Mapping such as ``{"dc:title": PlainText("Report"),
        "dcterms:created": TypedText("2024-01-01T00:00:00Z", "dcterms:W3CDTF")}``.
        Elements that are absent are not included.

    Raises:
        MissingCoreStreamError: If the package has no core.xml
        MalformedStreamError: If core.xml is not well-formed XML
    """
    root = _load_core_root(package, _parser())
    if root.tag != CORE_ROOT_TAG:
        logger.warning("%s has unexpected root element %s", CORE_PROPS_ENTRY, root.tag)
        return {}

    meta: dict[str, XmlValue] = {}
    for field in CORE_FIELDS:
        element = root.find(qualified_name(field.qname))
        if element is not None:
            meta[field.qname] = from_element(element)
    return meta


def ensure_core_namespaces(root: etree._Element) -> etree._Element:
    """Return a root declaring every core-properties prefix.

    Only prefixes the root does not already declare are added; existing
    declarations are never rebound. lxml cannot add declarations to an
    existing element, so when something is missing a new root is built
    and the old root's attributes, children, and document-level siblings
    are moved onto it.
    """
    missing = {prefix: uri for prefix, uri in CORE_NSMAP.items() if prefix not in root.nsmap}
    if not missing:
        return root

    nsmap = dict(missing)
    nsmap.update(root.nsmap)
    new_root = etree.Element(root.tag, attrib=dict(root.attrib), nsmap=nsmap)
    new_root.text = root.text

    preceding = list(root.itersiblings(preceding=True))
    following = list(root.itersiblings())
    new_root.extend(list(root))
    for sibling in reversed(preceding):
        new_root.addprevious(sibling)
    for sibling in reversed(following):
        new_root.addnext(sibling)

    logger.debug("Declared missing core namespaces: %s", ", ".join(sorted(missing)))
    return new_root


def _set_value(element: etree._Element, text: str) -> None:
    for child in list(element):
        element.remove(child)
    element.text = text


def _is_blank(text: str | None) -> bool:
    return text is None or not text.strip()


def _indent_children(root: etree._Element, space: str = "  ") -> None:
    """Put each direct child of root on its own line.

    Only whitespace owned by root (its text and its children's tails) is
    touched; the content of child elements is left exactly as parsed.
    """
    children = list(root)
    if not children:
        return
    if _is_blank(root.text):
        root.text = f"\n{space}"
    for child in children[:-1]:
        if _is_blank(child.tail):
            child.tail = f"\n{space}"
    if _is_blank(children[-1].tail):
        children[-1].tail = "\n"


def serialize_core(root: etree._Element) -> str:
    """Serialize a core.xml tree with one child element per line."""
    _indent_children(root)
    body = etree.tostring(root.getroottree(), encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n"


def write_core_meta(package: OOXMLPackage, updates: Mapping[str, Any]) -> list[FieldOutcome]:
    """Apply updates to core.xml inside package (in memory).

    Only keys naming a core field are considered; anything else,
    including ``totalTime``, is ignored. Date fields must already be
    ISO-8601 strings; they are written with ``xsi:type="dcterms:W3CDTF"``.
    Invalid values are skipped, not raised.

    Args:
        package: Package to modify
        updates: Canonical field keys mapped to new values

    Returns:
        One FieldOutcome per core field present in updates

    Raises:
        MissingCoreStreamError: If the package has no core.xml
        MalformedStreamError: If core.xml cannot be parsed or has the wrong root
    """
    root = _load_core_root(package, _parser())
    if root.tag != CORE_ROOT_TAG:
        raise MalformedStreamError(CORE_PROPS_ENTRY, f"unexpected root element {root.tag}")

    root = ensure_core_namespaces(root)
    outcomes: list[FieldOutcome] = []

    for key, value in updates.items():
        field = get_field(key)
        if field is None or not field.is_core:
            continue

        outcome = field.validate(value)
        outcomes.append(outcome)
        if not outcome.accepted:
            logger.info("Skipping %s: %s", key, outcome.reason)
            continue

        tag = qualified_name(field.qname)
        element = root.find(tag)
        if element is None:
            element = etree.SubElement(root, tag)
        _set_value(element, outcome.value)
        if field.kind is FieldKind.DATE:
            element.set(XSI_TYPE_ATTR, W3CDTF_TYPE)
        logger.debug("Set %s = %r", field.qname, outcome.value)

    package.replace_entry(CORE_PROPS_ENTRY, serialize_core(root))
    return outcomes
