"""
Reader and writer for the app (extended) properties stream (``docProps/app.xml``).

Only ``TotalTime`` (total editing minutes) is handled. Unlike core.xml,
this stream is optional on read. On write it is serialized compactly,
with no whitespace added, matching what Office itself produces.
"""

import logging
from collections.abc import Mapping
from typing import Any

from lxml import etree

from .constants import APP_PROPS_ENTRY, APP_ROOT_LOCALNAME, TOTAL_TIME_LOCALNAME, XML_DECLARATION
from .errors import MalformedStreamError, MissingAppStreamError
from .fields import get_field
from .models.values import XmlValue, from_element
from .package import OOXMLPackage
from .results import FieldOutcome

logger = logging.getLogger(__name__)


def _parse(data: bytes) -> etree._Element:
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise MalformedStreamError(APP_PROPS_ENTRY, str(e)) from e


def _is_properties_root(root: etree._Element) -> bool:
    return etree.QName(root).localname == APP_ROOT_LOCALNAME


def _find_total_time(root: etree._Element) -> etree._Element | None:
    for child in root:
        if isinstance(child.tag, str) and etree.QName(child).localname == TOTAL_TIME_LOCALNAME:
            return child
    return None


def read_app_meta(package: OOXMLPackage) -> dict[str, XmlValue]:
    """Read TotalTime from app.xml.

    Returns:
        ``{"TotalTime": PlainText("42")}``, or ``{}`` when app.xml or the
        element is absent

    Raises:
        MalformedStreamError: If app.xml is present but not well-formed
    """
    data = package.read_entry_bytes(APP_PROPS_ENTRY)
    if data is None:
        logger.debug("No %s in package", APP_PROPS_ENTRY)
        return {}

    root = _parse(data)
    if not _is_properties_root(root):
        return {}

    element = _find_total_time(root)
    if element is None:
        return {}
    return {TOTAL_TIME_LOCALNAME: from_element(element)}


def write_app_meta(package: OOXMLPackage, updates: Mapping[str, Any]) -> list[FieldOutcome]:
    """Apply a totalTime update to app.xml inside package (in memory).

    The update is best-effort: a value that is not a non-negative integer
    leaves app.xml untouched and is reported as skipped. When updates has
    no ``totalTime`` key the entry is not rewritten at all.

    Returns:
        A single-item outcome list, or [] when totalTime was not requested

    Raises:
        MissingAppStreamError: If the package has no app.xml
        MalformedStreamError: If app.xml cannot be parsed or has the wrong root
    """
    data = package.read_entry_bytes(APP_PROPS_ENTRY)
    if data is None:
        raise MissingAppStreamError(APP_PROPS_ENTRY)

    root = _parse(data)
    if not _is_properties_root(root):
        raise MalformedStreamError(APP_PROPS_ENTRY, f"unexpected root element {root.tag}")

    if "totalTime" not in updates:
        return []

    outcome = get_field("totalTime").validate(updates["totalTime"])
    if not outcome.accepted:
        logger.info("Skipping totalTime: %s", outcome.reason)
        return [outcome]

    element = _find_total_time(root)
    if element is None:
        namespace = etree.QName(root).namespace
        tag = f"{{{namespace}}}{TOTAL_TIME_LOCALNAME}" if namespace else TOTAL_TIME_LOCALNAME
        element = etree.SubElement(root, tag)
    for child in list(element):
        element.remove(child)
    element.text = outcome.value

    body = etree.tostring(root.getroottree(), encoding="unicode")
    package.replace_entry(APP_PROPS_ENTRY, f"{XML_DECLARATION}{body}")
    logger.debug("Set TotalTime = %s", outcome.value)
    return [outcome]
