"""
Utility functions for reading FactoryTalk View alarm exports.

Provides document loading and small XML helpers built on lxml.  Alarm
exports are sometimes written with a default namespace and sometimes
without one, so element lookups here match on the local name only.
"""

import logging
import os
from typing import Iterator, Union

from lxml import etree

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# UTF-8 BOM bytes.  FactoryTalk View exports frequently begin with this.
_UTF8_BOM = b"\xef\xbb\xbf"


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------

def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_blank_text=False,
        recover=False,
    )


def parse_alarm_xml_bytes(raw: bytes) -> etree._Element:
    """Parse raw XML bytes into a root element.

    A leading UTF-8 BOM is stripped before the bytes are handed to lxml.

    Args:
        raw: The encoded document.

    Returns:
        The root ``lxml.etree._Element``.

    Raises:
        etree.XMLSyntaxError: If the document is malformed.
    """
    if raw.startswith(_UTF8_BOM):
        raw = raw[len(_UTF8_BOM):]
    return etree.fromstring(raw, parser=_make_parser())


def parse_alarm_xml_string(text: str) -> etree._Element:
    """Parse an XML document held in a ``str``.

    Any XML declaration is honoured by encoding to UTF-8 first, since lxml
    refuses unicode input that carries an ``encoding`` declaration.
    """
    return parse_alarm_xml_bytes(text.encode("utf-8"))


def parse_alarm_xml(file_path: Union[str, os.PathLike]) -> etree._Element:
    """Load and parse an alarm export file, returning the root element.

    Args:
        file_path: Path to the ``.xml`` export on disk.

    Returns:
        The root ``lxml.etree._Element`` of the parsed XML tree.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        etree.XMLSyntaxError: If the file contains malformed XML.
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Alarm export not found: {file_path}")

    logger.debug("Loading alarm export: %s", file_path)
    with open(file_path, "rb") as fh:
        raw = fh.read()
    return parse_alarm_xml_bytes(raw)


# ---------------------------------------------------------------------------
# XML helpers
# ---------------------------------------------------------------------------

def iter_elements(root: etree._Element, local_name: str) -> Iterator[etree._Element]:
    """Yield *root* and every descendant whose local name is *local_name*.

    The ``{*}`` wildcard makes lxml match the name in any namespace as well
    as in no namespace at all.  Comments and processing instructions are
    never yielded.
    """
    return root.iter(f"{{*}}{local_name}")


def get_attr(element: etree._Element, name: str) -> str:
    """Return attribute *name* of *element*, or ``''`` when absent."""
    return element.get(name) or ""
