"""
Alarm row extraction from FactoryTalk View alarm exports.

Walks every ``<message>`` element of one document, joins it to its
``<trigger>`` and turns it into an :class:`AlarmRow`.  Messages whose
trigger does not resolve, or whose trigger has no usable expression, are
skipped without error; plenty of messages in a real export carry no alarm
address at all.

Rows come out in document order.  Sorting is a separate step (see
:mod:`ftv_alarm_toolkit.ordering`).
"""

from __future__ import annotations

import logging
import os
import re
from typing import Iterator, List, Optional, Union

from lxml import etree

from .descriptions import normalize_description
from .models import AlarmRow
from .schema import (
    MESSAGE_ELEMENT,
    MESSAGE_TEXT_ATTR,
    MESSAGE_TRIGGER_ATTR,
    MESSAGE_TRIGGER_VALUE_ATTR,
    TRIGGER_REFERENCE_PREFIX,
)
from .tags import build_tag
from .triggers import TriggerIndex, build_trigger_index
from .utils import get_attr, iter_elements, parse_alarm_xml

logger = logging.getLogger(__name__)

# Optional sign and decimal digits, surrounding whitespace allowed.
_INTEGER_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")

# trigger-value is a 32-bit signed integer in the export format.
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


def parse_trigger_value(raw: Optional[str]) -> Optional[int]:
    """Parse a ``trigger-value`` attribute.

    Returns:
        The integer value, or None when *raw* is missing, blank, not a
        base-10 integer, or outside the 32-bit signed range.
    """
    if raw is None or not _INTEGER_RE.match(raw):
        return None
    value = int(raw)
    if not (_INT32_MIN <= value <= _INT32_MAX):
        return None
    return value


def strip_trigger_reference(reference: str) -> str:
    """Turn a ``#T1`` style reference into the bare trigger id."""
    if reference.startswith(TRIGGER_REFERENCE_PREFIX):
        return reference[len(TRIGGER_REFERENCE_PREFIX):]
    return reference


def read_message_row(message: etree._Element, triggers: TriggerIndex) -> Optional[AlarmRow]:
    """Build the row for one ``<message>`` element, or None to skip it."""
    trigger_id = strip_trigger_reference(get_attr(message, MESSAGE_TRIGGER_ATTR))
    trigger = triggers.get(trigger_id)
    trigger_value = parse_trigger_value(message.get(MESSAGE_TRIGGER_VALUE_ATTR))

    tag = build_tag(trigger, trigger_value)
    if not tag.strip():
        return None

    description = normalize_description(get_attr(message, MESSAGE_TEXT_ATTR))
    return AlarmRow(tag=tag, description=description)


def iter_document_rows(
    root: etree._Element,
    triggers: Optional[TriggerIndex] = None,
) -> Iterator[AlarmRow]:
    """Yield rows for every message under *root*, in document order.

    Args:
        root: Root element of one parsed alarm export.
        triggers: Pre-built index for *root*.  Built from *root* when
            omitted; never share one index between documents.
    """
    if triggers is None:
        triggers = build_trigger_index(root)
    for message in iter_elements(root, MESSAGE_ELEMENT):
        row = read_message_row(message, triggers)
        if row is not None:
            yield row


def parse_document_rows(root: etree._Element) -> List[AlarmRow]:
    """Return all rows of one parsed document."""
    return list(iter_document_rows(root))


def parse_file(file_path: Union[str, os.PathLike]) -> List[AlarmRow]:
    """Load an alarm export and return its rows in document order.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        etree.XMLSyntaxError: If the file is not well-formed XML.
    """
    root = parse_alarm_xml(file_path)
    triggers = build_trigger_index(root)
    if triggers.duplicate_ids:
        logger.debug(
            "%s: duplicate trigger ids, last definition used: %s",
            file_path, ", ".join(triggers.duplicate_ids),
        )
    rows = list(iter_document_rows(root, triggers))
    logger.info(
        "Parsed %s: %d triggers, %d rows",
        os.path.basename(file_path), len(triggers), len(rows),
    )
    return rows
