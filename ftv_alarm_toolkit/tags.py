"""
PLC tag reconstruction for FactoryTalk View alarm triggers.

A trigger's ``exp`` attribute holds the watched PLC expression, usually in
one of these shapes::

    {Line1.Fault}             braces around a plain tag
    {[PLC_1]Line1.Fault}      leading shortcut / device qualifier
    Line1.Stop.5              tag that already addresses a bit

The exporter numbers bits from 1 while the controller numbers them from 0,
so every address produced here is shifted down by one:

  - **Bit triggers** (``type="bit"``) with a ``trigger-value``: the value
    selects the bit, ``Tag.<value - 1>``, replacing any bit already present.
  - **Everything else**: a trailing ``.<n>`` on the expression becomes
    ``.<n - 1>``; expressions without one are used unchanged.

Both paths clamp at bit 0.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import TriggerInfo

# Trailing ".<digits>" at the very end of a tag.
_BIT_SUFFIX_RE = re.compile(r"\.([0-9]+)$")


# ---------------------------------------------------------------------------
# Expression handling
# ---------------------------------------------------------------------------

def extract_tag_name(expression: str) -> str:
    """Return the bare tag name inside a trigger expression.

    Strips one layer of surrounding ``{}`` and then a leading ``[...]``
    qualifier, provided something follows the closing bracket.

    Args:
        expression: Raw ``exp`` attribute text.

    Returns:
        The trimmed tag name, or ``''`` when nothing usable remains.

    Example::

        >>> extract_tag_name('{[PLC_1]Line2.Run}')
        'Line2.Run'
    """
    trimmed = expression.strip()
    if not trimmed:
        return ""

    if len(trimmed) >= 2 and trimmed.startswith("{") and trimmed.endswith("}"):
        trimmed = trimmed[1:-1]

    if trimmed.startswith("["):
        end_bracket = trimmed.find("]")
        if end_bracket >= 0 and end_bracket + 1 < len(trimmed):
            trimmed = trimmed[end_bracket + 1:]

    return trimmed.strip()


def remove_bit_suffix(tag: str) -> str:
    """Drop a trailing ``.<digits>`` from *tag*, if present."""
    return _BIT_SUFFIX_RE.sub("", tag)


def correct_bit_suffix(tag: str) -> str:
    """Shift a trailing 1-based ``.<n>`` down to the 0-based ``.<n-1>``.

    ``.0`` stays ``.0``.  Tags without a numeric suffix are returned as-is.
    """
    def _shift(match: re.Match) -> str:
        bit = int(match.group(1))
        if bit <= 0:
            return ".0"
        return f".{bit - 1}"

    return _BIT_SUFFIX_RE.sub(_shift, tag)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_tag(trigger: Optional[TriggerInfo], trigger_value: Optional[int] = None) -> str:
    """Build the PLC address for a message's trigger.

    Args:
        trigger: The resolved trigger, or None when the message's reference
            did not resolve.
        trigger_value: The message's parsed ``trigger-value``, or None when
            it was missing or not an integer.

    Returns:
        The tag string, or ``''`` meaning the message produces no row.
    """
    if trigger is None:
        return ""

    base_tag = extract_tag_name(trigger.expression)
    if not base_tag:
        return ""

    if trigger.is_bit and trigger_value is not None:
        bit_index = max(0, trigger_value - 1)
        return f"{remove_bit_suffix(base_tag)}.{bit_index}"

    return correct_bit_suffix(base_tag)
