"""
Deterministic ordering of alarm rows by PLC tag.

Tags are decomposed as ``base[index].bit`` (index and bit optional) and
compared level by level:

  1. base name, case-insensitive
  2. array index, ascending; no index sorts after any index
  3. bit, ascending; no bit sorts after any bit
  4. the raw tag, case-insensitive

Tags that do not fit the grammar keep their whole text as the base name
with neither index nor bit.  Blank tags sort after everything else.

Case-insensitive comparison upper-cases both sides, so punctuation such as
``_`` orders the same way it does in an ordinal ignore-case comparison
(``Ab`` before ``A_B``).
"""

from __future__ import annotations

import functools
import re
from typing import Iterable, List, Optional, Tuple

from .models import AlarmRow, TagKey

# The base is matched lazily so that "Pump.1" splits into base "Pump" and
# bit 1 instead of swallowing the suffix.
_TAG_RE = re.compile(
    r"^(?P<base>[^\[]+?)(?:\[(?P<index>[0-9]+)\])?(?:\.(?P<bit>[0-9]+))?$"
)

SortTuple = Tuple[bool, str, bool, int, bool, int, str]


def _optional_int(text: Optional[str]) -> Optional[int]:
    return int(text) if text is not None else None


def tag_sort_key(tag: str) -> TagKey:
    """Decompose *tag* into its :class:`TagKey`.

    Example::

        >>> tag_sort_key('Pump[2].0')
        TagKey(base_name='Pump', array_index=2, bit_index=0, raw='Pump[2].0')
    """
    if not tag.strip():
        return TagKey(base_name="", raw="")

    match = _TAG_RE.match(tag.strip())
    if match is None:
        return TagKey(base_name=tag, raw=tag)

    return TagKey(
        base_name=match.group("base"),
        array_index=_optional_int(match.group("index")),
        bit_index=_optional_int(match.group("bit")),
        raw=tag,
    )


def key_tuple(key: TagKey) -> SortTuple:
    """Flatten a :class:`TagKey` into a tuple usable with ``sorted()``.

    Each optional component becomes an ``(is_absent, value)`` pair so that
    an absent index or bit compares greater than every present value
    without a sentinel integer.
    """
    return (
        not key.raw.strip(),
        key.base_name.upper(),
        key.array_index is None,
        key.array_index if key.array_index is not None else 0,
        key.bit_index is None,
        key.bit_index if key.bit_index is not None else 0,
        key.raw.upper(),
    )


def compare_tag_keys(a: TagKey, b: TagKey) -> int:
    """Three-way comparison of two keys: -1, 0 or 1."""
    left, right = key_tuple(a), key_tuple(b)
    return (left > right) - (left < right)


def compare_tags(a: str, b: str) -> int:
    """Three-way comparison of two tag strings."""
    return compare_tag_keys(tag_sort_key(a), tag_sort_key(b))


def row_sort_tuple(row: AlarmRow) -> SortTuple:
    return key_tuple(tag_sort_key(row.tag))


def sort_tags(tags: Iterable[str]) -> List[str]:
    """Return *tags* in tag order."""
    return sorted(tags, key=functools.cmp_to_key(compare_tags))


def sort_rows(rows: Iterable[AlarmRow]) -> List[AlarmRow]:
    """Return *rows* sorted by tag.

    The sort is stable: rows whose tags tie on every level keep their
    incoming order.
    """
    return sorted(rows, key=row_sort_tuple)
