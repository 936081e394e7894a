"""
Trigger lookup for a single alarm export document.

Every ``<trigger>`` element becomes a :class:`TriggerInfo`, keyed by its
``id`` compared case-insensitively.  An index belongs to exactly one
document; build a fresh one for every file so trigger ids never leak
between exports.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from lxml import etree

from .models import TriggerInfo
from .schema import (
    TRIGGER_ELEMENT,
    TRIGGER_EXPRESSION_ATTR,
    TRIGGER_ID_ATTR,
    TRIGGER_TYPE_ATTR,
)
from .utils import get_attr, iter_elements


def _normalize_id(trigger_id: str) -> str:
    return trigger_id.lower()


class TriggerIndex:
    """Case-insensitive map of trigger id to :class:`TriggerInfo`.

    When a document defines the same id twice the later definition
    replaces the earlier one.  The replaced ids are kept in
    :attr:`duplicate_ids` so callers can report them.
    """

    def __init__(self, triggers: Iterable[TriggerInfo] = ()) -> None:
        self._by_id: Dict[str, TriggerInfo] = {}
        self.duplicate_ids: List[str] = []
        for trigger in triggers:
            self.add(trigger)

    def add(self, trigger: TriggerInfo) -> None:
        """Insert *trigger*; blank ids are ignored."""
        if not trigger.id.strip():
            return
        key = _normalize_id(trigger.id)
        if key in self._by_id:
            self.duplicate_ids.append(trigger.id)
        self._by_id[key] = trigger

    def get(self, trigger_id: str) -> Optional[TriggerInfo]:
        """Return the trigger for *trigger_id* (any case), or None."""
        return self._by_id.get(_normalize_id(trigger_id))

    def __contains__(self, trigger_id: object) -> bool:
        return isinstance(trigger_id, str) and _normalize_id(trigger_id) in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[TriggerInfo]:
        return iter(self._by_id.values())

    def __repr__(self) -> str:
        return f"TriggerIndex({len(self)} triggers)"


def read_trigger(element: etree._Element) -> TriggerInfo:
    """Build a :class:`TriggerInfo` from a ``<trigger>`` element.

    Missing attributes read as empty strings.
    """
    return TriggerInfo(
        id=get_attr(element, TRIGGER_ID_ATTR),
        kind=get_attr(element, TRIGGER_TYPE_ATTR),
        expression=get_attr(element, TRIGGER_EXPRESSION_ATTR),
    )


def build_trigger_index(root: etree._Element) -> TriggerIndex:
    """Index every ``<trigger>`` element under *root*."""
    return TriggerIndex(
        read_trigger(el) for el in iter_elements(root, TRIGGER_ELEMENT)
    )
