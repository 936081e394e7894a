"""
Shared data models for the alarm toolkit.

Provides:
- ``TriggerInfo``: one ``<trigger>`` definition from an alarm export.
- ``AlarmRow``: one output row (PLC tag + description).  Frozen, so rows
  can be shared between the parse, filter, and sort stages safely.
- ``TagKey``: the decomposed form of a tag used only for ordering.  Array
  index and bit are ``None`` when absent rather than a sentinel integer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .schema import BIT_TRIGGER_TYPE


# ===================================================================
# Dataclasses
# ===================================================================

@dataclass(frozen=True)
class TriggerInfo:
    """Metadata for a single ``<trigger>`` element."""
    id: str
    kind: str = ""
    expression: str = ""

    @property
    def is_bit(self) -> bool:
        """True when the trigger's type is ``bit`` (any case)."""
        return self.kind.lower() == BIT_TRIGGER_TYPE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind,
            "expression": self.expression,
        }


@dataclass(frozen=True)
class AlarmRow:
    """A PLC tag address paired with its alarm description."""
    tag: str
    description: str = ""

    def to_dict(self) -> dict:
        """Serialize to a plain dict (for JSON compatibility)."""
        return {
            "tag": self.tag,
            "description": self.description,
        }


@dataclass(frozen=True)
class TagKey:
    """Sortable decomposition of ``base[index].bit``."""
    base_name: str
    array_index: Optional[int] = None
    bit_index: Optional[int] = None
    raw: str = ""

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "base_name": self.base_name,
            "raw": self.raw,
        }
        if self.array_index is not None:
            d["array_index"] = self.array_index
        if self.bit_index is not None:
            d["bit_index"] = self.bit_index
        return d
