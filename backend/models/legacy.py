# Wire shapes accepted on POST /render, structured and legacy.
# decode_payload() classifies raw JSON into these; it never raises.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Literal, Optional, Union

from .canonical_report import TableSlot


# Any of these, non-blank, makes the legacy identity card appear; values alone do not.
LEGACY_IDENTITY_KEYS = (
    "name",
    "labelRozmin",
    "labelRozrah",
    "labelDebt",
)

SLOT_BLOCK_KEYS = {
    TableSlot.REDISTRIBUTION: "rozmin",
    TableSlot.SETTLEMENT: "rozrahunok",
}
SLOT_DETAILS_KEYS = {
    TableSlot.REDISTRIBUTION: "detailsRozmin",
    TableSlot.SETTLEMENT: "detailsRozrah",
}
# Only the settlement slot has a single-value legacy fallback.
SLOT_SCALAR_KEYS = {
    TableSlot.SETTLEMENT: "valueRozrah",
}


class PayloadShape(str, Enum):
    STRUCTURED = "structured"
    LEGACY = "legacy"
    MIXED = "mixed"
    EMPTY = "empty"


def as_text(value: Any) -> str:
    """Coerce a wire scalar to text; wrong-typed values become ''."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return ""
        return str(int(value)) if value.is_integer() else str(value)
    return ""


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


# --- Identity sources ---


@dataclass(frozen=True)
class StructuredIdentity:
    """blocks.result: {title, name, rows: [{key, value, cls}]}"""
    data: dict
    kind: Literal["structured"] = "structured"


@dataclass(frozen=True)
class LegacyIdentity:
    """Flat scalars: name, labelRozmin/valueRozmin, labelRozrah/valueRozrah, labelDebt/valueDebt."""
    name: Any = None
    label_rozmin: Any = None
    value_rozmin: Any = None
    label_rozrah: Any = None
    value_rozrah: Any = None
    label_debt: Any = None
    value_debt: Any = None
    kind: Literal["legacy"] = "legacy"


IdentitySource = Union[StructuredIdentity, LegacyIdentity]


# --- Table slot sources ---


@dataclass(frozen=True)
class StructuredTable:
    """blocks.<slot>: {title, scheme?, rows: [{values: [{text, cls}], times: [{text}]}]}"""
    data: dict
    kind: Literal["structured"] = "structured"


@dataclass(frozen=True)
class LegacyDetails:
    """Pipe-delimited string, e.g. '100 | -40 | -30 | 30'."""
    text: str
    kind: Literal["details"] = "details"

    @property
    def segments(self) -> List[str]:
        return [s.strip() for s in self.text.split("|") if s.strip()]


@dataclass(frozen=True)
class LegacyScalar:
    """Single legacy value rendered as a one-cell row."""
    text: str
    kind: Literal["scalar"] = "scalar"


SlotSource = Union[StructuredTable, LegacyDetails, LegacyScalar]


@dataclass(frozen=True)
class DecodedPayload:
    identity: Optional[IdentitySource] = None
    slots: dict[TableSlot, Optional[SlotSource]] = field(default_factory=dict)
    game_date: str = ""

    def slot(self, slot: TableSlot) -> Optional[SlotSource]:
        return self.slots.get(slot)


def _decode_identity(raw: dict, blocks: dict) -> Optional[IdentitySource]:
    result = blocks.get("result")
    if isinstance(result, dict):
        return StructuredIdentity(data=result)
    if any(as_text(raw.get(k)).strip() for k in LEGACY_IDENTITY_KEYS):
        return LegacyIdentity(
            name=raw.get("name"),
            label_rozmin=raw.get("labelRozmin"),
            value_rozmin=raw.get("valueRozmin"),
            label_rozrah=raw.get("labelRozrah"),
            value_rozrah=raw.get("valueRozrah"),
            label_debt=raw.get("labelDebt"),
            value_debt=raw.get("valueDebt"),
        )
    return None


def _decode_slot(raw: dict, blocks: dict, slot: TableSlot) -> Optional[SlotSource]:
    block = blocks.get(SLOT_BLOCK_KEYS[slot])
    if isinstance(block, dict):
        return StructuredTable(data=block)
    details = as_text(raw.get(SLOT_DETAILS_KEYS[slot]))
    if details.strip():
        return LegacyDetails(text=details)
    scalar_key = SLOT_SCALAR_KEYS.get(slot)
    if scalar_key:
        scalar = as_text(raw.get(scalar_key)).strip()
        if scalar:
            return LegacyScalar(text=scalar)
    return None


def decode_payload(raw: Any) -> DecodedPayload:
    """Classify raw JSON into structured/legacy sources per sub-entity. Total; never raises."""
    data = as_mapping(raw)
    blocks = as_mapping(data.get("blocks"))
    return DecodedPayload(
        identity=_decode_identity(data, blocks),
        slots={slot: _decode_slot(data, blocks, slot) for slot in TableSlot},
        game_date=as_text(data.get("gameDate")).strip(),
    )


def detect_shape(decoded: DecodedPayload) -> PayloadShape:
    kinds = [decoded.identity.kind] if decoded.identity is not None else []
    kinds.extend(src.kind for src in decoded.slots.values() if src is not None)
    if not kinds:
        return PayloadShape.EMPTY
    structured = [k == "structured" for k in kinds]
    if all(structured):
        return PayloadShape.STRUCTURED
    if not any(structured):
        return PayloadShape.LEGACY
    return PayloadShape.MIXED
