"""
Render-ready document description.

Produced by engine.assembler, consumed by reporting.card_builder. Everything
here is already resolved (display classes) and laid out (chunked segments);
a renderer only has to draw it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .canonical_report import AnnotationCell, CellTag, Scheme


class DisplayClass(str, Enum):
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    NEUTRAL = "neutral"


class CardKind(str, Enum):
    IDENTITY = "identity"
    TABLE = "table"


@dataclass(frozen=True)
class ResolvedCell:
    text: str
    tag: CellTag
    display: DisplayClass


@dataclass(frozen=True)
class ResolvedRow:
    values: list[ResolvedCell] = field(default_factory=list)
    annotations: list[AnnotationCell] = field(default_factory=list)


@dataclass(frozen=True)
class RowSegment:
    """Bounded-width slice of a row; annotations always match values in length."""
    values: list[Any]
    annotations: list[AnnotationCell]
    is_partial: bool


@dataclass(frozen=True)
class TableSection:
    """One canonical row after chunking. show_annotations is decided per row, not per segment."""
    segments: list[RowSegment]
    show_annotations: bool


@dataclass(frozen=True)
class KeyValueLine:
    label: str
    value: str
    display: DisplayClass = DisplayClass.NEUTRAL


@dataclass(frozen=True)
class Card:
    kind: CardKind
    title: str
    lines: list[KeyValueLine] = field(default_factory=list)
    sections: list[TableSection] = field(default_factory=list)
    scheme: Scheme = Scheme.NORMAL


@dataclass(frozen=True)
class Document:
    cards: list[Card]
    chunk_width: int

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def to_dict(self) -> dict[str, Any]:
        def _cell(c: Any) -> dict[str, Any]:
            return {"text": c.text, "tag": c.tag.value, "display": c.display.value}

        return {
            "chunk_width": self.chunk_width,
            "cards": [
                {
                    "kind": card.kind.value,
                    "title": card.title,
                    "scheme": card.scheme.value,
                    "lines": [
                        {"label": ln.label, "value": ln.value, "display": ln.display.value}
                        for ln in card.lines
                    ],
                    "sections": [
                        {
                            "show_annotations": section.show_annotations,
                            "segments": [
                                {
                                    "values": [_cell(c) for c in seg.values],
                                    "annotations": [a.text for a in seg.annotations],
                                    "is_partial": seg.is_partial,
                                }
                                for seg in section.segments
                            ],
                        }
                        for section in card.sections
                    ],
                }
                for card in self.cards
            ],
        }


@dataclass(frozen=True)
class Viewport:
    width: int = 900
    height: int = 1600
    scale: float = 2.0
