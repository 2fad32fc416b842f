"""
Document assembly: canonical payload -> ordered, render-ready cards.

Pipeline (build_document): normalize -> resolve colors -> chunk -> assemble.
Identity card first when present, then each table block in slot order.
Blocks with nothing to show are dropped; a Document never holds an empty card.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from config import DEFAULT_CHUNK_WIDTH, validate_chunk_width
from models import (
    Card,
    CardKind,
    DisplayClass,
    Document,
    IdentityCard,
    KeyValueLine,
    TableBlock,
    TableSection,
)
from services.input_normalizer import normalize

from .chunker import chunk
from .color_scheme import resolve_block, resolve_identity

NAME_LABEL = "Ім'я"


def _identity_card(identity: IdentityCard) -> Card:
    lines = [KeyValueLine(label=NAME_LABEL, value=identity.name, display=DisplayClass.NEUTRAL)]
    lines.extend(resolve_identity(identity))
    return Card(kind=CardKind.IDENTITY, title=identity.title, lines=lines)


def _table_card(block: TableBlock, width: int) -> Optional[Card]:
    if block.is_empty:
        return None
    sections: list[TableSection] = []
    for canonical_row, resolved_row in zip(block.rows, resolve_block(block)):
        segments = chunk(resolved_row, width)
        if not segments:
            continue
        # Row-level decision: one non-blank annotation anywhere shows the line on every segment.
        sections.append(TableSection(segments=segments, show_annotations=canonical_row.has_annotations))
    if not sections:
        return None
    return Card(kind=CardKind.TABLE, title=block.title, sections=sections, scheme=block.scheme)


def assemble(
    identity: Optional[IdentityCard],
    tables: Sequence[TableBlock],
    width: int = DEFAULT_CHUNK_WIDTH,
) -> Document:
    size = validate_chunk_width(width)
    cards: list[Card] = []
    if identity is not None:
        cards.append(_identity_card(identity))
    for block in tables:
        card = _table_card(block, size)
        if card is not None:
            cards.append(card)
    return Document(cards=cards, chunk_width=size)


def build_document(raw: Any, width: int = DEFAULT_CHUNK_WIDTH) -> Document:
    """Single engine entry point: any accepted payload -> Document."""
    payload = normalize(raw)
    return assemble(payload.identity, payload.tables, width)
