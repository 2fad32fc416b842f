"""
Canonical Settlement Report Model.

Every accepted payload shape (structured blocks, legacy scalars, pipe strings)
normalizes into this schema before any color resolution or layout runs.
No engine code reads the raw request body.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


REDISTRIBUTION_TITLE = "Розмін"
SETTLEMENT_TITLE = "Розрахунок"
DEBT_LABEL = "Підсумок"
IDENTITY_TITLE = "Результат"


class CellTag(str, Enum):
    """Semantic classification supplied by the caller; not a color."""
    POS = "pos"
    NEG = "neg"
    ZERO = "zero"


class Scheme(str, Enum):
    NORMAL = "normal"
    INVERTED = "inverted"


class TableSlot(str, Enum):
    """The two fixed table slots, in document order."""
    REDISTRIBUTION = "rozmin"
    SETTLEMENT = "rozrahunok"


SLOT_DEFAULT_TITLES = {
    TableSlot.REDISTRIBUTION: REDISTRIBUTION_TITLE,
    TableSlot.SETTLEMENT: SETTLEMENT_TITLE,
}


class Cell(BaseModel):
    text: str = ""
    tag: CellTag = CellTag.ZERO


class AnnotationCell(BaseModel):
    """Sub-label under a value (typically a timestamp)."""
    text: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


class Row(BaseModel):
    """
    One line of values with optional positional annotations.

    annotations is either empty or as long as values; a shorter list is
    tolerated and missing entries read as blank.
    """
    values: List[Cell] = Field(default_factory=list)
    annotations: List[AnnotationCell] = Field(default_factory=list)

    @property
    def has_annotations(self) -> bool:
        return any(not a.is_blank for a in self.annotations)


class TableBlock(BaseModel):
    """Itemized table for one slot. scheme is always explicit here."""
    title: str = ""
    scheme: Scheme = Scheme.NORMAL
    rows: List[Row] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not any(r.values for r in self.rows)


class IdentityEntry(BaseModel):
    label: str = ""
    value: str = ""
    tag: CellTag = CellTag.ZERO


class IdentityCard(BaseModel):
    """Summary card: player name plus headline figures."""
    title: str = IDENTITY_TITLE
    name: str = ""
    entries: List[IdentityEntry] = Field(default_factory=list)


class CanonicalPayload(BaseModel):
    """Normalizer output: optional identity plus the fixed table slots in order."""
    identity: Optional[IdentityCard] = None
    tables: List[TableBlock] = Field(default_factory=list)
