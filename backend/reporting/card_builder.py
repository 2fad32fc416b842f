"""
Settlement card HTML builder.

Turns an assembled Document into a self-contained, script-free HTML page. The
renderer only captures it; all layout decisions (color classes, segment
wrapping) are already in the Document.
"""
from __future__ import annotations

import html
from typing import Any

from models import Card, CardKind, Document, KeyValueLine, RowSegment, TableSection

TOTAL_HEADER = "Разом"
WRAP_WIDTH_PX = 720

DISPLAY_COLORS = {
    "favorable": "#0a7a2f",
    "unfavorable": "#b00020",
    "neutral": "#111111",
}


def _esc(value: Any) -> str:
    return html.escape(str(value if value is not None else ""), quote=True)


def _card_css() -> str:
    colors = "\n".join(f"    .{name}{{ color:{color}; }}" for name, color in DISPLAY_COLORS.items())
    return f"""
    *{{box-sizing:border-box}}
    body{{
      margin:0;
      background:#ffffff;
      font-family:-apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,Arial,sans-serif;
      color:#111;
      padding:28px;
    }}
    .wrap{{ width:{WRAP_WIDTH_PX}px; min-height:1px; margin:0 auto; }}
    .card{{
      border:1px solid #e9e9e9;
      border-radius:26px;
      padding:22px 22px;
      background:#fff;
      margin:0 0 22px 0;
    }}
    .title{{ font-size:34px; font-weight:800; margin:0 0 14px 0; }}
    .row{{
      display:flex;
      justify-content:space-between;
      gap:16px;
      padding:18px 0;
      border-top:1px solid #f1f1f1;
      align-items:center;
    }}
    .row:first-of-type{{ border-top:0; padding-top:6px; }}
    .k{{ font-size:26px; color:#444; }}
    .v{{ font-size:34px; font-weight:800; }}
{colors}
    table{{ width:100%; border-collapse:collapse; margin-top:12px; table-layout:fixed; }}
    table.partial{{ margin-right:auto; }}
    th, td{{
      padding:18px 10px;
      border-top:1px solid #f1f1f1;
      text-align:right;
      white-space:nowrap;
      overflow:hidden;
    }}
    th{{
      text-align:left;
      color:#111;
      font-size:26px;
      font-weight:800;
      background:#fafafa;
      border-top:0;
    }}
    td{{ font-size:34px; font-weight:800; }}
    .time td{{
      font-weight:600;
      font-size:22px;
      color:#9a9a9a;
      padding-top:12px;
      padding-bottom:6px;
    }}
    """


def KeyValueRow(line: KeyValueLine) -> str:
    return f"""<div class="row">
            <div class="k">{_esc(line.label)}</div>
            <div class="v {_esc(line.display.value)}">{_esc(line.value)}</div>
          </div>"""


def IdentityCardBlock(card: Card) -> str:
    rows = "".join(KeyValueRow(line) for line in card.lines)
    return f"""
      <div class="card" data-kind="{CardKind.IDENTITY.value}">
        <div class="title">{_esc(card.title)}</div>
        {rows}
      </div>
    """


def _segment_table(segment: RowSegment, *, width: int, with_header: bool, show_annotations: bool) -> str:
    count = len(segment.values)
    header = ""
    if with_header:
        header = f"<thead><tr><th>{_esc(TOTAL_HEADER)}</th>{'<th></th>' * (count - 1)}</tr></thead>"
    values_row = "<tr>" + "".join(
        f'<td class="{_esc(c.display.value)}">{_esc(c.text)}</td>' for c in segment.values
    ) + "</tr>"
    times_row = ""
    if show_annotations:
        times_row = '<tr class="time">' + "".join(f"<td>{_esc(a.text)}</td>" for a in segment.annotations) + "</tr>"
    # A short trailing segment keeps the column width of full segments.
    if segment.is_partial:
        pct = round(100.0 * count / max(1, width), 4)
        open_tag = f'<table class="partial" style="width:{pct}%">'
    else:
        open_tag = "<table>"
    return f"{open_tag}{header}<tbody>{values_row}{times_row}</tbody></table>"


def TableSectionBlock(section: TableSection, width: int) -> str:
    return "".join(
        _segment_table(
            seg,
            width=width,
            with_header=(idx == 0),
            show_annotations=section.show_annotations,
        )
        for idx, seg in enumerate(section.segments)
    )


def TableCardBlock(card: Card, width: int) -> str:
    sections = "".join(TableSectionBlock(s, width) for s in card.sections)
    return f"""
      <div class="card" data-kind="{CardKind.TABLE.value}" data-scheme="{_esc(card.scheme.value)}">
        <div class="title">{_esc(card.title)}</div>
        {sections}
      </div>
    """


def build_card_html(document: Document) -> str:
    blocks = []
    for card in document.cards:
        if card.kind == CardKind.IDENTITY:
            blocks.append(IdentityCardBlock(card))
        else:
            blocks.append(TableCardBlock(card, document.chunk_width))
    return f"""
<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<style>{_card_css()}</style>
</head>
<body>
  <div class="wrap">
    {''.join(blocks)}
  </div>
</body>
</html>
    """.strip()
