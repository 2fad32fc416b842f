from __future__ import annotations

from engine.assembler import build_document
from reporting.card_builder import TOTAL_HEADER, build_card_html


def test_card_html_includes_identity_and_tables():
    html = build_card_html(
        build_document({"name": "Петро", "valueRozrah": "250", "detailsRozmin": "100|-40|30"}, 6)
    )
    assert "Результат" in html
    assert "Ім&#x27;я" in html
    assert "Петро" in html
    assert "Розмін" in html
    assert 'data-scheme="inverted"' in html
    assert TOTAL_HEADER in html
    assert '<td class="unfavorable">100</td>' in html
    assert '<td class="favorable">-40</td>' in html


def test_card_html_escapes_payload_text():
    html = build_card_html(build_document({"name": "<script>alert(1)</script>", "detailsRozrah": "a&b"}, 6))
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "a&amp;b" in html


def test_partial_segment_keeps_full_column_width():
    html = build_card_html(build_document({"detailsRozrah": "1|2|3|4|5"}, 4))
    assert html.count("<table") == 2
    assert '<table class="partial" style="width:25.0%">' in html
    # Header only on the first segment of a row.
    assert html.count(f"<th>{TOTAL_HEADER}</th>") == 1


def test_time_line_rendered_only_when_row_has_annotations():
    with_times = {
        "blocks": {
            "rozrahunok": {
                "title": "Розрахунок",
                "rows": [{"values": [{"text": "1"}, {"text": "2"}, {"text": "3"}], "times": [{"text": "18:05"}]}],
            }
        }
    }
    html = build_card_html(build_document(with_times, 2))
    assert html.count('<tr class="time">') == 2
    assert "18:05" in html

    html = build_card_html(build_document({"detailsRozrah": "1|2|3"}, 2))
    assert '<tr class="time">' not in html


def test_empty_document_still_renders_wrapper():
    html = build_card_html(build_document({}, 6))
    assert '<div class="wrap">' in html
    assert 'class="card"' not in html
