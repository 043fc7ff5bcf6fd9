"""Tests for document loading and the analysis CLI."""

import json

import pytest

from analyze import load_content_input, main, parse_frontmatter, parse_intent
from taxonomy import SearchIntent

DOCUMENT = """---
keyword: máy lọc không khí
secondary_keywords:
  - lọc bụi
  - màng HEPA
title: Máy lọc không khí tốt nhất 2025
description: Hướng dẫn chọn máy lọc không khí phù hợp.
intent: commercial
---
<p>Máy lọc không khí giúp không gian sạch hơn.</p>
<h2>Cách chọn</h2>
"""


def test_parse_frontmatter_splits_yaml_and_body() -> None:
    frontmatter, body = parse_frontmatter(DOCUMENT)

    assert frontmatter["keyword"] == "máy lọc không khí"
    assert body.startswith("<p>Máy lọc")


def test_malformed_frontmatter_is_ignored() -> None:
    frontmatter, body = parse_frontmatter("---\nkey: [unclosed\n---\nbody text\n")

    assert frontmatter == {}
    assert body == "body text\n"


def test_document_without_frontmatter_is_all_content() -> None:
    frontmatter, body = parse_frontmatter("<p>plain</p>")

    assert frontmatter == {}
    assert body == "<p>plain</p>"


def test_load_content_input_maps_fields() -> None:
    content_input = load_content_input(DOCUMENT)

    assert content_input.focus_keyword == "máy lọc không khí"
    assert content_input.secondary_keyword_list() == ["lọc bụi", "màng HEPA"]
    assert content_input.seo_title == "Máy lọc không khí tốt nhất 2025"
    assert content_input.slug == "may-loc-khong-khi"
    assert content_input.intent == SearchIntent.COMMERCIAL
    assert content_input.content.startswith("<p>")


def test_explicit_arguments_override_frontmatter() -> None:
    content_input = load_content_input(DOCUMENT, keyword="lọc bụi", intent="Local")

    assert content_input.focus_keyword == "lọc bụi"
    assert content_input.intent == SearchIntent.LOCAL


def test_parse_intent() -> None:
    assert parse_intent(None) == SearchIntent.INFORMATIONAL
    assert parse_intent("TRANSACTIONAL") == SearchIntent.TRANSACTIONAL
    assert parse_intent(SearchIntent.LOCAL) == SearchIntent.LOCAL
    with pytest.raises(ValueError):
        parse_intent("navigational")


def test_main_prints_json(tmp_path, capsys) -> None:
    path = tmp_path / "post.html"
    path.write_text(DOCUMENT, encoding="utf-8")

    main(["--input", str(path), "--json", "--year", "2025"])
    data = json.loads(capsys.readouterr().out)

    assert 0 <= data["total_score"] <= 100
    assert data["taxonomy"]["intent"] in [i.value for i in SearchIntent]
    assert {item["id"] for item in data["priority_fixes"]} <= {item["id"] for item in data["audit_items"]}


def test_main_prints_summary(tmp_path, capsys) -> None:
    path = tmp_path / "post.html"
    path.write_text(DOCUMENT, encoding="utf-8")

    main(["--input", str(path), "--year", "2025"])

    assert "TOTAL:" in capsys.readouterr().out


def test_main_missing_file_exits(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main(["--input", str(tmp_path / "missing.html")])


def test_main_unknown_intent_exits(tmp_path) -> None:
    path = tmp_path / "post.html"
    path.write_text(DOCUMENT, encoding="utf-8")

    with pytest.raises(SystemExit):
        main(["--input", str(path), "--intent", "navigational"])
