"""Tests for FAQ suggestions and FAQPage structured data."""

import json

from faq import build_faq_structured_data, suggest_faqs
from taxonomy import SearchIntent


def test_empty_keyword_gives_no_questions() -> None:
    assert suggest_faqs("", SearchIntent.INFORMATIONAL) == []
    assert suggest_faqs("   ", SearchIntent.TRANSACTIONAL) == []


def test_templates_follow_intent() -> None:
    informational = suggest_faqs("máy lọc không khí", SearchIntent.INFORMATIONAL)
    transactional = suggest_faqs("máy lọc không khí", SearchIntent.TRANSACTIONAL)
    local = suggest_faqs("máy lọc không khí", "Local")

    assert informational[0] == "máy lọc không khí là gì?"
    assert "Mua máy lọc không khí ở đâu uy tín?" in transactional
    assert any("mở cửa" in q for q in local)
    assert all("máy lọc không khí" in q for q in informational + transactional + local)


def test_structured_data_is_faqpage_json_ld() -> None:
    questions = suggest_faqs("máy lọc", SearchIntent.COMMERCIAL)
    data = json.loads(build_faq_structured_data(questions, {questions[0]: "Tùy diện tích phòng."}))

    assert data["@type"] == "FAQPage"
    assert len(data["mainEntity"]) == len(questions)
    assert data["mainEntity"][0]["name"] == questions[0]
    assert data["mainEntity"][0]["acceptedAnswer"]["text"] == "Tùy diện tích phòng."
    assert data["mainEntity"][1]["acceptedAnswer"]["text"] == ""


def test_structured_data_empty() -> None:
    assert build_faq_structured_data([]) == ""
