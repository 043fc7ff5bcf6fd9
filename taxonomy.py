"""
Heuristic content taxonomy: intent, content type, funnel stage, industry.

Each classifier is an ordered table evaluated top to bottom; the first row
that matches wins. No confidence is computed.
"""

import re
from dataclasses import dataclass
from enum import Enum

from config import TAXONOMY
from metrics import count_occurrences, word_count


class SearchIntent(str, Enum):
    INFORMATIONAL = "Informational"
    COMMERCIAL = "Commercial"
    TRANSACTIONAL = "Transactional"
    LOCAL = "Local"


@dataclass(frozen=True)
class ContentTaxonomy:
    intent: SearchIntent
    content_type: str
    funnel_stage: str
    industry: str
    sub_industry: str
    seo_goal: str

    def to_dict(self) -> dict:
        return {
            "intent": self.intent.value,
            "content_type": self.content_type,
            "funnel_stage": self.funnel_stage,
            "industry": self.industry,
            "sub_industry": self.sub_industry,
            "seo_goal": self.seo_goal,
        }


def _has(*phrases):
    return lambda text, wc: any(p in text for p in phrases)


CONTENT_TYPE_RULES = [
    (lambda text, wc: bool(re.search(r'top\s+\d+|danh sách|những', text)), "Top list"),
    (_has("so sánh", " vs "), "Comparison"),
    (_has("đánh giá", "review"), "Product review"),
    (lambda text, wc: "hướng dẫn" in text and ("mua" in text or "chọn" in text), "Buying guide"),
    (_has("hướng dẫn", "cách làm"), "How-to guide"),
    (_has("là gì", "định nghĩa"), "Glossary"),
    (_has("lỗi", "sửa", "khắc phục"), "Troubleshooting"),
    (_has("faq", "câu hỏi thường gặp"), "FAQ"),
    (lambda text, wc: wc < TAXONOMY["landing_page_max_words"] and "mua" in text, "Sales landing page"),
]

# (intent, content types or None for any) -> (funnel stage, SEO goal)
FUNNEL_RULES = [
    ((SearchIntent.TRANSACTIONAL, None), ("BOFU", "Conversion")),
    ((SearchIntent.COMMERCIAL, None), ("MOFU", "Conversion")),
    ((None, ("Product review", "Comparison")), ("TOFU", "Brand-Trust")),
]
DEFAULT_FUNNEL = ("TOFU", "Traffic")


def keyword_hits(text: str, keywords: list[str]) -> int:
    return sum(count_occurrences(text, kw) for kw in keywords)


def detect_intent(text: str, declared: SearchIntent) -> SearchIntent:
    if keyword_hits(text, TAXONOMY["transactional_keywords"]) > TAXONOMY["transactional_threshold"]:
        return SearchIntent.TRANSACTIONAL
    if keyword_hits(text, TAXONOMY["commercial_keywords"]) > TAXONOMY["commercial_threshold"]:
        return SearchIntent.COMMERCIAL
    return declared


def detect_content_type(text: str, wc: int) -> str:
    for predicate, label in CONTENT_TYPE_RULES:
        if predicate(text, wc):
            return label
    return TAXONOMY["default_content_type"]


def detect_funnel(intent: SearchIntent, content_type: str) -> tuple[str, str]:
    for (rule_intent, rule_types), result in FUNNEL_RULES:
        if rule_intent is not None and intent != rule_intent:
            continue
        if rule_types is not None and content_type not in rule_types:
            continue
        return result
    return DEFAULT_FUNNEL


def detect_industry(text: str) -> tuple[str, str]:
    if keyword_hits(text, TAXONOMY["electronics_keywords"]) <= TAXONOMY["electronics_threshold"]:
        return TAXONOMY["default_industry"], TAXONOMY["default_sub_industry"]
    for sub_industry, keywords in TAXONOMY["sub_industries"]:
        if any(kw in text for kw in keywords):
            return TAXONOMY["electronics_industry"], sub_industry
    return TAXONOMY["electronics_industry"], TAXONOMY["default_sub_industry"]


def detect_taxonomy(content_input) -> ContentTaxonomy:
    text = f"{content_input.seo_title} {content_input.content}".lower()
    intent = detect_intent(text, content_input.intent)
    content_type = detect_content_type(text, word_count(content_input.content))
    funnel_stage, seo_goal = detect_funnel(intent, content_type)
    industry, sub_industry = detect_industry(text)
    return ContentTaxonomy(
        intent=intent,
        content_type=content_type,
        funnel_stage=funnel_stage,
        industry=industry,
        sub_industry=sub_industry,
        seo_goal=seo_goal,
    )
