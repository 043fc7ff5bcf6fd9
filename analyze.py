#!/usr/bin/env python3
"""
Score an article against the SEO / readability / trust rule battery.

Usage:
    python analyze.py --input posts/may-loc-khong-khi.html
    python analyze.py --input draft.md --keyword "máy lọc không khí" --intent Commercial --json
"""

import argparse
import json
import re
import sys
from pathlib import Path

import yaml

from metrics import slugify
from scoring import ContentInput, analyze_content
from taxonomy import SearchIntent


def parse_frontmatter(content: str) -> tuple[dict, str]:
    frontmatter = {}
    body = content
    fm_match = re.match(r'^---\s*\n(.*?)\n---\s*\n(.*)$', content, re.DOTALL)
    if fm_match:
        try:
            frontmatter = yaml.safe_load(fm_match.group(1)) or {}
        except yaml.YAMLError:
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            frontmatter = {}
        body = fm_match.group(2)
    return frontmatter, body


def parse_intent(value) -> SearchIntent:
    if isinstance(value, SearchIntent):
        return value
    text = str(value or "").strip().lower()
    if not text:
        return SearchIntent.INFORMATIONAL
    for intent in SearchIntent:
        if intent.value.lower() == text or intent.name.lower() == text:
            return intent
    raise ValueError(f"Unknown search intent: {value!r}. Available: {', '.join(i.value for i in SearchIntent)}")


def load_content_input(document: str, keyword: str | None = None, intent=None) -> ContentInput:
    """Build a ContentInput from a document with optional YAML frontmatter.

    Frontmatter keys: keyword, secondary_keywords (string or list), title,
    slug, description, intent. Explicit ``keyword``/``intent`` arguments win
    over the frontmatter. A missing slug is generated from the focus keyword.
    """
    frontmatter, body = parse_frontmatter(document)
    focus_keyword = keyword or str(frontmatter.get("keyword") or "")
    secondary = frontmatter.get("secondary_keywords") or ""
    if isinstance(secondary, list):
        secondary = ", ".join(str(s) for s in secondary)
    return ContentInput(
        focus_keyword=focus_keyword,
        secondary_keywords=str(secondary),
        seo_title=str(frontmatter.get("title") or ""),
        slug=str(frontmatter.get("slug") or slugify(focus_keyword)),
        meta_description=str(frontmatter.get("description") or ""),
        content=body,
        intent=parse_intent(intent if intent is not None else frontmatter.get("intent")),
    )


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Score an article's SEO, readability and trust signals")
    parser.add_argument("--input", required=True, help="HTML or markdown article, optionally with YAML frontmatter")
    parser.add_argument("--keyword", help="Focus keyword (overrides frontmatter 'keyword')")
    parser.add_argument("--intent", help=f"Search intent: {', '.join(i.value for i in SearchIntent)}")
    parser.add_argument("--year", type=int, default=None, help="Year used by the title power-word check (default: today)")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")

    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found")
        sys.exit(1)

    try:
        content_input = load_content_input(input_path.read_text(encoding="utf-8"), keyword=args.keyword, intent=args.intent)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    result = analyze_content(content_input, year=args.year)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(f"\n{result.summary()}\n")


if __name__ == "__main__":
    main()
