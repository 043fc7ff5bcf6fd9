"""Anchor extraction and classification for raw article content."""

import re
from dataclasses import dataclass

from config import GENERIC_ANCHORS, LINK_LOCATION
from metrics import fold, strip_tags

# Self-closing anchors (<a href="..."/>) never match.
ANCHOR_PATTERN = re.compile(r'<a\b([^>]*?)(?<!/)>(.*?)</a\s*>', re.IGNORECASE | re.DOTALL)
HREF_PATTERN = re.compile(r'''(?<![\w-])href\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>"']+))''', re.IGNORECASE)

INTERNAL_PREFIXES = ("/", "#", ".")


@dataclass(frozen=True)
class LinkRecord:
    href: str
    anchor_text: str
    type: str  # "internal" | "external"
    location: str  # "intro" | "body" | "conclusion"
    is_generic: bool

    @property
    def is_internal(self) -> bool:
        return self.type == "internal"


def classify_href(href: str) -> str:
    return "internal" if href.startswith(INTERNAL_PREFIXES) else "external"


def locate(offset: int, total_length: int) -> str:
    if offset < LINK_LOCATION["intro_ratio"] * total_length:
        return "intro"
    if offset > LINK_LOCATION["conclusion_ratio"] * total_length:
        return "conclusion"
    return "body"


def is_generic_anchor(anchor_text: str) -> bool:
    text = fold(anchor_text).strip()
    if not text:
        return False
    for phrase in GENERIC_ANCHORS:
        phrase = fold(phrase)
        if text == phrase or phrase in text:
            return True
    return False


def analyze_links(content: str) -> list[LinkRecord]:
    content = content or ''
    links = []
    for match in ANCHOR_PATTERN.finditer(content):
        href_match = HREF_PATTERN.search(match.group(1))
        if not href_match:
            continue
        href = next(g for g in href_match.groups() if g is not None).strip()
        anchor_text = ' '.join(strip_tags(match.group(2)).split())
        links.append(LinkRecord(
            href=href,
            anchor_text=anchor_text,
            type=classify_href(href),
            location=locate(match.start(), len(content)),
            is_generic=is_generic_anchor(anchor_text),
        ))
    return links
