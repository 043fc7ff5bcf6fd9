"""
Text metrics extracted from HTML-ish content.

Tag stripping here is approximate: anything shaped like ``<...>`` is treated
as markup. All functions are total and return zero/empty values for empty input.
"""

import re
import unicodedata
from dataclasses import dataclass, field

TAG_PATTERN = re.compile(r'<[^>]*>')
PARAGRAPH_SPLIT = re.compile(r'\n\s*\n|</p\s*>', re.IGNORECASE)
LIST_PATTERN = re.compile(r'<(?:ul|ol|li)\b|^\s*(?:[-*+]|\d+[.)])\s+\S', re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class TextMetrics:
    plain_text: str
    word_count: int
    h2_count: int
    h3_count: int
    has_list: bool
    paragraphs: list[str] = field(default_factory=list)


def strip_tags(text: str) -> str:
    return TAG_PATTERN.sub(' ', text or '')


def word_count(text: str) -> int:
    return len(strip_tags(text).split())


def count_occurrences(haystack: str, needle: str) -> int:
    """Case-insensitive count of a literal substring, in either Unicode form."""
    if not needle:
        return 0
    needle = unicodedata.normalize('NFC', needle)
    haystack = unicodedata.normalize('NFC', haystack or '')
    return len(re.findall(re.escape(needle), haystack, re.IGNORECASE))


def fold(text: str) -> str:
    """Lowercase and drop diacritics so 'Tại Đây' compares equal to 'tai day'."""
    decomposed = unicodedata.normalize('NFD', text or '')
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.replace('đ', 'd').replace('Đ', 'D').lower()


def _nfc_lower(text: str) -> str:
    return unicodedata.normalize('NFC', text or '').lower()


def phrase_spans(haystack: str, needle: str) -> list[tuple[int, int]]:
    """
    Spans of whole-word matches of ``needle`` in the NFC-lowered haystack.

    Case-insensitive; diacritics still matter ('giá' != 'gia'). Word edges are
    only enforced where the needle itself starts or ends with a word character,
    so 'nguồn:' still matches 'Nguồn:Bộ Y tế'.
    """
    needle = _nfc_lower(needle).strip()
    if not needle:
        return []
    pattern = re.escape(needle)
    if re.match(r'\w', needle):
        pattern = r'(?<!\w)' + pattern
    if re.search(r'\w$', needle):
        pattern += r'(?!\w)'
    return [m.span() for m in re.finditer(pattern, _nfc_lower(haystack))]


def contains_phrase(haystack: str, needle: str) -> bool:
    return bool(phrase_spans(haystack, needle))


def contains_folded(haystack: str, needle: str) -> bool:
    needle = fold(needle).strip()
    if not needle:
        return False
    return needle in fold(haystack)


def contains_any(haystack: str, phrases: list[str]) -> list[str]:
    return [p for p in phrases if contains_phrase(haystack, p)]


def first_words(text: str, n: int) -> str:
    return ' '.join(strip_tags(text).split()[:n])


def extract_paragraphs(content: str) -> list[str]:
    paragraphs = []
    for chunk in PARAGRAPH_SPLIT.split(content or ''):
        text = ' '.join(strip_tags(chunk).split())
        if text:
            paragraphs.append(text)
    return paragraphs


def count_headings(content: str, level: int) -> int:
    html = len(re.findall(rf'<h{level}\b', content or '', re.IGNORECASE))
    markdown = len(re.findall(rf'^\s*#{{{level}}}\s+\S', content or '', re.MULTILINE))
    return html + markdown


def has_list(content: str) -> bool:
    return bool(LIST_PATTERN.search(content or ''))


def slugify(text: str) -> str:
    text = fold(text).strip()
    text = re.sub(r'[^a-z0-9\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-')


def compute_metrics(content: str) -> TextMetrics:
    plain = ' '.join(strip_tags(content).split())
    return TextMetrics(
        plain_text=plain,
        word_count=word_count(content),
        h2_count=count_headings(content, 2),
        h3_count=count_headings(content, 3),
        has_list=has_list(content),
        paragraphs=extract_paragraphs(content),
    )
