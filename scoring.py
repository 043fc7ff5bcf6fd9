"""
SEO Scoring Engine for article evaluation.

Every rule is a plain function of a RuleContext returning one AuditItem. Rules
run in RULES order and never read each other's output; an item's ``points`` are
its contribution to the additive total of its category.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from config import CATEGORY_WEIGHTS, FIELD_TARGETS, IMPACT_WEIGHTS, MAX_PRIORITY_FIXES, SCORING
from faq import suggest_faqs
from links import LinkRecord, analyze_links
from metrics import (
    TextMetrics,
    compute_metrics,
    contains_any,
    contains_folded,
    contains_phrase,
    count_occurrences,
    first_words,
    phrase_spans,
    slugify,
)
from taxonomy import ContentTaxonomy, SearchIntent, detect_taxonomy

CATEGORIES = ("intent", "onpage", "eeat", "ctr", "readability")

IMG_PATTERN = re.compile(r'<img\b[^>]*>', re.IGNORECASE)
ALT_PATTERN = re.compile(r'''(?<![\w-])alt\s*=\s*(?:"\s*[^"\s][^"]*"|'\s*[^'\s][^']*'|[^\s>"']+)''', re.IGNORECASE)


class Impact(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def weight(self) -> int:
        return IMPACT_WEIGHTS[self.value]


@dataclass(frozen=True)
class ContentInput:
    focus_keyword: str = ""
    secondary_keywords: str = ""
    seo_title: str = ""
    slug: str = ""
    meta_description: str = ""
    content: str = ""
    intent: SearchIntent = SearchIntent.INFORMATIONAL

    def __post_init__(self):
        for name in ("focus_keyword", "secondary_keywords", "seo_title", "slug", "meta_description", "content"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, "")
        object.__setattr__(self, "intent", SearchIntent(self.intent or SearchIntent.INFORMATIONAL))

    def secondary_keyword_list(self) -> list[str]:
        keywords = []
        seen = set()
        for kw in self.secondary_keywords.split(","):
            kw = kw.strip()
            if kw and kw.lower() not in seen:
                seen.add(kw.lower())
                keywords.append(kw)
        return keywords


@dataclass
class AuditItem:
    id: str
    label: str
    passed: bool
    score: int
    impact: Impact
    message: str
    category: str
    points: float = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "passed": self.passed,
            "score": self.score,
            "impact": self.impact.value,
            "message": self.message,
            "category": self.category,
            "points": round(self.points, 1),
        }


@dataclass
class ScoreBreakdown:
    intent: int = 0
    on_page: int = 0
    eeat: int = 0
    ctr: int = 0
    readability: int = 0

    def to_dict(self) -> dict:
        return {
            "intent": self.intent,
            "on_page": self.on_page,
            "eeat": self.eeat,
            "ctr": self.ctr,
            "readability": self.readability,
        }


@dataclass
class AnalysisResult:
    total_score: int
    breakdown: ScoreBreakdown
    taxonomy: ContentTaxonomy
    audit_items: list[AuditItem] = field(default_factory=list)
    priority_fixes: list[AuditItem] = field(default_factory=list)
    faq_suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_score": self.total_score,
            "breakdown": self.breakdown.to_dict(),
            "taxonomy": self.taxonomy.to_dict(),
            "audit_items": [i.to_dict() for i in self.audit_items],
            "priority_fixes": [i.to_dict() for i in self.priority_fixes],
            "faq_suggestions": self.faq_suggestions,
        }

    def summary(self) -> str:
        lines = [
            f"═══ TOTAL: {self.total_score}/100 ═══",
            "",
        ]
        for name, score in self.breakdown.to_dict().items():
            bar_len = int(score / 5)
            bar = "█" * bar_len + "░" * (20 - bar_len)
            lines.append(f"  {name:<14} {bar} {score}/100")
        lines.append("")
        t = self.taxonomy
        lines.append(f"  {t.intent.value} · {t.content_type} · {t.funnel_stage} · {t.seo_goal} · {t.industry}/{t.sub_industry}")
        lines.append("")
        if self.priority_fixes:
            lines.append("  PRIORITY FIXES:")
            for item in self.priority_fixes:
                lines.append(f"    → [{item.impact.value}] {item.label}: {item.message}")
        else:
            lines.append("  No outstanding fixes.")
        return "\n".join(lines)


@dataclass(frozen=True)
class RuleContext:
    input: ContentInput
    metrics: TextMetrics
    links: list[LinkRecord]
    taxonomy: ContentTaxonomy
    year: int

    @property
    def internal_links(self) -> list[LinkRecord]:
        return [link for link in self.links if link.type == "internal"]

    @property
    def external_links(self) -> list[LinkRecord]:
        return [link for link in self.links if link.type == "external"]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


# ── Intent ──────────────────────────────────────────────────────────


def section_present(content: str, phrases: list[str], compounds: list[str]) -> bool:
    """True when a phrase matches outside any longer compound containing it ('giá' in 'đánh giá')."""
    for phrase in phrases:
        shadows = [span for c in compounds if c != phrase and contains_phrase(c, phrase)
                   for span in phrase_spans(content, c)]
        for start, end in phrase_spans(content, phrase):
            if not any(s <= start and end <= e for s, e in shadows):
                return True
    return False


def check_intent_sections(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["intent_sections"]
    intent = ctx.input.intent
    groups = cfg["required"][intent.value]
    missing = [name for name, phrases in groups.items()
               if not section_present(ctx.input.content, phrases, cfg["compound_phrases"])]
    passed = not missing
    if passed:
        message = f"All {len(groups)} required sections for {intent.value} content are present."
    else:
        message = (f"{len(groups) - len(missing)}/{len(groups)} required sections for {intent.value} content; "
                   f"missing: {', '.join(missing)}.")
    return AuditItem(id="intent-sections", label="Sections required by search intent",
                     passed=passed, score=100 if passed else 0, impact=Impact.HIGH,
                     message=message, category="intent", points=cfg["points"] if passed else 0)


def check_thin_content(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["thin_content"]
    intent = ctx.input.intent
    minimum = cfg["min_words"].get(intent.value, cfg["default_min_words"])
    wc = ctx.metrics.word_count
    if wc >= minimum:
        return AuditItem(id="thin-content", label="Content depth", passed=True, score=100,
                         impact=Impact.HIGH, category="intent", points=cfg["pass_points"],
                         message=f"{wc} words meets the {minimum}-word minimum for {intent.value} content.")
    return AuditItem(id="thin-content", label="Content depth", passed=False, score=cfg["fail_points"],
                     impact=Impact.HIGH, category="intent", points=cfg["fail_points"],
                     message=f"Only {wc} words; {intent.value} content needs at least {minimum} (add {minimum - wc}).")


# ── On-page ─────────────────────────────────────────────────────────


def check_focus_keyword(ctx: RuleContext) -> AuditItem:
    keyword = ctx.input.focus_keyword.strip()
    if keyword:
        message = f"Focus keyword '{keyword}' ({len(keyword.split())} words) is set."
    else:
        message = "No focus keyword set; every keyword check will fail."
    return AuditItem(id="focus-keyword", label="Focus keyword", passed=bool(keyword),
                     score=100 if keyword else 0, impact=Impact.HIGH, message=message, category="onpage")


def check_keyword_in_title(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["keyword_in_title"]
    keyword = ctx.input.focus_keyword.strip()
    passed = contains_folded(ctx.input.seo_title, keyword)
    if passed:
        message = f"SEO title contains '{keyword}'."
    else:
        message = f"SEO title ({len(ctx.input.seo_title)} chars) does not contain '{keyword}'."
    return AuditItem(id="key-title", label="Focus keyword in SEO title", passed=passed,
                     score=100 if passed else 0, impact=Impact.HIGH, message=message,
                     category="onpage", points=cfg["points"] if passed else 0)


def check_keyword_in_slug(ctx: RuleContext) -> AuditItem:
    keyword_slug = slugify(ctx.input.focus_keyword)
    slug = slugify(ctx.input.slug)
    passed = bool(keyword_slug) and keyword_slug in slug
    if passed:
        message = f"Slug '{slug}' contains '{keyword_slug}'."
    else:
        message = f"Slug '{slug}' does not contain '{keyword_slug}'."
    return AuditItem(id="key-slug", label="Focus keyword in slug", passed=passed,
                     score=100 if passed else 0, impact=Impact.MEDIUM, message=message, category="onpage")


def check_keyword_in_intro(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["keyword_in_intro"]
    keyword = ctx.input.focus_keyword.strip()
    passed = contains_folded(first_words(ctx.input.content, cfg["intro_words"]), keyword)
    if passed:
        message = f"'{keyword}' appears within the first {cfg['intro_words']} words."
    else:
        message = f"'{keyword}' is missing from the first {cfg['intro_words']} words."
    return AuditItem(id="key-intro", label="Focus keyword in introduction", passed=passed,
                     score=100 if passed else 0, impact=Impact.HIGH, message=message,
                     category="onpage", points=cfg["points"] if passed else 0)


def check_keyword_density(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["keyword_density"]
    wc = ctx.metrics.word_count
    if wc <= cfg["min_words"]:
        return AuditItem(id="key-density", label="Keyword density", passed=False, score=0,
                         impact=Impact.MEDIUM, category="onpage",
                         message=f"Only {wc} words; density needs more than {cfg['min_words']} words to be meaningful.")
    occurrences = count_occurrences(ctx.metrics.plain_text, ctx.input.focus_keyword.strip())
    density = occurrences * 100 / wc
    detail = f"{density:.2f}% ({occurrences} occurrences in {wc} words)"
    if cfg["target_min"] <= density <= cfg["target_max"]:
        return AuditItem(id="key-density", label="Keyword density", passed=True, score=100,
                         impact=Impact.MEDIUM, category="onpage", points=cfg["points"],
                         message=f"Keyword density {detail} is within {cfg['target_min']}-{cfg['target_max']}%.")
    if density < cfg["target_min"]:
        message = f"Keyword density {detail} is below {cfg['target_min']}%."
    else:
        message = f"Keyword density {detail} exceeds {cfg['target_max']}%; reads as keyword stuffing."
    return AuditItem(id="key-density", label="Keyword density", passed=False,
                     score=cfg["out_of_range_score"], impact=Impact.MEDIUM, message=message, category="onpage")


def check_heading_structure(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["heading_structure"]
    h2, h3 = ctx.metrics.h2_count, ctx.metrics.h3_count
    passed = h2 >= 1
    if passed:
        message = f"{h2} H2 and {h3} H3 headings structure the content."
    else:
        message = f"No H2 headings ({h3} H3); add at least one H2 to split the content."
    return AuditItem(id="headings-h2", label="Heading structure", passed=passed,
                     score=100 if passed else 0, impact=Impact.HIGH, message=message,
                     category="onpage", points=cfg["points"] if passed else 0)


def check_internal_links(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["internal_links"]
    count = len(ctx.internal_links)
    wc = ctx.metrics.word_count
    if count == 0:
        return AuditItem(id="links-internal", label="Internal links", passed=False, score=0,
                         impact=Impact.MEDIUM, category="onpage",
                         message=f"No internal links in {wc} words.")
    if wc > cfg["long_content_words"] and count < cfg["long_content_min_links"]:
        return AuditItem(id="links-internal", label="Internal links", passed=False,
                         score=cfg["partial_score"], impact=Impact.MEDIUM, category="onpage",
                         points=cfg["partial_points"],
                         message=(f"Only {count} internal link for {wc} words; "
                                  f"add at least {cfg['long_content_min_links']}."))
    return AuditItem(id="links-internal", label="Internal links", passed=True, score=100,
                     impact=Impact.MEDIUM, category="onpage", points=cfg["points"],
                     message=f"{count} internal link(s) in {wc} words.")


def check_anchor_text(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["anchor_text"]
    generic = [link for link in ctx.links if link.is_generic]
    if generic:
        return AuditItem(id="links-anchor", label="Descriptive anchor text", passed=False, score=0,
                         impact=Impact.MEDIUM, category="onpage",
                         message=(f"{len(generic)} of {len(ctx.links)} anchors are generic, "
                                  f"e.g. '{generic[0].anchor_text}'."))
    if not ctx.links:
        return AuditItem(id="links-anchor", label="Descriptive anchor text", passed=False, score=0,
                         impact=Impact.MEDIUM, category="onpage",
                         message="0 links; no anchor text to evaluate.")
    return AuditItem(id="links-anchor", label="Descriptive anchor text", passed=True, score=100,
                     impact=Impact.MEDIUM, category="onpage", points=cfg["points"],
                     message=f"All {len(ctx.links)} anchors are descriptive.")


def check_internal_link_position(ctx: RuleContext) -> AuditItem:
    internal = ctx.internal_links
    placed = [link for link in internal if link.location in ("body", "conclusion")]
    if internal and not placed:
        return AuditItem(id="links-internal-position", label="Internal link placement", passed=False,
                         score=0, impact=Impact.LOW, category="onpage",
                         message=f"All {len(internal)} internal link(s) sit in the introduction.")
    return AuditItem(id="links-internal-position", label="Internal link placement", passed=True,
                     score=100, impact=Impact.LOW, category="onpage",
                     message=f"{len(placed)} of {len(internal)} internal link(s) in the body or conclusion.")


def check_external_link_position(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["external_link_position"]
    external = ctx.external_links
    in_body = [link for link in external if link.location == "body"]
    if external and not in_body:
        return AuditItem(id="links-external-position", label="External link placement", passed=False,
                         score=cfg["partial_score"], impact=Impact.LOW, category="onpage",
                         message=f"None of the {len(external)} external link(s) are in the body.")
    return AuditItem(id="links-external-position", label="External link placement", passed=True,
                     score=100, impact=Impact.LOW, category="onpage", points=cfg["points"],
                     message=f"{len(in_body)} of {len(external)} external link(s) in the body.")


def check_secondary_keywords(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["secondary_keywords"]
    keywords = ctx.input.secondary_keyword_list()
    if not keywords:
        return AuditItem(id="keywords-secondary", label="Secondary keyword coverage", passed=True,
                         score=100, impact=Impact.MEDIUM, category="onpage", points=cfg["points"],
                         message="0 secondary keywords supplied; full credit by default.")
    found = [kw for kw in keywords if contains_phrase(ctx.metrics.plain_text, kw)]
    missing = [kw for kw in keywords if kw not in found]
    percentage = len(found) * 100 / len(keywords)
    message = f"{len(found)}/{len(keywords)} secondary keywords used ({percentage:.0f}%)."
    if missing:
        message += f" Missing: {', '.join(missing)}."
    return AuditItem(id="keywords-secondary", label="Secondary keyword coverage",
                     passed=percentage >= cfg["pass_ratio"] * 100, score=round_half_up(percentage),
                     impact=Impact.MEDIUM, message=message, category="onpage",
                     points=percentage * cfg["points"] / 100)


# ── E-E-A-T ─────────────────────────────────────────────────────────


def _signal_check(ctx: RuleContext, key: str, item_id: str, label: str) -> AuditItem:
    cfg = SCORING["eeat"][key]
    found = contains_any(ctx.input.content, cfg["phrases"])
    if found:
        message = f"{len(found)} signal phrase(s) found: {', '.join(found)}."
    else:
        message = f"0 of {len(cfg['phrases'])} signal phrases found (e.g. '{cfg['phrases'][0]}')."
    return AuditItem(id=item_id, label=label, passed=bool(found), score=100 if found else 0,
                     impact=Impact.MEDIUM, message=message, category="eeat",
                     points=cfg["points"] if found else 0)


def check_author(ctx: RuleContext) -> AuditItem:
    return _signal_check(ctx, "author", "eeat-author", "Author visibility")


def check_experience(ctx: RuleContext) -> AuditItem:
    return _signal_check(ctx, "experience", "eeat-experience", "First-hand experience")


def check_faq_section(ctx: RuleContext) -> AuditItem:
    return _signal_check(ctx, "faq", "eeat-faq", "FAQ section")


def check_citations(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["eeat"]["citations"]
    found = contains_any(ctx.input.content, cfg["phrases"])
    external = len(ctx.external_links)
    passed = bool(found) or external > 0
    message = f"{len(found)} citation phrase(s) and {external} external link(s)."
    return AuditItem(id="eeat-citations", label="Citations and trust signals", passed=passed,
                     score=100 if passed else 50, impact=Impact.LOW, message=message, category="eeat",
                     points=cfg["points"] if passed else cfg["partial_points"])


def check_images(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["images"]
    images = IMG_PATTERN.findall(ctx.input.content)
    if not images:
        return AuditItem(id="read-images", label="Images and alt text", passed=False, score=0,
                         impact=Impact.MEDIUM, category="eeat",
                         message="0 images; add at least one illustrative image.")
    missing = [tag for tag in images if not ALT_PATTERN.search(tag)]
    if missing:
        return AuditItem(id="read-images", label="Images and alt text", passed=False,
                         score=cfg["partial_score"], impact=Impact.MEDIUM, category="eeat",
                         message=f"{len(missing)} of {len(images)} images lack alt text.")
    return AuditItem(id="read-images", label="Images and alt text", passed=True, score=100,
                     impact=Impact.MEDIUM, category="eeat",
                     message=f"All {len(images)} images have alt text.")


# ── CTR ─────────────────────────────────────────────────────────────


def check_title_length(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["title_length"]
    length = len(ctx.input.seo_title.strip())
    passed = cfg["min"] <= length <= cfg["max"]
    return AuditItem(id="ctr-title-length", label="SEO title length", passed=passed,
                     score=100 if passed else 0, impact=Impact.MEDIUM, category="ctr",
                     points=cfg["points"] if passed else 0,
                     message=f"SEO title is {length} characters; target {cfg['min']}-{cfg['max']}.")


def find_power_words(title: str, year: int) -> list[str]:
    title = title.lower()
    candidates = [str(year), str(year + 1)] + SCORING["power_words"]["words"]
    return [w for w in candidates if re.search(rf'(?<!\w){re.escape(w)}(?!\w)', title)]


def check_power_words(ctx: RuleContext) -> AuditItem:
    # Depends on ctx.year: the same title can pass one year and fail the next.
    cfg = SCORING["power_words"]
    hits = find_power_words(ctx.input.seo_title, ctx.year)
    if hits:
        message = f"{len(hits)} power word(s) in title: {', '.join(hits)}."
    else:
        message = f"0 power words in title; try '{ctx.year}', '{ctx.year + 1}' or '{cfg['words'][0]}'."
    return AuditItem(id="ctr-power-word", label="Power words in title", passed=bool(hits),
                     score=100 if hits else 0, impact=Impact.MEDIUM, message=message,
                     category="ctr", points=cfg["points"] if hits else 0)


def check_meta_description(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["meta_description"]
    length = len(ctx.input.meta_description.strip())
    passed = cfg["min_exclusive"] < length < cfg["max_exclusive"]
    return AuditItem(id="ctr-meta", label="Meta description length", passed=passed,
                     score=100 if passed else 0, impact=Impact.MEDIUM, category="ctr",
                     points=cfg["points"] if passed else 0,
                     message=(f"Meta description is {length} characters; target "
                              f"{cfg['min_exclusive'] + 1}-{cfg['max_exclusive'] - 1}."))


# ── Readability ─────────────────────────────────────────────────────


def check_lists(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["lists"]
    passed = ctx.metrics.has_list
    if passed:
        message = f"Content uses lists across {len(ctx.metrics.paragraphs)} blocks."
    else:
        message = f"0 lists in {len(ctx.metrics.paragraphs)} blocks; add a bulleted or numbered list."
    return AuditItem(id="read-lists", label="Lists", passed=passed, score=100 if passed else 0,
                     impact=Impact.LOW, message=message, category="readability",
                     points=cfg["points"] if passed else 0)


def check_paragraph_length(ctx: RuleContext) -> AuditItem:
    cfg = SCORING["paragraph_length"]
    paragraphs = ctx.metrics.paragraphs
    long_paragraphs = [p for p in paragraphs if len(p.split()) > cfg["max_words"]]
    if not long_paragraphs:
        return AuditItem(id="read-paragraphs", label="Paragraph length", passed=True, score=100,
                         impact=Impact.MEDIUM, category="readability", points=cfg["points"],
                         message=f"All {len(paragraphs)} paragraphs are at most {cfg['max_words']} words.")
    return AuditItem(id="read-paragraphs", label="Paragraph length", passed=False,
                     score=cfg["partial_points"], impact=Impact.MEDIUM, category="readability",
                     points=cfg["partial_points"],
                     message=(f"{len(long_paragraphs)} of {len(paragraphs)} paragraphs exceed "
                              f"{cfg['max_words']} words."))


RULES = [
    check_intent_sections,
    check_thin_content,
    check_focus_keyword,
    check_keyword_in_title,
    check_keyword_in_slug,
    check_keyword_in_intro,
    check_keyword_density,
    check_heading_structure,
    check_internal_links,
    check_anchor_text,
    check_internal_link_position,
    check_external_link_position,
    check_secondary_keywords,
    check_author,
    check_experience,
    check_faq_section,
    check_citations,
    check_images,
    check_title_length,
    check_power_words,
    check_meta_description,
    check_lists,
    check_paragraph_length,
]


def aggregate(items: list[AuditItem]) -> tuple[int, ScoreBreakdown, list[AuditItem]]:
    sums = {c: 0.0 for c in CATEGORIES}
    for item in items:
        sums[item.category] += item.points
    scores = {c: int(clamp(round_half_up(v))) for c, v in sums.items()}
    total = int(clamp(round_half_up(sum(CATEGORY_WEIGHTS[c] * scores[c] for c in CATEGORIES))))
    breakdown = ScoreBreakdown(
        intent=scores["intent"],
        on_page=scores["onpage"],
        eeat=scores["eeat"],
        ctr=scores["ctr"],
        readability=scores["readability"],
    )
    # sorted() is stable, so equal impacts keep rule order
    failing = sorted((i for i in items if not i.passed), key=lambda i: -i.impact.weight)
    return total, breakdown, failing[:MAX_PRIORITY_FIXES]


def field_for_item(item_id: str) -> str:
    """Name of the ContentInput field an editor should focus for an audit item."""
    return FIELD_TARGETS.get(item_id, "content")


def analyze_content(content_input: ContentInput, year: int | None = None) -> AnalysisResult:
    if year is None:
        year = date.today().year
    metrics = compute_metrics(content_input.content)
    taxonomy = detect_taxonomy(content_input)
    if metrics.word_count == 0:
        return AnalysisResult(total_score=0, breakdown=ScoreBreakdown(), taxonomy=taxonomy)

    ctx = RuleContext(
        input=content_input,
        metrics=metrics,
        links=analyze_links(content_input.content),
        taxonomy=taxonomy,
        year=year,
    )
    items = [rule(ctx) for rule in RULES]
    total, breakdown, priority_fixes = aggregate(items)
    return AnalysisResult(
        total_score=total,
        breakdown=breakdown,
        taxonomy=taxonomy,
        audit_items=items,
        priority_fixes=priority_fixes,
        faq_suggestions=suggest_faqs(content_input.focus_keyword, taxonomy.intent),
    )
