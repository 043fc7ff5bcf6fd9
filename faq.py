"""
FAQ question suggestions and FAQPage structured data.
"""

import json

from config import FAQ_TEMPLATES
from taxonomy import SearchIntent


def suggest_faqs(keyword: str, intent: SearchIntent) -> list[str]:
    keyword = (keyword or "").strip()
    if not keyword:
        return []
    templates = FAQ_TEMPLATES.get(SearchIntent(intent).value, FAQ_TEMPLATES["Informational"])
    return [t.format(keyword=keyword) for t in templates]


def build_faq_structured_data(questions: list[str], answers: dict[str, str] | None = None) -> str:
    if not questions:
        return ''
    answers = answers or {}
    entities = []
    for question in questions:
        entities.append({
            "@type": "Question",
            "name": question,
            "acceptedAnswer": {
                "@type": "Answer",
                "text": answers.get(question, ""),
            }
        })
    data = {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": entities,
    }
    return json.dumps(data, indent=4, ensure_ascii=False)
