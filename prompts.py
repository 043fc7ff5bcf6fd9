"""
Prompt template for the AI rewrite collaborator.
"""


def get_rewrite_prompt(content_input, analysis, iteration: int = 1) -> str:
    failing = [item for item in analysis.audit_items if not item.passed]
    failing.sort(key=lambda item: -item.impact.weight)
    error_lines = "\n".join(
        f"- [{item.impact.value}] {item.label}: {item.message}" for item in failing
    ) or "- (no failing checks)"

    breakdown = analysis.breakdown.to_dict()
    breakdown_lines = "\n".join(f"- {name}: {score}/100" for name, score in breakdown.items())

    secondary = ", ".join(content_input.secondary_keyword_list()) or "(none)"
    tax = analysis.taxonomy

    return f"""You are an SEO lead and editor for a Vietnamese consumer-electronics publication. Revise the article below so it fixes the failing checks for its search intent and content type.

## ARTICLE CONTEXT

- Focus keyword: **{content_input.focus_keyword}**
- Secondary keywords: {secondary}
- SEO title: {content_input.seo_title}
- Meta description: {content_input.meta_description}
- Declared intent: {content_input.intent.value}
- Detected intent: {tax.intent.value}
- Content type: {tax.content_type}
- Funnel stage: {tax.funnel_stage}
- Industry: {tax.industry} / {tax.sub_industry}

## CURRENT SCORE: {analysis.total_score}/100

This is rewrite iteration #{iteration}.

{breakdown_lines}

## FAILING CHECKS (highest impact first)

{error_lines}

## ARTICLE (HTML)

```html
{content_input.content}
```

## RULES

1. Keep every existing HTML tag that carries data: never remove or change <a href="...">, <img src="...">, <h2> or <h3> elements.
2. Only add or edit the passages needed to fix the failing checks. Leave passing sections alone.
3. Wrap every new or edited passage in <strong style="color: #ef4444;">...</strong>, keeping any links inside it.
4. Do not add icons or emoji.
5. Write in Vietnamese, in the article's existing tone.
6. The result must be valid HTML with no broken tags.

## OUTPUT

Return ONLY a JSON object, no commentary:

{{
  "suggestions": ["Suggestion 1: ...", "Suggestion 2: ..."],
  "enhancedContent": "<full revised HTML>"
}}"""
