#!/usr/bin/env python3
"""
AI rewrite loop: asks Claude to fix failing checks, then re-scores the rewrite.

The scoring engine never waits on this module: a failed or unusable response
is reported as "suggestion unavailable" and the existing analysis stands.

Usage:
    python optimizer.py --input posts/may-loc-khong-khi.html
    python optimizer.py --input draft.html --iterations 5 --output-dir output/may-loc
"""

import argparse
import json
import sys
import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path

import anthropic

from analyze import load_content_input
from config import ITERATIONS, MODEL, OUTPUT
from metrics import slugify
from prompts import get_rewrite_prompt
from scoring import AnalysisResult, ContentInput, analyze_content


@dataclass
class RewriteSuggestion:
    enhanced_content: str
    suggestions: list[str] = field(default_factory=list)


def call_claude(client: anthropic.Anthropic, prompt: str, model: str) -> str:
    message = client.messages.create(
        model=model,
        max_tokens=8192,
        messages=[{"role": "user", "content": prompt}],
    )
    return message.content[0].text


def extract_json(response: str) -> dict:
    text = response.strip()
    if "```json" in text:
        start = text.index("```json") + len("```json")
        end = text.rindex("```")
        text = text[start:end].strip()
    elif text.startswith("```"):
        start = text.index("\n") + 1
        end = text.rindex("```")
        text = text[start:end].strip()
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


def suggest_rewrite(
    content_input: ContentInput,
    analysis: AnalysisResult,
    client: anthropic.Anthropic | None = None,
    model: str = MODEL,
    iteration: int = 1,
    verbose: bool = False,
) -> RewriteSuggestion | None:
    """Return a rewrite for the failing checks, or None if no usable suggestion came back."""
    prompt = get_rewrite_prompt(content_input, analysis, iteration=iteration)
    try:
        if client is None:
            client = anthropic.Anthropic()
        data = extract_json(call_claude(client, prompt, model))
    except (anthropic.AnthropicError, ValueError) as e:
        if verbose:
            print(f"  ✗ Suggestion unavailable: {e}")
        return None

    enhanced = data.get("enhancedContent")
    if not isinstance(enhanced, str) or not enhanced.strip():
        if verbose:
            print("  ✗ Suggestion unavailable: response had no enhancedContent")
        return None
    suggestions = [str(s) for s in data.get("suggestions") or []]
    return RewriteSuggestion(enhanced_content=enhanced, suggestions=suggestions)


def run_optimization(
    content_input: ContentInput,
    iterations: int | None = None,
    model: str = MODEL,
    output_dir: str | None = None,
    year: int | None = None,
    client: anthropic.Anthropic | None = None,
    verbose: bool = True,
) -> dict:
    if iterations is None:
        iterations = ITERATIONS["default_count"]
    iterations = min(iterations, ITERATIONS["max_count"])
    year = year or datetime.now().year

    if output_dir is None:
        output_dir = OUTPUT["dir"]
    run_dir = Path(output_dir) / (slugify(content_input.slug or content_input.focus_keyword) or "article")
    run_dir.mkdir(parents=True, exist_ok=True)

    if verbose:
        print(f"\n{'='*70}")
        print(f"  SEO CONTENT OPTIMIZER")
        print(f"{'='*70}")
        print(f"  Keyword:      {content_input.focus_keyword}")
        print(f"  Intent:       {content_input.intent.value}")
        print(f"  Model:        {model}")
        print(f"  Iterations:   {iterations}")
        print(f"  Output:       {run_dir}")
        print(f"{'='*70}\n")

    analysis = analyze_content(content_input, year=year)
    if verbose:
        print(f"{analysis.summary()}\n")

    if OUTPUT["save_all_versions"]:
        (run_dir / "v0.html").write_text(content_input.content, encoding="utf-8")
        (run_dir / "v0_score.json").write_text(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")

    history = [{"iteration": 0, "score": analysis.total_score, "breakdown": analysis.breakdown.to_dict()}]
    best_input = content_input
    best_score = analysis.total_score
    best_iteration = 0
    plateau_count = 0
    suggestions = []
    unavailable = False

    current = content_input
    for i in range(1, iterations + 1):
        if verbose:
            print(f"▶ Rewrite iteration {i}/{iterations}...")

        start_time = time.time()
        suggestion = suggest_rewrite(current, analysis, client=client, model=model, iteration=i, verbose=verbose)
        if suggestion is None:
            unavailable = True
            break
        iter_time = time.time() - start_time

        candidate = replace(current, content=suggestion.enhanced_content)
        new_analysis = analyze_content(candidate, year=year)
        improvement = new_analysis.total_score - analysis.total_score
        suggestions = suggestion.suggestions

        if verbose:
            delta = "↑" if improvement > 0 else "↓" if improvement < 0 else "→"
            print(f"  Completed in {iter_time:.1f}s — {new_analysis.total_score}/100 ({delta} {improvement:+d})\n")

        if OUTPUT["save_all_versions"]:
            (run_dir / f"v{i}.html").write_text(candidate.content, encoding="utf-8")
            (run_dir / f"v{i}_score.json").write_text(json.dumps(new_analysis.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")

        history.append({
            "iteration": i, "score": new_analysis.total_score,
            "breakdown": new_analysis.breakdown.to_dict(), "improvement": improvement,
            "suggestions": suggestion.suggestions,
        })

        if new_analysis.total_score > best_score:
            best_input = candidate
            best_score = new_analysis.total_score
            best_iteration = i
            plateau_count = 0
        else:
            plateau_count += 1

        current = candidate
        analysis = new_analysis

        if plateau_count >= ITERATIONS["plateau_patience"]:
            if verbose:
                print(f"  ⚠ Plateau detected — no improvement for {plateau_count} iterations. Stopping.\n")
            break

    final_path = run_dir / "FINAL.html"
    final_path.write_text(best_input.content, encoding="utf-8")

    summary = {
        "focus_keyword": content_input.focus_keyword, "model": model,
        "best_score": best_score, "best_iteration": best_iteration,
        "total_iterations": len(history) - 1, "suggestion_unavailable": unavailable,
        "history": history, "timestamp": datetime.now().isoformat(),
    }
    (run_dir / "run_summary.json").write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")

    if verbose:
        print(f"\n{'='*70}")
        print(f"  OPTIMIZATION COMPLETE")
        print(f"{'='*70}")
        print(f"  Best score:     {best_score}/100")
        print(f"  Best iteration: v{best_iteration}")
        print(f"  Improvement:    {best_score - history[0]['score']:+d} points from v0")
        if unavailable:
            print("  Note:           suggestion service unavailable; kept the best scored version")
        print(f"  Output:         {final_path}")
        print(f"{'='*70}\n")

    return {
        "best_content": best_input.content, "best_score": best_score,
        "best_iteration": best_iteration,
        "all_scores": [h["score"] for h in history],
        "iterations_run": len(history) - 1,
        "suggestions": suggestions,
        "suggestion_unavailable": unavailable,
        "output_dir": str(run_dir), "final_path": str(final_path),
    }


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Iteratively rewrite an article with Claude and re-score it")
    parser.add_argument("--input", required=True, help="HTML article with YAML frontmatter")
    parser.add_argument("--keyword", help="Focus keyword (overrides frontmatter 'keyword')")
    parser.add_argument("--iterations", type=int, default=None,
                        help=f"Rewrite iterations (default: {ITERATIONS['default_count']})")
    parser.add_argument("--model", default=MODEL, help="Anthropic model")
    parser.add_argument("--output-dir", default=None, help=f"Output directory (default: {OUTPUT['dir']})")
    parser.add_argument("--year", type=int, default=None, help="Year used by the title power-word check")
    parser.add_argument("--quiet", action="store_true", help="Suppress verbose output")

    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found")
        sys.exit(1)

    try:
        content_input = load_content_input(input_path.read_text(encoding="utf-8"), keyword=args.keyword)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    run_optimization(
        content_input, iterations=args.iterations, model=args.model,
        output_dir=args.output_dir, year=args.year, verbose=not args.quiet,
    )


if __name__ == "__main__":
    main()
