"""Tests for the AI rewrite collaborator, using a stub Anthropic client."""

import json
from types import SimpleNamespace

import anthropic
import httpx

from optimizer import extract_json, run_optimization, suggest_rewrite
from scoring import ContentInput, analyze_content

BASE = ContentInput(
    focus_keyword="máy lọc không khí",
    seo_title="Máy lọc không khí tốt nhất 2025",
    slug="may-loc-khong-khi",
    content="<p>Máy lọc không khí giúp không gian sạch hơn. " + " ".join(["từ"] * 60) + "</p>",
)

IMPROVED = (
    "<p>Máy lọc không khí giúp không gian sạch hơn.</p>\n"
    "<h2>Kinh nghiệm chọn máy lọc không khí</h2>\n"
    "<p>Tác giả: Minh. Tôi đã test nhiều dòng máy.</p>\n"
    "<ul><li>Lọc bụi mịn</li><li>Khử mùi</li></ul>\n"
    '<p>Xem <a href="/may-loc-cho-phong-ngu">máy lọc cho phòng ngủ</a>.</p>\n'
    "<h2>Câu hỏi thường gặp</h2>\n"
    "<p>" + " ".join(["từ"] * 60) + "</p>"
)


class StubMessages:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return SimpleNamespace(content=[SimpleNamespace(text=response)])


class StubClient:
    def __init__(self, *responses):
        self.messages = StubMessages(responses)


def _payload(content: str, suggestions=None) -> str:
    return json.dumps({"suggestions": suggestions or ["Thêm FAQ"], "enhancedContent": content}, ensure_ascii=False)


def _connection_error() -> anthropic.APIConnectionError:
    return anthropic.APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"))


def test_extract_json_handles_fenced_output() -> None:
    assert extract_json('```json\n{"a": 1}\n```') == {"a": 1}
    assert extract_json('{"a": 2}') == {"a": 2}


def test_suggest_rewrite_returns_suggestion_and_sends_failing_checks() -> None:
    client = StubClient(_payload(IMPROVED, ["Thêm tác giả"]))
    analysis = analyze_content(BASE, year=2025)

    suggestion = suggest_rewrite(BASE, analysis, client=client, model="test-model")

    assert suggestion is not None
    assert suggestion.enhanced_content == IMPROVED
    assert suggestion.suggestions == ["Thêm tác giả"]
    call = client.messages.calls[0]
    assert call["model"] == "test-model"
    prompt = call["messages"][0]["content"]
    assert "FAILING CHECKS" in prompt
    assert analysis.priority_fixes[0].label in prompt


def test_suggest_rewrite_unavailable_cases() -> None:
    analysis = analyze_content(BASE, year=2025)

    assert suggest_rewrite(BASE, analysis, client=StubClient(_connection_error())) is None
    assert suggest_rewrite(BASE, analysis, client=StubClient("not json at all")) is None
    assert suggest_rewrite(BASE, analysis, client=StubClient('["a list"]')) is None
    assert suggest_rewrite(BASE, analysis, client=StubClient('{"suggestions": []}')) is None


def test_failed_suggestion_leaves_analysis_untouched() -> None:
    analysis = analyze_content(BASE, year=2025)
    before = analysis.to_dict()

    suggest_rewrite(BASE, analysis, client=StubClient(_connection_error()))

    assert analysis.to_dict() == before


def test_run_optimization_keeps_best_version(tmp_path) -> None:
    client = StubClient(_payload(IMPROVED), _payload(IMPROVED))

    result = run_optimization(BASE, iterations=2, output_dir=str(tmp_path), year=2025, client=client, verbose=False)

    run_dir = tmp_path / "may-loc-khong-khi"
    assert result["best_iteration"] == 1
    assert result["best_score"] > result["all_scores"][0]
    assert result["iterations_run"] == 2
    assert result["suggestion_unavailable"] is False
    assert (run_dir / "FINAL.html").read_text(encoding="utf-8") == IMPROVED
    assert (run_dir / "v0_score.json").exists()
    assert (run_dir / "v2.html").exists()
    summary = json.loads((run_dir / "run_summary.json").read_text(encoding="utf-8"))
    assert summary["best_score"] == result["best_score"]


def test_run_optimization_stops_when_suggestions_unavailable(tmp_path) -> None:
    client = StubClient(_connection_error())

    result = run_optimization(BASE, iterations=3, output_dir=str(tmp_path), year=2025, client=client, verbose=False)

    assert result["suggestion_unavailable"] is True
    assert result["iterations_run"] == 0
    assert result["best_content"] == BASE.content
    assert result["best_score"] == analyze_content(BASE, year=2025).total_score
