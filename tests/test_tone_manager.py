from datetime import date

import pytest

from tovably.blob import CollectingReporter
from tovably.errors import ApiError, ValidationError
from tovably.tone_manager import (
    MAX_KEYWORDS,
    ToneAnalysisRecord,
    create_tone_analysis,
    default_analysis_name,
    get_tone_analysis,
    latest_analysis,
    list_tone_analyses,
    prepare_analysis_request,
    project_tone_results,
    rename_tone_analysis,
)

TONE_RESULTS = {
    "characteristics": {"friendly": 82, "formal": "35", "witty": "n/a"},
    "language_patterns": {
        "sentence_structure": "Short, punchy sentences",
        "vocabulary": ["plain", "upbeat"],
        "common_phrases": [f"phrase {i}" for i in range(14)],
    },
    "recommended_content_types": ["blog", "social"],
    "summary": "Warm and approachable.",
}


def analysis_payload(**overrides):
    payload = {
        "id": 5,
        "name": "",
        "website_url": "https://www.stripe.com",
        "sample_text": "",
        "created_at": "2025-06-01T10:00:00Z",
        "tone_results": TONE_RESULTS,
    }
    payload.update(overrides)
    return payload


def test_project_tone_results():
    reporter = CollectingReporter()
    results = project_tone_results(TONE_RESULTS, reporter=reporter)
    assert results.characteristics == {"friendly": 82, "formal": 35}
    assert reporter.messages == ["Skipping non-numeric characteristic 'witty'"]
    assert len(results.keywords) == MAX_KEYWORDS
    assert results.keywords[0] == "phrase 0"
    assert "common_phrases" not in results.language_patterns
    assert results.pattern_rows() == [
        ("Sentence structure", "Short, punchy sentences"),
        ("Vocabulary", "plain, upbeat"),
    ]
    assert results.recommended_content_types == ["blog", "social"]
    assert [c["intensity"] for c in results.characteristic_cards()] == ["High", "Low"]


def test_project_tone_results_does_not_mutate_input():
    project_tone_results(TONE_RESULTS)
    assert "common_phrases" in TONE_RESULTS["language_patterns"]


@pytest.mark.parametrize("raw", [None, "", "not json", "[]"])
def test_project_tone_results_malformed(raw):
    results = project_tone_results(raw, reporter=CollectingReporter())
    assert results.characteristics == {}
    assert results.keywords == []
    assert results.summary == ""


def test_record_from_api():
    record = ToneAnalysisRecord.from_api(analysis_payload())
    assert record.has_results
    assert record.source == "https://www.stripe.com"
    assert record.tone_results.summary == "Warm and approachable."


def test_record_without_results():
    record = ToneAnalysisRecord.from_api(analysis_payload(tone_results=None, website_url="", sample_text="x" * 80))
    assert not record.has_results
    assert record.source == "x" * 60 + "..."


def test_list_and_get(fake_client):
    client = fake_client({
        ("GET", "/api/tone-analyses"): [analysis_payload(), analysis_payload(id=6), 3],
        ("GET", "/api/tone-analyses/6"): analysis_payload(id=6),
        ("GET", "/api/tone-analyses/7"): None,
    })
    assert [r.id for r in list_tone_analyses(client)] == [5, 6]
    assert get_tone_analysis(client, 6).id == 6
    with pytest.raises(ApiError):
        get_tone_analysis(client, 7)


def test_latest_analysis():
    records = [
        ToneAnalysisRecord(id=1, created_at="2025-01-01T00:00:00Z"),
        ToneAnalysisRecord(id=2, created_at=None),
        ToneAnalysisRecord(id=3, created_at="2025-05-01T00:00:00Z"),
    ]
    assert latest_analysis(records).id == 3
    assert latest_analysis([ToneAnalysisRecord(id=9)]).id == 9
    assert latest_analysis([]) is None


def test_prepare_url_request():
    assert prepare_analysis_request("url", website_url=" example.com ") == {"websiteUrl": "https://example.com"}
    assert prepare_analysis_request("url", website_url="http://example.com") == {"websiteUrl": "http://example.com"}


def test_prepare_text_request():
    assert prepare_analysis_request("text", sample_text="We ship fast.") == {"sampleText": "We ship fast."}


@pytest.mark.parametrize("method, kwargs, message", [
    ("url", {"website_url": "  "}, "Please enter a website URL to analyze"),
    ("url", {"website_url": "localhost"}, "Please enter a valid website URL (e.g., example.com or https://example.com)"),
    ("text", {"sample_text": "\n"}, "Please enter or paste text content to analyze"),
    ("pdf", {}, "Unknown analysis method: pdf"),
])
def test_prepare_request_validation(method, kwargs, message):
    with pytest.raises(ValidationError) as excinfo:
        prepare_analysis_request(method, **kwargs)
    assert excinfo.value.message == message


def test_default_analysis_name():
    assert default_analysis_name(ToneAnalysisRecord(id=1, website_url="https://www.stripe.com")) == "Analysis of stripe.com"
    assert default_analysis_name(ToneAnalysisRecord(id=1), today=date(2025, 3, 14)) == "Text Analysis 3/14/2025"


def test_rename_requires_name(fake_client):
    client = fake_client()
    with pytest.raises(ValidationError):
        rename_tone_analysis(client, 5, "   ")
    assert client.calls == []


def test_rename_sends_trimmed_name(fake_client):
    client = fake_client({("PATCH", "/api/tone-analyses/5"): lambda data: analysis_payload(name=data["name"])})
    record = rename_tone_analysis(client, 5, "  Brand voice ")
    assert record.name == "Brand voice"
    assert client.calls == [("PATCH", "/api/tone-analyses/5", {"name": "Brand voice"})]


def test_create_auto_renames(fake_client):
    client = fake_client({
        ("POST", "/api/tone-analysis"): analysis_payload(),
        ("PATCH", "/api/tone-analyses/5"): lambda data: analysis_payload(name=data["name"]),
    })
    record = create_tone_analysis(client, {"websiteUrl": "https://www.stripe.com"})
    assert record.name == "Analysis of stripe.com"
    assert [call[0] for call in client.calls] == ["POST", "PATCH"]


def test_create_keeps_default_name_when_rename_has_no_body(fake_client):
    client = fake_client({
        ("POST", "/api/tone-analysis"): analysis_payload(website_url="", sample_text="Hello"),
        ("PATCH", "/api/tone-analyses/5"): None,
    })
    record = create_tone_analysis(client, {"sampleText": "Hello"}, today=date(2025, 1, 2))
    assert record.name == "Text Analysis 1/2/2025"


def test_create_without_result_raises(fake_client):
    client = fake_client({("POST", "/api/tone-analysis"): None})
    with pytest.raises(ApiError):
        create_tone_analysis(client, {"sampleText": "Hello"})
