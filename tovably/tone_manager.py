"""
Tone Analysis Manager
Creates, lists, renames and projects tone analyses from the Tovably API.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from tovably.blob import decode_mapping, decode_sequence, print_reporter
from tovably.errors import ApiError, ValidationError
from tovably.metrics import parse_date
from tovably.tone import clamp_percentage, classify_intensity, tone_label

ANALYSES_ENDPOINT = "/api/tone-analyses"
CREATE_ENDPOINT = "/api/tone-analysis"

MAX_KEYWORDS = 10


@dataclass
class ToneResults:
    characteristics: Dict[str, int] = field(default_factory=dict)
    common_phrases: List[str] = field(default_factory=list)
    language_patterns: Dict[str, object] = field(default_factory=dict)
    recommended_content_types: List[str] = field(default_factory=list)
    summary: str = ""

    @property
    def keywords(self):
        """Top common phrases, shown as keyword chips."""
        return self.common_phrases[:MAX_KEYWORDS]

    def characteristic_cards(self):
        return [
            {
                "name": name,
                "label": tone_label(name),
                "value": value,
                "intensity": classify_intensity(value),
            }
            for name, value in self.characteristics.items()
        ]

    def pattern_rows(self):
        """(label, text) pairs for every language pattern except common phrases."""
        rows = []
        for key, value in self.language_patterns.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(v) for v in value)
            rows.append((tone_label(key), "" if value is None else str(value)))
        return rows


def project_tone_results(raw, reporter=None):
    """
    Normalize a tone_results blob into ToneResults.
    Missing sections come back empty; nothing here raises.
    """
    reporter = reporter or print_reporter
    results = decode_mapping(raw, reporter=reporter, label="tone results")

    characteristics = {}
    for name, value in decode_mapping(results.get("characteristics"), reporter=reporter, label="tone characteristics").items():
        percentage = clamp_percentage(value)
        if percentage is None:
            reporter(f"Skipping non-numeric characteristic '{name}'", value)
            continue
        characteristics[str(name)] = percentage

    patterns = dict(decode_mapping(results.get("language_patterns"), reporter=reporter, label="language patterns"))
    phrases = decode_sequence(patterns.pop("common_phrases", None), reporter=reporter, label="common phrases")

    summary = results.get("summary")
    return ToneResults(
        characteristics=characteristics,
        common_phrases=[str(p) for p in phrases if p is not None],
        language_patterns=patterns,
        recommended_content_types=[
            str(t) for t in decode_sequence(
                results.get("recommended_content_types"), reporter=reporter, label="recommended content types"
            ) if t is not None
        ],
        summary=summary if isinstance(summary, str) else "",
    )


@dataclass
class ToneAnalysisRecord:
    id: object
    name: str = ""
    website_url: str = ""
    sample_text: str = ""
    created_at: object = None
    tone_results: ToneResults = field(default_factory=ToneResults)
    has_results: bool = False

    @classmethod
    def from_api(cls, data, reporter=None):
        raw_results = data.get("tone_results")
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            website_url=data.get("website_url") or "",
            sample_text=data.get("sample_text") or "",
            created_at=data.get("created_at"),
            tone_results=project_tone_results(raw_results, reporter=reporter),
            has_results=bool(raw_results),
        )

    @property
    def source(self):
        """What was analyzed: the website, or a short preview of the text."""
        if self.website_url:
            return self.website_url
        preview = self.sample_text.strip()
        return preview[:60] + "..." if len(preview) > 60 else preview


def list_tone_analyses(client, reporter=None):
    """All tone analyses of the current user."""
    payload = client.get(ANALYSES_ENDPOINT)
    if not isinstance(payload, list):
        return []
    return [ToneAnalysisRecord.from_api(item, reporter=reporter) for item in payload if isinstance(item, dict)]


def get_tone_analysis(client, analysis_id, reporter=None):
    payload = client.get(f"{ANALYSES_ENDPOINT}/{analysis_id}")
    if not isinstance(payload, dict):
        raise ApiError("Tone analysis not found", status_code=404)
    return ToneAnalysisRecord.from_api(payload, reporter=reporter)


def latest_analysis(records):
    """
    Most recently created analysis, or None.
    Records without a usable created_at rank last.
    """
    if not records:
        return None

    def created_key(record):
        created = parse_date(record.created_at)
        return (created is not None, created.timestamp() if created else 0.0)

    return max(records, key=created_key)


def prepare_analysis_request(method, website_url="", sample_text=""):
    """
    Validate the analysis form and build the POST body.

    Args:
        method: "url" or "text"

    Raises:
        ValidationError: with the message shown to the user
    """
    if method == "url":
        url = (website_url or "").strip()
        if not url:
            raise ValidationError("Please enter a website URL to analyze", field="websiteUrl")
        if "." not in url:
            raise ValidationError(
                "Please enter a valid website URL (e.g., example.com or https://example.com)",
                field="websiteUrl",
            )
        if not url.startswith("http"):
            url = f"https://{url}"
        return {"websiteUrl": url}

    if method == "text":
        text = (sample_text or "").strip()
        if not text:
            raise ValidationError("Please enter or paste text content to analyze", field="sampleText")
        return {"sampleText": sample_text}

    raise ValidationError(f"Unknown analysis method: {method}", field="method")


def default_analysis_name(record, today=None):
    """
    Examples:
    - https://www.stripe.com → "Analysis of stripe.com"
    - sample text → "Text Analysis 3/14/2025"
    """
    if record.website_url:
        host = re.sub(r"^https?://", "", record.website_url)
        host = re.sub(r"^www\.", "", host)
        return f"Analysis of {host}"

    today = today or date.today()
    return f"Text Analysis {today.month}/{today.day}/{today.year}"


def rename_tone_analysis(client, analysis_id, name, reporter=None):
    """
    Save a new name for an analysis.

    Returns:
        Updated ToneAnalysisRecord (None if the API returned no body)
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("Please enter a name for this analysis", field="name")

    payload = client.patch(f"{ANALYSES_ENDPOINT}/{analysis_id}", {"name": name})
    if isinstance(payload, dict):
        return ToneAnalysisRecord.from_api(payload, reporter=reporter)
    return None


def create_tone_analysis(client, body, today=None, reporter=None):
    """
    Run a new tone analysis and auto-save it under its default name.

    Args:
        body: Output of prepare_analysis_request

    Returns:
        ToneAnalysisRecord
    """
    payload = client.post(CREATE_ENDPOINT, body)
    if not isinstance(payload, dict):
        raise ApiError("Tone analysis returned no result")

    record = ToneAnalysisRecord.from_api(payload, reporter=reporter)
    if record.id is None:
        return record

    name = default_analysis_name(record, today=today)
    renamed = rename_tone_analysis(client, record.id, name, reporter=reporter)
    if renamed is not None:
        return renamed

    record.name = name
    return record
