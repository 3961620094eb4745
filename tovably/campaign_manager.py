"""
Campaign Manager Module
Handles campaign-centric operations: loading Campaign Factory campaigns from
the API, deleting them, and building the render-ready views used by the
campaign screens and dashboard.
"""

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from tovably.blob import decode_sequence
from tovably.contents import (
    content_type_icon,
    count_by_type,
    delivery_label,
    delivery_timestamp,
    display_title,
    filter_by_type,
    normalize_metadata,
    project_contents,
    search_contents,
    sort_by_delivery,
)
from tovably.errors import ApiError, ConfirmationRequiredError
from tovably.metrics import campaign_duration, parse_date, time_ago
from tovably.tone import resolve_tone_profile, tone_cards

FACTORY_ENDPOINT = "/api/campaign-factory"
CAMPAIGNS_ENDPOINT = "/api/campaigns"

ACTIVE_STATUSES = ("active", "running")

STATUS_LABELS = {
    "draft": "Draft",
    "planning": "Planning",
    "active": "Active",
    "running": "Running",
    "completed": "Completed",
    "archived": "Archived",
}


@dataclass
class CampaignRecord:
    id: object
    name: str = ""
    user_id: object = None
    objective: str = ""
    description: str = ""
    target_audience: List[str] = field(default_factory=list)
    channels: List[str] = field(default_factory=list)
    timeline_start: object = None
    timeline_end: object = None
    created_at: object = None
    # Raw blobs, decoded on demand
    contents: object = None
    tone_profile: object = None
    metadata: object = None

    @classmethod
    def from_api(cls, data, reporter=None):
        """Build a record from an API payload (snake_case or camelCase keys)."""
        timeline = data.get("timeline") if isinstance(data.get("timeline"), dict) else {}
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            user_id=data.get("user_id"),
            objective=data.get("objective") or "",
            description=data.get("description") or "",
            target_audience=decode_sequence(
                data.get("target_audience", data.get("targetAudience")),
                reporter=reporter,
                label="target audience",
            ),
            channels=decode_sequence(data.get("channels"), reporter=reporter, label="channels"),
            timeline_start=data.get("timeline_start") or timeline.get("start"),
            timeline_end=data.get("timeline_end") or timeline.get("end"),
            created_at=data.get("created_at"),
            contents=data.get("contents"),
            tone_profile=data.get("tone_profile", data.get("toneProfile")),
            metadata=data.get("metadata"),
        )


def _records(payload, reporter=None):
    if not isinstance(payload, list):
        return []
    return [CampaignRecord.from_api(item, reporter=reporter) for item in payload if isinstance(item, dict)]


def get_factory_campaigns(client, reporter=None):
    """
    Get all Campaign Factory campaigns for the current user.

    Returns:
        List of CampaignRecord
    """
    return _records(client.get(FACTORY_ENDPOINT), reporter=reporter)


def get_factory_campaign(client, campaign_id, reporter=None):
    """Get a single Campaign Factory campaign."""
    payload = client.get(f"{FACTORY_ENDPOINT}/{campaign_id}")
    if not isinstance(payload, dict):
        raise ApiError("Campaign not found", status_code=404)
    return CampaignRecord.from_api(payload, reporter=reporter)


def delete_factory_campaign(client, campaign_id, confirmed=False):
    """
    Delete a Campaign Factory campaign.

    Raises:
        ConfirmationRequiredError: unless the user explicitly confirmed
        ApiError: when the request fails
    """
    if not confirmed:
        raise ConfirmationRequiredError("Deleting a campaign")

    client.delete(f"{FACTORY_ENDPOINT}/{campaign_id}")
    print(f"✓ Deleted campaign ID: {campaign_id}")
    return True


def campaign_contents(record, reporter=None):
    return project_contents(record.contents, reporter=reporter)


def campaign_tone_profile(record, reporter=None):
    return resolve_tone_profile(record.tone_profile, reporter=reporter)


def campaign_metadata(record, reporter=None):
    return normalize_metadata(record.metadata, reporter=reporter)


def build_campaign_view(record, content_type="all", now=None, reporter=None, undated="first", query=""):
    """
    Build the render-ready view of a campaign.

    Args:
        record: CampaignRecord
        content_type: One of CONTENT_FILTERS
        now: Reference time for relative labels (defaults to current time)
        reporter: Observability sink for blob decode failures
        undated: Placement of undated items in the schedule ("first"/"last")
        query: Free-text filter over content bodies; matching the campaign
            name keeps every item

    Returns:
        Dict with display-ready campaign fields
    """
    contents = campaign_contents(record, reporter=reporter)
    visible = filter_by_type(contents, content_type)
    visible = sort_by_delivery(search_contents(visible, query, topic=record.name), undated=undated)
    metadata = campaign_metadata(record, reporter=reporter)

    return {
        "id": record.id,
        "name": record.name,
        "objective": record.objective,
        "description": record.description,
        "target_audience": record.target_audience,
        "channels": record.channels,
        "created_relative": time_ago(record.created_at, now=now),
        "duration": campaign_duration(record.timeline_start, record.timeline_end),
        "timeline_start": record.timeline_start,
        "timeline_end": record.timeline_end,
        "tone_cards": tone_cards(campaign_tone_profile(record, reporter=reporter)),
        "metadata": metadata,
        "content_type": content_type,
        "counts": count_by_type(contents),
        "contents": [
            {
                "item": item,
                "icon": content_type_icon(item.type),
                "title": display_title(item),
                "delivery": delivery_label(item),
            }
            for item in visible
        ],
    }


def search_campaigns(campaigns, query):
    """Case-insensitive match on campaign name or description."""
    if not query:
        return list(campaigns)

    needle = query.lower()
    matches = []
    for campaign in campaigns:
        name = _field(campaign, "name") or ""
        description = _field(campaign, "description") or ""
        if needle in str(name).lower() or needle in str(description).lower():
            matches.append(campaign)
    return matches


def _field(campaign, key):
    if isinstance(campaign, dict):
        return campaign.get(key)
    return getattr(campaign, key, None)


def get_campaigns(client):
    """Standard (non-factory) campaigns as plain dicts."""
    payload = client.get(CAMPAIGNS_ENDPOINT)
    return [c for c in payload if isinstance(c, dict)] if isinstance(payload, list) else []


def get_active_campaigns(campaigns, limit=5):
    """Active or running campaigns, at most `limit`."""
    active = [c for c in campaigns if c.get("status") in ACTIVE_STATUSES]
    return active[:limit]


def status_display(status):
    if not status:
        return "Unknown"
    return STATUS_LABELS.get(status, status[:1].upper() + status[1:])


def build_campaign_options(factory_campaigns, standard_campaigns):
    """
    Combined selector options for the timeline dashboard.
    Factory campaigns come first; ids are prefixed with their source.
    """
    options = [{"id": f"factory-{c.id}", "name": c.name} for c in factory_campaigns]
    options += [{"id": f"standard-{c.get('id')}", "name": c.get("name", "")} for c in standard_campaigns]
    return options


def resolve_campaign_option(option_id):
    """
    "factory-12" -> ("factory", "12"), "standard-3" -> ("standard", "3")

    Raises:
        ValueError: for ids without a known prefix
    """
    source, _, campaign_id = str(option_id).partition("-")
    if source not in ("factory", "standard") or not campaign_id:
        raise ValueError(f"Unknown campaign option: {option_id}")
    return source, campaign_id


def get_campaign_detail(client, option_id, reporter=None):
    """Fetch the campaign behind a selector option as a CampaignRecord."""
    source, campaign_id = resolve_campaign_option(option_id)
    if source == "factory":
        return get_factory_campaign(client, campaign_id, reporter=reporter)

    payload = client.get(f"{CAMPAIGNS_ENDPOINT}/{campaign_id}")
    if not isinstance(payload, dict):
        raise ApiError("Campaign not found", status_code=404)
    return CampaignRecord.from_api(payload, reporter=reporter)


def campaigns_table(records, now=None, reporter=None):
    """
    Dashboard table of factory campaigns.

    Returns:
        pandas DataFrame (one row per campaign)
    """
    rows = []
    for record in records:
        rows.append({
            "Campaign": record.name,
            "Objective": record.objective,
            "Channels": ", ".join(str(c) for c in record.channels),
            "Duration": campaign_duration(record.timeline_start, record.timeline_end),
            "Content Pieces": len(campaign_contents(record, reporter=reporter)),
            "Created": time_ago(record.created_at, now=now),
        })
    return pd.DataFrame(rows, columns=["Campaign", "Objective", "Channels", "Duration", "Content Pieces", "Created"])


def content_schedule(items):
    """
    Delivery schedule for the timeline chart. Undated items are left out.

    Returns:
        pandas DataFrame with Date, Type, Title columns sorted by date
    """
    rows = []
    for item in items:
        if delivery_timestamp(item) is None:
            continue
        rows.append({
            "Date": parse_date(item.delivery_date),
            "Type": item.type or "other",
            "Title": display_title(item),
        })

    df = pd.DataFrame(rows, columns=["Date", "Type", "Title"])
    if not df.empty:
        df = df.sort_values("Date", kind="stable").reset_index(drop=True)
    return df


