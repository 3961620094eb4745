"""
Content Item Projector
Turns a campaign's `contents` blob into typed content items and derives the
filtered / chronological views used by the campaign screens.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from tovably.blob import decode_mapping, decode_sequence, print_reporter
from tovably.metrics import parse_date

CONTENT_TYPES = ["email", "social", "blog", "webinar"]
CONTENT_FILTERS = ["all"] + CONTENT_TYPES

CONTENT_TYPE_ICONS = {
    "email": "✉️",
    "social": "🔗",
    "blog": "📄",
    "webinar": "📅",
}
DEFAULT_CONTENT_ICON = "📄"

EPOCH_TIMESTAMP = 0.0


def _text(value):
    return value if isinstance(value, str) else None


@dataclass
class ContentItem:
    id: object = None
    type: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    persona: Optional[str] = None
    delivery_date: Optional[str] = None
    channel: Optional[str] = None
    raw: object = field(default=None, repr=False, compare=False)

    @classmethod
    def from_raw(cls, item):
        """
        Build an item from one element of the contents array.
        Elements that aren't objects are kept (as `raw`) with empty fields.
        Text fields holding anything but a string are treated as missing.
        """
        if not isinstance(item, dict):
            return cls(raw=item)
        return cls(
            id=item.get("id"),
            type=_text(item.get("type")),
            title=_text(item.get("title")),
            content=_text(item.get("content")),
            persona=_text(item.get("persona")),
            delivery_date=_text(item.get("deliveryDate")),
            channel=_text(item.get("channel")),
            raw=item,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "content": self.content,
            "persona": self.persona,
            "deliveryDate": self.delivery_date,
            "channel": self.channel,
        }


@dataclass
class CampaignMetadata:
    title: str
    boilerplate: str = ""
    objectives: List[str] = field(default_factory=list)


def project_contents(raw, reporter=None):
    """
    Normalize a `contents` blob into a list of ContentItem, in stored order.
    Items that are already ContentItem instances pass through unchanged.
    """
    items = decode_sequence(raw, reporter=reporter, label="campaign contents")
    return [item if isinstance(item, ContentItem) else ContentItem.from_raw(item) for item in items]


def normalize_metadata(raw, reporter=None):
    """
    Normalize the optional `metadata` blob ({title, boilerplate, objectives}).

    Returns:
        CampaignMetadata, or None when the blob is missing, malformed, or has
        no title
    """
    if isinstance(raw, CampaignMetadata):
        return raw

    reporter = reporter or print_reporter
    mapping = decode_mapping(raw, reporter=reporter, label="campaign metadata")
    title = mapping.get("title")
    if not isinstance(title, str) or not title.strip():
        return None

    boilerplate = mapping.get("boilerplate")
    objectives = decode_sequence(mapping.get("objectives"), reporter=reporter, label="campaign objectives")
    return CampaignMetadata(
        title=title.strip(),
        boilerplate=boilerplate if isinstance(boilerplate, str) else "",
        objectives=[str(o) for o in objectives if o is not None and str(o).strip()],
    )


def delivery_timestamp(item):
    """POSIX timestamp of the item's delivery date, or None if undated/invalid."""
    parsed = parse_date(item.delivery_date)
    if parsed is None:
        return None
    return parsed.timestamp()


def sort_by_delivery(items, undated="first"):
    """
    Order items by delivery date, ascending. Ties keep their original order.

    Args:
        items: List of ContentItem
        undated: "first" treats a missing/invalid date as the epoch, so those
            items lead the timeline; "last" pushes them to the end
    """
    if undated not in ("first", "last"):
        raise ValueError(f"undated must be 'first' or 'last', got {undated!r}")

    fallback = EPOCH_TIMESTAMP if undated == "first" else float("inf")

    def sort_key(item):
        timestamp = delivery_timestamp(item)
        return fallback if timestamp is None else timestamp

    return sorted(items, key=sort_key)


def filter_by_type(items, content_type="all"):
    """Items whose type equals content_type, or everything for "all"."""
    if content_type == "all":
        return list(items)
    return [item for item in items if item.type == content_type]


def search_contents(items, query, topic=None):
    """
    Case-insensitive substring search over item bodies.
    When a parent topic is given, a topic match keeps every item.
    """
    if not query:
        return list(items)

    needle = query.lower()
    if topic and needle in str(topic).lower():
        return list(items)
    return [item for item in items if item.content and needle in str(item.content).lower()]


def count_by_type(items):
    """Counts per filter tab, including "all"."""
    counts = {content_type: 0 for content_type in CONTENT_FILTERS}
    counts["all"] = len(items)
    for item in items:
        if isinstance(item.type, str) and item.type in counts and item.type != "all":
            counts[item.type] += 1
    return counts


def display_title(item):
    """Title, or "<Type> Content" when the item has none."""
    if item.title:
        return item.title
    if item.type:
        content_type = str(item.type)
        return f"{content_type[:1].upper()}{content_type[1:]} Content"
    return "Content"


def delivery_label(item):
    """The delivery date as stored, or "Unscheduled" when it doesn't parse."""
    if delivery_timestamp(item) is None:
        return "Unscheduled"
    return item.delivery_date


def content_type_icon(content_type):
    if not isinstance(content_type, str):
        return DEFAULT_CONTENT_ICON
    return CONTENT_TYPE_ICONS.get(content_type, DEFAULT_CONTENT_ICON)
