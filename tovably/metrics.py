"""
Derived Metrics
Date helpers used across the campaign and tone-analysis views: campaign
duration in weeks and relative "time ago" labels.
"""

import math
from datetime import date, datetime, timezone

MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400


def parse_date(value):
    """
    Parse an API date value into an aware UTC datetime.

    Accepts datetime/date objects and ISO-8601 strings ("2025-01-15",
    "2025-01-15T10:30:00Z", "2025-01-15T10:30:00.000+02:00"). Date-only
    strings are midnight UTC. Naive timestamps are taken as UTC.

    Returns:
        datetime, or None when the value can't be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def duration_in_weeks(start, end):
    """
    Whole weeks between two dates, rounded up (day count is rounded up first).

    Returns:
        int, or None if either date is unparseable
    """
    start_dt = parse_date(start)
    end_dt = parse_date(end)
    if start_dt is None or end_dt is None:
        return None

    diff_days = math.ceil(abs((end_dt - start_dt).total_seconds()) / 86400)
    return math.ceil(diff_days / 7)


def campaign_duration(start, end):
    """
    Examples:
    - 2025-01-01 → 2025-01-08: "1 week"
    - 2025-01-01 → 2025-01-15: "2 weeks"
    - invalid date: "Unknown duration"
    """
    weeks = duration_in_weeks(start, end)
    if weeks is None:
        return "Unknown duration"
    return f"{weeks} week{'s' if weeks != 1 else ''}"


def _plural(count, unit):
    return f"{count} {unit}{'s' if count != 1 else ''}"


def _months_between(earlier, later):
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    # Incomplete last month doesn't count
    if (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return max(months, 0)


def format_distance(then, now):
    """
    Human distance between two aware datetimes, without direction.
    "less than a minute", "5 minutes", "about 3 hours", "1 day",
    "about 2 months", "over 1 year", ...
    """
    earlier, later = sorted((then, now))
    seconds = (later - earlier).total_seconds()
    minutes = round(seconds / 60)

    if minutes < 2:
        return "less than a minute" if minutes == 0 else "1 minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        return f"about {_plural(round(minutes / 60), 'hour')}"
    if minutes < 2520:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        return _plural(round(minutes / MINUTES_IN_DAY), "day")
    if minutes < MINUTES_IN_TWO_MONTHS:
        return f"about {_plural(round(minutes / MINUTES_IN_MONTH), 'month')}"

    months = _months_between(earlier, later)
    if months < 12:
        return _plural(max(round(minutes / MINUTES_IN_MONTH), 1), "month")

    years = months // 12
    remainder = months % 12
    if remainder < 3:
        return f"about {_plural(years, 'year')}"
    if remainder < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def time_ago(value, now=None):
    """
    Relative label for a timestamp: "3 days ago", "in about 2 hours".
    Falls back to "some time ago" when the timestamp is unusable.
    """
    then = parse_date(value)
    if then is None:
        return "some time ago"

    now = parse_date(now) if now is not None else datetime.now(timezone.utc)
    if now is None:
        return "some time ago"

    try:
        distance = format_distance(then, now)
    except (OverflowError, ValueError) as e:
        print(f"Error formatting relative time for {value}: {e}")
        return "some time ago"
    if then > now:
        return f"in {distance}"
    return f"{distance} ago"
