"""
Tone Profile Module
Resolves campaign tone profiles and classifies tone intensities for display.
"""

import math

from tovably.blob import decode_mapping, print_reporter

# Placeholder shown when a campaign has no usable tone profile
DEFAULT_TONE_PROFILE = {
    "professional": 80,
    "authoritative": 65,
    "friendly": 50,
    "direct": 75,
    "persuasive": 70,
}

HIGH_THRESHOLD = 70
MEDIUM_THRESHOLD = 40


def _bounded_number(value):
    # float clamped to [0, 100]; None for anything non-numeric
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        # Clamp before converting; huge ints don't fit in a float
        return float(max(0, min(100, value)))
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number):
        return None
    return max(0.0, min(100.0, number))


def clamp_percentage(value):
    """
    Coerce a tone value to an int percentage in [0, 100].

    Returns:
        int, or None when the value is not numeric
    """
    number = _bounded_number(value)
    if number is None:
        return None
    return int(round(number))


def classify_intensity(percentage):
    """
    Map a tone percentage to "High", "Medium" or "Low".

    Out-of-range values are clamped to 0-100 first, so anything above 100 is
    High and anything negative is Low. Non-numeric input is Low.
    """
    value = _bounded_number(percentage)
    if value is None:
        return "Low"
    if value >= HIGH_THRESHOLD:
        return "High"
    if value >= MEDIUM_THRESHOLD:
        return "Medium"
    return "Low"


def resolve_tone_profile(raw, reporter=None):
    """
    Normalize a tone_profile blob into {tone_name: percentage}.

    An empty or unusable profile is replaced by DEFAULT_TONE_PROFILE. A real
    profile is returned on its own, never merged with the defaults.
    """
    reporter = reporter or print_reporter
    mapping = decode_mapping(raw, reporter=reporter, label="tone profile")

    profile = {}
    for name, value in mapping.items():
        percentage = clamp_percentage(value)
        if percentage is None:
            reporter(f"Skipping non-numeric tone value for '{name}'", value)
            continue
        profile[str(name)] = percentage

    if not profile:
        return dict(DEFAULT_TONE_PROFILE)
    return profile


def tone_label(name):
    """professional -> Professional, sentence_structure -> Sentence structure"""
    text = str(name).replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def tone_cards(profile):
    """
    Build the display cards for a resolved tone profile.

    Returns:
        List of {'name', 'label', 'value', 'intensity'} dicts in profile order
    """
    return [
        {
            "name": name,
            "label": tone_label(name),
            "value": value,
            "intensity": classify_intensity(value),
        }
        for name, value in profile.items()
    ]
