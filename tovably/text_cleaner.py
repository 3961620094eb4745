"""
Text Cleaner
Strips Markdown leftovers from AI-generated copy before display.
"""

import re


def clean_content(content):
    """
    Remove Markdown emphasis/header characters and collapse whitespace.
    Hashtags lose the '#' but keep their word.

    Examples:
    - "**Bold** launch #SaaS" → "Bold launch SaaS"
    - None → ""
    """
    if not content:
        return ""

    text = re.sub(r"[*#_]+", "", content)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()
