"""
Campaign Brief Generator
Generates a Markdown brief from a campaign view (see build_campaign_view).
"""


def generate_campaign_brief(view):
    """
    Generates a full Campaign Brief in Markdown format.
    """
    if not view:
        return "# Error: No Campaign Data Found"

    name = view.get("name") or "Untitled Campaign"
    metadata = view.get("metadata")

    md = f"# 🚀 Campaign Brief: {name}\n\n"
    md += f"Created: {view.get('created_relative', 'N/A')}\n\n"

    # 1. Overview
    md += "## 🎯 Overview\n"
    md += f"**Objective:** {view.get('objective') or 'N/A'}\n\n"
    md += f"**Duration:** {view.get('duration', 'Unknown duration')}"
    if view.get("timeline_start") and view.get("timeline_end"):
        md += f" ({view['timeline_start']} → {view['timeline_end']})"
    md += "\n\n"

    audience = view.get("target_audience") or []
    if audience:
        md += f"**Target Audience:** {', '.join(str(a) for a in audience)}\n\n"
    channels = view.get("channels") or []
    if channels:
        md += f"**Channels:** {', '.join(str(c) for c in channels)}\n\n"

    # 2. Messaging
    if metadata:
        md += "## 📝 Messaging\n"
        md += f"### {metadata.title}\n"
        if metadata.boilerplate:
            md += f"{metadata.boilerplate}\n\n"
        if metadata.objectives:
            md += "**Objectives:**\n"
            for objective in metadata.objectives:
                md += f"- {objective}\n"
            md += "\n"

    # 3. Tone
    md += "## 🎙️ Tone Profile\n"
    for card in view.get("tone_cards", []):
        md += f"- **{card['label']}:** {card['value']}% ({card['intensity']})\n"
    md += "\n"

    # 4. Schedule
    md += "## 📅 Content Schedule\n"
    entries = view.get("contents", [])
    if not entries:
        md += "_No content pieces yet._\n"
    for entry in entries:
        item = entry["item"]
        md += f"### {entry['icon']} {entry['title']}\n"
        md += f"**Delivery:** {entry['delivery']}"
        if item.persona:
            md += f" · **Persona:** {item.persona}"
        if item.channel:
            md += f" · **Channel:** {item.channel}"
        md += "\n\n"
        if item.content:
            md += f"{item.content}\n\n"

    return md
