"""
Saved Content Library
Search and lookup helpers for the saved content page (/api/content).
"""

CONTENT_ENDPOINT = "/api/content"
PERSONAS_ENDPOINT = "/api/personas"


def get_saved_content(client):
    payload = client.get(CONTENT_ENDPOINT)
    return [c for c in payload if isinstance(c, dict)] if isinstance(payload, list) else []


def get_personas(client):
    payload = client.get(PERSONAS_ENDPOINT)
    return [p for p in payload if isinstance(p, dict)] if isinstance(payload, list) else []


def search_saved_content(items, query):
    """Case-insensitive match on topic, content text or content type."""
    if not query:
        return list(items)

    needle = query.lower()
    matches = []
    for item in items:
        fields = (item.get("topic"), item.get("content_text"), item.get("type"))
        if any(value and needle in str(value).lower() for value in fields):
            matches.append(item)
    return matches


def persona_name(persona_id, personas):
    """Display name of a persona by id, "Unknown" when missing."""
    if not persona_id or not personas:
        return "Unknown"
    for persona in personas:
        if persona.get("id") == persona_id:
            return persona.get("name") or "Unknown"
    return "Unknown"
