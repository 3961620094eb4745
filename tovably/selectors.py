"""
Selector Widgets
Streamlit components shared by pages: the cached API client, campaign and
tone-analysis pickers, tone card grids and API error toasts.
"""

import streamlit as st

from tovably.api_client import ApiClient
from tovably.metrics import time_ago
from tovably.tone_manager import latest_analysis
from tovably.ui import tone_card_html


@st.cache_resource
def get_client():
    """
    Creates and caches the API client so the HTTP session (and its cookies)
    survives script reruns.
    """
    return ApiClient()


def notify_api_error(title, error):
    """Transient toast with the underlying message when there is one."""
    message = getattr(error, "message", None) or str(error) or "An unknown error occurred"
    st.toast(f"**{title}**: {message}", icon="⚠️")


def render_campaign_selector(options, key_suffix="default"):
    """
    Renders a dropdown over campaign options ({'id', 'name'}).

    Returns:
        Selected option id, or None when there is nothing to select
    """
    if not options:
        st.info("No campaigns available. Create one in the Campaign Factory to see its timeline.")
        return None

    labels = {f"{o['name']} ({o['id'].split('-')[0]})": o["id"] for o in options}
    selected_label = st.selectbox(
        "Select Campaign",
        options=list(labels.keys()),
        key=f"campaign_selector_{key_suffix}",
        help="Pick a campaign to see its content delivery schedule.",
    )
    return labels[selected_label]


def render_analysis_selector(records, key_suffix="default", preferred_id=None):
    """
    Renders a dropdown over saved tone analyses. Defaults to the analysis with
    preferred_id (e.g. the one just created), else the most recent.

    Returns:
        Selected ToneAnalysisRecord, or None
    """
    if not records:
        return None

    preferred = [r for r in records if preferred_id is not None and r.id == preferred_id]
    first = preferred[0] if preferred else latest_analysis(records)
    ordered = [first] + [r for r in records if r is not first]

    def label(record):
        name = record.name or record.source or f"Analysis #{record.id}"
        return f"{name} · {time_ago(record.created_at)}"

    selected = st.selectbox(
        "Saved Analyses",
        options=ordered,
        format_func=label,
        key=f"analysis_selector_{key_suffix}",
    )
    return selected


def render_tone_cards(cards, max_columns=5):
    """Grid of tone cards, 2 to 5 per row."""
    if not cards:
        return
    per_row = max(2, min(max_columns, len(cards)))
    for start in range(0, len(cards), per_row):
        cols = st.columns(per_row)
        for col, card in zip(cols, cards[start:start + per_row]):
            with col:
                st.markdown(tone_card_html(card), unsafe_allow_html=True)
