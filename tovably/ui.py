import html

import streamlit as st

INTENSITY_CLASSES = {
    "High": "intensity-high",
    "Medium": "intensity-medium",
    "Low": "intensity-low",
}


def setup_app_styling():
    """
    Injects global CSS for the Tovably look.
    Theme: Night Studio (black surfaces, slate borders, cyan accents)
    """
    st.markdown("""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    :root {
        --accent: #74d1ea;
        --accent-strong: #5eead4;
        --accent-glow: rgba(116, 209, 234, 0.15);
        --bg-body: #000000;
        --bg-card: #0a0c10;
        --border: rgba(31, 41, 55, 0.6);
        --text-main: #f3f4f6;
        --text-muted: #9ca3af;
    }

    html, body, [class*="css"] {
        font-family: 'Inter', sans-serif !important;
    }

    .stApp {
        background-color: var(--bg-body);
        color: var(--text-main);
    }
    .main .block-container {
        padding-top: 2rem;
        max-width: 1100px !important;
    }

    [data-testid="stSidebar"] {
        background-color: #0a0c10;
        border-right: 1px solid var(--border);
    }

    .tovably-logo {
        font-weight: 800;
        font-size: 2rem;
        background: linear-gradient(135deg, #74d1ea 0%, #4983ab 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        margin-bottom: 1.5rem;
        padding-left: 0.5rem;
    }

    /* Campaign + content cards */
    .campaign-card, .content-card {
        background: var(--bg-card);
        border: 1px solid var(--border);
        border-radius: 12px;
        padding: 1.25rem;
        margin-bottom: 1rem;
        box-shadow: 0 0 15px rgba(116, 209, 234, 0.05);
    }
    .content-card .delivery {
        color: var(--text-muted);
        font-size: 0.8rem;
    }

    /* Tone cards */
    .tone-card {
        background: var(--bg-card);
        border: 1px solid var(--border);
        border-top: 3px solid var(--accent);
        border-radius: 12px;
        padding: 1rem;
        text-align: center;
    }
    .tone-card .tone-value {
        font-size: 1.8rem;
        font-weight: 700;
        color: var(--accent);
    }
    .tone-card .tone-name {
        font-weight: 600;
        color: var(--text-main);
    }

    .intensity-badge {
        display: inline-block;
        padding: 0.15rem 0.6rem;
        border-radius: 100px;
        font-size: 0.75rem;
        font-weight: 600;
    }
    .intensity-high { background: rgba(94, 234, 212, 0.15); color: #5eead4; }
    .intensity-medium { background: rgba(116, 209, 234, 0.12); color: #74d1ea; }
    .intensity-low { background: rgba(156, 163, 175, 0.12); color: #9ca3af; }

    .keyword-chip {
        display: inline-block;
        background: linear-gradient(90deg, #74d1ea 0%, #4983ab 100%);
        color: #000000;
        font-weight: 500;
        padding: 0.4rem 1rem;
        margin: 0.2rem;
        border-radius: 100px;
        font-size: 0.85rem;
    }

    .stButton>button[kind="primary"] {
        background: var(--accent);
        color: #000000;
        border: 1px solid var(--accent);
        box-shadow: 0 0 10px var(--accent-glow);
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


def tone_card_html(card):
    """HTML for one tone card ({'label', 'value', 'intensity'})."""
    css_class = INTENSITY_CLASSES.get(card["intensity"], "intensity-low")
    return (
        f'<div class="tone-card">'
        f'<div class="tone-value">{card["value"]}%</div>'
        f'<div class="tone-name">{html.escape(str(card["label"]))}</div>'
        f'<span class="intensity-badge {css_class}">{card["intensity"]}</span>'
        f'</div>'
    )


def keyword_chips_html(keywords):
    return "".join(f'<span class="keyword-chip">{html.escape(str(k))}</span>' for k in keywords)
