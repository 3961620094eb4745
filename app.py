import streamlit as st
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import pandas as pd

from tovably.blob import CollectingReporter, print_reporter
from tovably.brief_generator import generate_campaign_brief
from tovably.campaign_manager import (
    build_campaign_options,
    build_campaign_view,
    campaign_contents,
    campaigns_table,
    content_schedule,
    delete_factory_campaign,
    get_active_campaigns,
    get_campaign_detail,
    get_campaigns,
    get_factory_campaigns,
    search_campaigns,
    status_display,
)
from tovably.content_library import get_personas, get_saved_content, persona_name, search_saved_content
from tovably.contents import CONTENT_FILTERS
from tovably.drafts import RenameDraft
from tovably.errors import ApiError, ValidationError
from tovably.metrics import time_ago
from tovably.selectors import (
    get_client,
    notify_api_error,
    render_analysis_selector,
    render_campaign_selector,
    render_tone_cards,
)
from tovably.text_cleaner import clean_content
from tovably.tone_manager import (
    create_tone_analysis,
    list_tone_analyses,
    prepare_analysis_request,
    rename_tone_analysis,
)
import tovably.ui as ui

# Page Config
st.set_page_config(
    page_title="Tovably",
    page_icon="🎙️",
    layout="wide"
)

ui.setup_app_styling()

with st.sidebar:
    st.markdown('<div class="tovably-logo">Tovably</div>', unsafe_allow_html=True)
    selection = st.radio(
        "Navigation",
        ["Dashboard", "Tone Analysis", "Campaign Factory", "Saved Content"],
        label_visibility="collapsed"
    )
    show_parse_warnings = st.toggle("Show data warnings", value=False, help="List stored fields that could not be parsed.")

client = get_client()

# Collects blob parse failures for this run instead of only printing them
reporter = CollectingReporter(forward=print_reporter)


def load_or_report(loader, title, default):
    """Call an API loader; on failure show a toast and keep the page usable."""
    try:
        return loader()
    except ApiError as e:
        notify_api_error(title, e)
        st.error(f"{title}: {e.message}")
        return default


if selection == "Dashboard":
    st.header("📊 Dashboard")
    st.caption("Your campaigns and content delivery at a glance.")

    standard_campaigns = load_or_report(lambda: get_campaigns(client), "Error loading campaigns", [])
    factory_campaigns = load_or_report(
        lambda: get_factory_campaigns(client, reporter=reporter), "Error loading Campaign Factory campaigns", []
    )

    # Active campaigns
    st.subheader("Active Campaigns")
    active = get_active_campaigns(standard_campaigns)
    if active:
        for campaign in active:
            c1, c2 = st.columns([4, 1])
            c1.markdown(f"**{campaign.get('name', 'Untitled')}**")
            if campaign.get("description"):
                c1.caption(campaign["description"])
            c2.markdown(f"`{status_display(campaign.get('status'))}`")
    else:
        st.info("No active campaigns. Start one to see it here.")

    st.markdown("---")

    # Factory campaigns table
    st.subheader("Campaign Factory")
    if factory_campaigns:
        st.dataframe(campaigns_table(factory_campaigns, reporter=reporter), use_container_width=True, hide_index=True)
    else:
        st.info("No campaigns created yet. Head to the Campaign Factory to create your first one.")

    st.markdown("---")

    # Timeline
    st.subheader("📅 Campaign Timeline")
    st.caption("Visualize your content delivery schedule.")
    options = build_campaign_options(factory_campaigns, standard_campaigns)
    option_id = render_campaign_selector(options, key_suffix="dashboard")
    if option_id:
        with st.spinner("Loading campaign..."):
            record = load_or_report(
                lambda: get_campaign_detail(client, option_id, reporter=reporter), "Error fetching campaign data", None
            )
        if record:
            items = campaign_contents(record, reporter=reporter)
            schedule = content_schedule(items)
            if schedule.empty:
                st.info("No scheduled content for this campaign yet.")
            else:
                st.dataframe(schedule, use_container_width=True, hide_index=True)
                per_type = schedule.groupby("Type").size().rename("Pieces")
                st.bar_chart(per_type)
            undated = len(items) - len(schedule)
            if undated:
                st.caption(f"{undated} content piece{'s' if undated != 1 else ''} without a delivery date (Delivery TBD).")


elif selection == "Tone Analysis":
    st.header("🎙️ Tone Analysis")
    st.caption("Analyze your brand's tone from your website or a writing sample.")

    with st.form("tone_analysis_form"):
        method_label = st.radio("Analyze from", ["Website URL", "Sample Text"], horizontal=True)
        method = "url" if method_label == "Website URL" else "text"
        website_url = st.text_input("Website URL", placeholder="example.com")
        sample_text = st.text_area("Sample Text", placeholder="Paste a blog post, email or landing page copy...")
        submitted = st.form_submit_button("Analyze Tone", type="primary")

    if submitted:
        try:
            body = prepare_analysis_request(method, website_url=website_url, sample_text=sample_text)
            with st.spinner("Analyzing your content..."):
                created = create_tone_analysis(client, body, reporter=reporter)
            st.session_state.current_analysis_id = created.id
            st.session_state.pop("analysis_selector_tone", None)
            st.toast(f"Saved as {created.name}", icon="✅")
        except ValidationError as e:
            st.warning(e.message)
        except ApiError as e:
            notify_api_error("Analysis failed", e)

    analyses = load_or_report(lambda: list_tone_analyses(client, reporter=reporter), "Failed to load tone analyses", [])

    if not analyses:
        st.info("No tone analyses yet. Run your first analysis above.")
    else:
        st.markdown("---")
        record = render_analysis_selector(
            analyses, key_suffix="tone", preferred_id=st.session_state.get("current_analysis_id")
        )

        if record and not record.has_results:
            st.error("Something went wrong with the analysis. Please try again.")
        elif record:
            # Rename (local draft until saved)
            draft_key = f"rename_draft_{record.id}"
            if draft_key not in st.session_state:
                st.session_state[draft_key] = RenameDraft(record.id, record.name)
            draft = st.session_state[draft_key].reconcile(record.name)

            c1, c2 = st.columns([4, 1])
            with c1:
                draft.edit(st.text_input("Analysis Name", value=draft.value, key=f"rename_input_{record.id}"))
            with c2:
                st.write("")
                if st.button("Save Name", disabled=not draft.is_dirty, key=f"rename_save_{record.id}"):
                    try:
                        draft.save(lambda analysis_id, name: rename_tone_analysis(client, analysis_id, name))
                        st.success("Tone analysis saved successfully.")
                        st.rerun()
                    except ValidationError as e:
                        st.warning(e.message)
                    except ApiError as e:
                        notify_api_error("Save failed", e)

            st.caption(f"Source: {record.source or 'N/A'} · {time_ago(record.created_at)}")

            results = record.tone_results

            st.subheader("Tone Characteristics")
            render_tone_cards(results.characteristic_cards())

            st.subheader("Keywords")
            if results.keywords:
                st.markdown(ui.keyword_chips_html(results.keywords), unsafe_allow_html=True)
            else:
                st.caption("No keywords detected in your content")

            rows = results.pattern_rows()
            if rows:
                st.subheader("Language Patterns")
                for label, text in rows:
                    st.markdown(f"**{label}**")
                    st.write(text)

            if results.recommended_content_types:
                st.subheader("Recommended Content Types")
                for content_type in results.recommended_content_types:
                    st.markdown(f"- 📄 {content_type}")

            if results.summary:
                st.subheader("Tone Summary")
                st.write(results.summary)


elif selection == "Campaign Factory":
    st.header("🚀 Campaign Factory")
    st.caption("Your saved multi-channel campaigns.")

    campaigns = load_or_report(
        lambda: get_factory_campaigns(client, reporter=reporter), "Error loading campaigns", []
    )

    if not campaigns:
        st.info("No campaigns created yet. Create your first AI-powered marketing campaign to see it displayed here.")
    else:
        query = st.text_input("Search campaigns...", key="campaign_search")
        visible = search_campaigns(campaigns, query)

        by_label = {f"{c.name or 'Untitled'} · {time_ago(c.created_at)}": c for c in visible}
        if not by_label:
            st.info("No campaigns match your search.")
        else:
            selected_label = st.selectbox("Select Campaign", list(by_label.keys()), key="factory_campaign_select")
            record = by_label[selected_label]

            full_view = build_campaign_view(record, reporter=reporter)

            st.markdown(f"### {full_view['name']}")
            st.caption(f"Created {full_view['created_relative']} · {full_view['duration']}")
            if full_view["objective"]:
                st.write(full_view["objective"])

            c1, c2 = st.columns(2)
            c1.markdown("**Target Audience**")
            c1.write(", ".join(str(a) for a in full_view["target_audience"]) or "N/A")
            c2.markdown("**Channels**")
            c2.write(", ".join(str(c) for c in full_view["channels"]) or "N/A")

            metadata = full_view["metadata"]
            if metadata:
                with st.expander(f"📝 {metadata.title}", expanded=False):
                    if metadata.boilerplate:
                        st.write(metadata.boilerplate)
                    for objective in metadata.objectives:
                        st.markdown(f"- {objective}")

            st.subheader("Tone Profile")
            render_tone_cards(full_view["tone_cards"])

            st.subheader("Content")
            content_query = st.text_input("Search content...", key=f"content_query_{record.id}")
            counts = full_view["counts"]
            tabs = st.tabs([f"{t.capitalize()} ({counts[t]})" for t in CONTENT_FILTERS])
            for tab, content_type in zip(tabs, CONTENT_FILTERS):
                with tab:
                    tab_view = build_campaign_view(
                        record, content_type=content_type, reporter=CollectingReporter(), query=content_query
                    )
                    if not tab_view["contents"]:
                        st.caption("No matching content." if content_query else "No content of this type.")
                    for entry in tab_view["contents"]:
                        item = entry["item"]
                        with st.expander(f"{entry['icon']} {entry['title']} · {entry['delivery']}"):
                            if item.persona:
                                st.caption(f"Persona: {item.persona}")
                            if item.channel:
                                st.caption(f"Channel: {item.channel}")
                            st.write(clean_content(item.content) or "_No content_")

            st.download_button(
                "📥 Download Campaign Brief",
                data=generate_campaign_brief(full_view),
                file_name=f"campaign_{record.id}_brief.md",
                mime="text/markdown",
            )

            st.divider()

            # Delete Campaign
            st.error("Danger Zone")
            if st.button("🗑️ Delete Campaign", key=f"delete_campaign_{record.id}"):
                st.session_state.confirm_delete_campaign = record.id

            if st.session_state.get("confirm_delete_campaign") == record.id:
                st.warning(f"Are you sure you want to delete **{record.name}**? This action cannot be undone.")
                c1, c2 = st.columns(2)
                with c1:
                    if st.button("Yes, Delete Campaign", type="primary", key="confirm_delete_final"):
                        try:
                            delete_factory_campaign(client, record.id, confirmed=True)
                            st.session_state.confirm_delete_campaign = None
                            st.toast("The campaign has been successfully deleted", icon="🗑️")
                            st.rerun()
                        except ApiError as e:
                            notify_api_error("Error deleting campaign", e)
                with c2:
                    if st.button("Cancel", key="cancel_delete_final"):
                        st.session_state.confirm_delete_campaign = None
                        st.rerun()


elif selection == "Saved Content":
    st.header("🗂️ Saved Content")
    st.caption("Everything you've generated, in one place.")

    content_list = load_or_report(lambda: get_saved_content(client), "Failed to load content", [])
    personas = load_or_report(lambda: get_personas(client), "Failed to load personas", [])

    query = st.text_input("Search by topic, content or type...", key="content_search")
    results = search_saved_content(content_list, query)

    if not content_list:
        st.info("No saved content yet.")
    elif not results:
        st.info("No content matches your search.")
    else:
        df = pd.DataFrame([
            {
                "Topic": c.get("topic") or "Untitled",
                "Type": c.get("type") or "content",
                "Persona": persona_name(c.get("persona_id"), personas),
                "Created": time_ago(c.get("created_at")),
            }
            for c in results
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

        for c in results:
            with st.expander(f"📄 {c.get('topic') or 'Untitled'} ({c.get('type') or 'content'})"):
                st.caption(f"Persona: {persona_name(c.get('persona_id'), personas)} · {time_ago(c.get('created_at'))}")
                st.write(clean_content(c.get("content_text")))


if show_parse_warnings and len(reporter):
    with st.sidebar.expander(f"⚠️ Data warnings ({len(reporter)})"):
        for message, error in reporter.reports:
            st.caption(f"{message}: {error}" if error is not None else message)

# Footer
st.markdown("---")
st.markdown("Built with ❤️ using Streamlit")
