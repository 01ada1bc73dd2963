import argparse
import json
import logging
from datetime import date
from pathlib import Path

import streamlit as st
from pydantic import ValidationError

from abroad.config import configure_logging, load_settings
from abroad.models import Pin, PinCategory
from abroad.models.pin import transport_mode_options
from abroad.services import (
    PinEditSession,
    PinSearchFilter,
    PinValidationError,
    build_insights,
    close_stored_pin,
    enrich_pin,
)
from abroad.services.trip_emissions import (
    emissions_by_mode,
    footprint_feedback,
    projected_savings,
    total_emissions,
)
from abroad.storage import PinStore, PinStoreError

logger = logging.getLogger(__name__)

SETTINGS = load_settings()


def parse_args():
    """Parse command-line arguments passed after -- in streamlit run."""
    parser = argparse.ArgumentParser(description="Abroad travel footprint app")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding pins.json and session.json",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    # Filter out streamlit arguments and parse only our app arguments
    args, _ = parser.parse_known_args()
    return args


APP_ARGS = parse_args()
DATA_DIR = Path(APP_ARGS.data_dir) if APP_ARGS.data_dir else SETTINGS.data_dir
DEBUG_MODE = APP_ARGS.debug

configure_logging("DEBUG" if DEBUG_MODE else SETTINGS.log_level)

CATEGORY_OPTIONS = [PinCategory.VISITED, PinCategory.FUTURE]


def init_session_state():
    """Initialize session state variables."""
    if "store" not in st.session_state:
        st.session_state.store = PinStore(DATA_DIR)
    if "app_session" not in st.session_state:
        app_session = st.session_state.store.load_session()
        if not app_session.has_seen_welcome_popup:
            # First launch: seed the goal from configuration
            app_session.user_carbon_goal = SETTINGS.user_carbon_goal
        st.session_state.app_session = app_session
    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None


def save_app_session():
    st.session_state.store.save_session(st.session_state.app_session)


def render_welcome():
    """Show the welcome panel once and let the user set a carbon goal."""
    app_session = st.session_state.app_session
    if app_session.has_seen_welcome_popup:
        return

    with st.container(border=True):
        st.subheader("Welcome to Abroad")
        st.markdown(
            "Transportation accounts for about **25% of global CO₂ emissions**. "
            "A single long-haul flight can emit more CO₂ than some people produce in a year."
        )
        goal = st.number_input(
            "Set a goal for your max carbon allowance (kg)",
            min_value=1.0,
            value=float(app_session.user_carbon_goal),
            step=100.0,
        )
        if st.button("Start Your Journey"):
            app_session.user_carbon_goal = goal
            app_session.has_seen_welcome_popup = True
            save_app_session()
            st.rerun()


def render_sidebar(pins: list[Pin]):
    """Render the sidebar with goal progress and data import/export."""
    with st.sidebar:
        st.title("🌍 Abroad")
        st.caption("Pin your travels, reduce your carbon footprint")
        if DEBUG_MODE:
            st.caption(f"Mode: Debug | Data: {DATA_DIR}")

        insights = build_insights(pins, st.session_state.app_session.user_carbon_goal)
        st.markdown("**Max carbon emission goal**")
        st.progress(insights.carbon_goal_progress)
        st.caption(f"{int(insights.total_emissions)} kg CO₂ used / {int(insights.carbon_goal)} kg CO₂ goal")

        st.markdown("---")
        st.subheader("Save/Load Pins")
        st.download_button(
            "Download pins",
            data=json.dumps([pin.to_storage() for pin in pins], indent=2, ensure_ascii=False),
            file_name="pins.json",
            mime="application/json",
        )
        uploaded_file = st.file_uploader("Load pins", type=["json"], key="pins_upload")
        if uploaded_file is not None:
            # Track which file was last loaded to prevent re-loading on rerun
            file_id = f"{uploaded_file.name}_{uploaded_file.size}"
            if st.session_state.get("last_loaded_file") != file_id:
                try:
                    loaded = [Pin.from_storage(record) for record in json.load(uploaded_file)]
                except (json.JSONDecodeError, ValidationError, TypeError) as e:
                    logger.warning("Rejected uploaded pins file %s: %s", uploaded_file.name, e)
                    st.error(f"Could not load pins: {e}")
                else:
                    st.session_state.store.replace_all(loaded)
                    st.session_state.last_loaded_file = file_id
                    st.success(f"Loaded {len(loaded)} pins from {uploaded_file.name}")
                    st.rerun()


def switch_editor(pin_id):
    """Open the editor on another pin, ending the previous edit session first."""
    previous = st.session_state.editing_id
    if previous is not None and previous != pin_id:
        close_stored_pin(st.session_state.store, previous, today=date.today())
    st.session_state.editing_id = pin_id


def render_new_pin_form():
    """Place a new pin by coordinate."""
    with st.expander("➕ Add a location", expanded=False):
        with st.form("new_pin"):
            col1, col2 = st.columns(2)
            with col1:
                latitude = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=0.0)
            with col2:
                longitude = st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=0.0)
            submitted = st.form_submit_button("Drop pin")
        if submitted:
            pin = Pin(latitude=latitude, longitude=longitude)
            st.session_state.store.append(pin)
            switch_editor(pin.id)
            st.rerun()


def render_transport_editor(pin: Pin):
    """Edit a pin's transport legs and show its footprint."""
    st.markdown("**✈️ 🚆 🚗 Measure Your Carbon Footprint**")
    for entry in list(pin.transport_entries):
        col1, col2, col3 = st.columns([2, 2, 1])
        with col1:
            options = transport_mode_options(entry.mode)
            entry.mode = st.selectbox("Mode", options, index=options.index(entry.mode), key=f"mode_{entry.id}")
        with col2:
            entry.distance = st.text_input("Distance (km)", value=entry.distance, key=f"dist_{entry.id}")
        with col3:
            if st.button("🗑️", key=f"del_entry_{entry.id}"):
                st.session_state.store.update(pin.id, lambda p, e=entry.id: p.remove_transport_entry(e))
                st.rerun()

    if st.button("Add Transport", key=f"add_entry_{pin.id}"):
        st.session_state.store.update(pin.id, lambda p: p.add_transport_entry())
        st.rerun()

    if pin.transport_entries:
        total = total_emissions(pin.transport_entries)
        st.markdown(f"Total Emissions: **{total:.2f} kg CO₂**")
        st.caption(footprint_feedback(total))
        savings = projected_savings(pin.transport_entries)
        if savings > 0:
            st.caption(f"Taking the train instead of flying would save {savings:.0f} kg CO₂.")
        st.bar_chart(emissions_by_mode(pin.transport_entries))


def assign_region_guide(pin: Pin) -> Pin:
    """Fill in region tips once and keep them, so reruns do not reshuffle."""
    enriched = enrich_pin(pin)
    if enriched is pin:
        return pin

    def assign(stored: Pin) -> None:
        stored.eco_region = enriched.eco_region
        stored.eco_tips = enriched.eco_tips
        stored.packing_list = enriched.packing_list

    st.session_state.store.update(pin.id, assign)
    return enriched


def render_pin_editor(pin: Pin):
    """Render the editor for one pin."""
    if pin.category == PinCategory.FUTURE:
        pin = assign_region_guide(pin)
    session = PinEditSession(pin, today=date.today())

    with st.container(border=True):
        st.subheader("Edit Pin" if pin.title else "New Pin")
        pin.title = st.text_input("Title", value=pin.title, key=f"title_{pin.id}")
        category = pin.category if pin.category in CATEGORY_OPTIONS else PinCategory.VISITED
        pin.category = st.radio(
            "Category",
            CATEGORY_OPTIONS,
            index=CATEGORY_OPTIONS.index(category),
            format_func=lambda c: c.value,
            horizontal=True,
            key=f"category_{pin.id}",
        )

        col1, col2 = st.columns(2)
        with col1:
            pin.start_date = st.date_input("Start Date", value=pin.start_date or session.today, key=f"start_{pin.id}")
        with col2:
            if pin.category == PinCategory.VISITED:
                pin.end_date = st.date_input("End Date", value=pin.end_date or session.today, key=f"end_{pin.id}")

        if pin.category == PinCategory.VISITED:
            places = st.text_area(
                "Places visited (one per line)",
                value="\n".join(pin.places_visited),
                key=f"places_{pin.id}",
            )
            pin.places_visited = [line.strip() for line in places.splitlines() if line.strip()]
            pin.trip_rating = st.slider("Trip Rating (0 = no rating)", 0, 5, value=pin.trip_rating or 0, key=f"rating_{pin.id}")
            budget = st.number_input("Trip Cost ($)", min_value=0.0, value=pin.trip_budget or 0.0, key=f"budget_{pin.id}")
            pin.trip_budget = budget or None
            render_transport_editor(pin)
        else:
            st.markdown(f"**🌍 Sustainable Travel Tips for {pin.eco_region or 'this region'}**")
            for tip in pin.eco_tips:
                st.markdown(f"- {tip}")
            st.markdown("**🎒 Packing List**")
            for item in pin.packing_list:
                st.markdown(f"- {item}")

        col_save, col_close, col_delete = st.columns(3)
        with col_save:
            if st.button("Save Pin", key=f"save_{pin.id}"):
                try:
                    session.save(st.session_state.store)
                except PinValidationError as e:
                    st.error(str(e))
                else:
                    st.session_state.editing_id = None
                    st.rerun()
        with col_close:
            if st.button("Close", key=f"close_{pin.id}"):
                session.close(st.session_state.store)
                st.session_state.editing_id = None
                st.rerun()
        with col_delete:
            if st.button("Delete", key=f"delete_{pin.id}"):
                st.session_state.store.remove(pin.id)
                st.session_state.editing_id = None
                st.rerun()


def render_pins(pins: list[Pin]):
    """List saved pins and open the editor for the selected one."""
    render_new_pin_form()

    if not pins:
        st.info("📍 Get started with your journey! Add a location to create your first pin.")
        return

    app_session = st.session_state.app_session
    if app_session.should_show_analysis_notification(len(pins)):
        st.toast("Check the Insights tab for an analysis of your travels!")
        app_session.has_shown_analysis_notification = True
        save_app_session()

    for pin in pins:
        col1, col2 = st.columns([5, 1])
        with col1:
            label = pin.title or "Untitled pin"
            st.markdown(f"{pin.icon} **{label}** · {pin.category.value} · ({pin.latitude:.2f}, {pin.longitude:.2f})")
        with col2:
            if st.button("Edit", key=f"edit_{pin.id}"):
                switch_editor(pin.id)
                st.rerun()

    editing = next((p for p in pins if p.id == st.session_state.editing_id), None)
    if editing is not None:
        render_pin_editor(editing)


def render_search(pins: list[Pin]):
    """Search pins by title, category, date, rating or budget."""
    query = st.text_input(
        "Search",
        placeholder="Search Locations, Rating = 1-5, Category...",
        key="search_query",
    )
    results = PinSearchFilter().filter(pins, query)
    if query.strip() and not results:
        st.caption("No matching pins.")
    for pin in results:
        st.markdown(f"**{pin.title or 'Untitled pin'}** · {pin.category.value}")


def render_insights(pins: list[Pin]):
    """Render the travel insights dashboard."""
    insights = build_insights(pins, st.session_state.app_session.user_carbon_goal)

    col1, col2, col3 = st.columns(3)
    col1.metric("📊 Travel Efficiency Score", f"{insights.travel_efficiency_score}%")
    col2.metric("🌍 Better than average traveler", f"{insights.global_rank}%")
    col3.metric("📍 Locations Saved", insights.locations_saved)

    st.subheader("🏆 Eco Badges Earned")
    if insights.badges:
        for badge in insights.badges:
            st.markdown(f"- **{badge.name}** – {badge.description}")
    else:
        st.caption("No badges earned yet. Keep traveling sustainably to unlock achievements! 🌱")

    st.subheader("🌱 Real-World Impact")
    st.markdown(f"🌳 **Trees Planted Equivalent:** {insights.tree_equivalent}")
    st.markdown(f"🚗 **Cars Removed from Road:** {insights.car_equivalent}")

    st.subheader("🛫 Flight Impact Warning")
    if insights.highest_flight_km:
        st.markdown(f"Your **{insights.highest_flight_km:g} km** flight emitted the most CO₂.")
        st.markdown(f"🚆 Taking trains instead could save **{insights.projected_savings:.0f} kg CO₂**.")
    else:
        st.success("✅ No recent high-emission flights detected!")

    if insights.emissions_by_mode:
        st.subheader("Your Transport Breakdown")
        st.bar_chart(insights.emissions_by_mode)
        st.markdown(f"🌱 Best: **{insights.best_transport}** · ⚠️ Worst: **{insights.worst_transport}**")

    st.subheader("📍 Travel Summary")
    st.markdown(f"📌 **Most visited region:** {insights.most_visited_region}")
    st.markdown(f"🏙️ **Most pinned place:** {insights.most_visited_title}")
    st.markdown(f"✈️ **Next Trip:** {insights.next_trip}")
    st.markdown(f"🌱 **CO₂ Saved:** {insights.savings_estimate:.1f} kg")
    if insights.average_rating is not None:
        st.markdown(f"⭐ **Average rating:** {insights.average_rating:.1f}")


def main():
    """Main application entry point."""
    st.set_page_config(page_title="Abroad", page_icon="🌍", layout="wide")
    init_session_state()

    pins = st.session_state.store.get_all()
    app_session = st.session_state.app_session
    if not pins and app_session.has_shown_analysis_notification:
        app_session.sync_with_pins(len(pins))
        save_app_session()

    render_sidebar(pins)
    render_welcome()

    tab1, tab2, tab3 = st.tabs(["📍 Pins", "🔍 Search", "📊 Insights"])

    try:
        with tab1:
            render_pins(pins)

        with tab2:
            render_search(pins)

        with tab3:
            render_insights(pins)
    except PinStoreError as e:
        logger.error("Pin change not saved: %s", e)
        st.error(f"Could not save your change: {e}")


if __name__ == "__main__":
    main()
