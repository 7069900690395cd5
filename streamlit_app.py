"""
Streamlit App: Voter Turnout Change by County

Colours every U.S. county by the change in voter turnout (VAP) between
two election years. Click a county for its full comparison.
"""
import asyncio
import logging

import plotly.express as px
import streamlit as st
from streamlit_folium import st_folium

import config
from color_scale import LEGEND
from county_map import new_click_fips
from data_loader import TurnoutDataClient
from metrics import delta_table
from session import TurnoutMapSession

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Page configuration
st.set_page_config(
    page_title="Voter Turnout Change",
    page_icon="🗳️",
    layout="wide",
    initial_sidebar_state="expanded"
)


async def _apply(session: TurnoutMapSession, action) -> None:
    """Run a session action and wait for the redraw it scheduled.

    Each rerun gets a fresh loop, so the redraw fires after one delay;
    Streamlit itself drops reruns superseded by newer widget input.
    """
    action()
    await session.flush()


async def _load(session: TurnoutMapSession, client: TurnoutDataClient) -> bool:
    loaded = await session.load(client)
    await session.flush()
    return loaded


# Initialize client and session in session state
if 'turnout_client' not in st.session_state:
    st.session_state.turnout_client = TurnoutDataClient(base_url=config.API_URL)
if 'turnout_session' not in st.session_state:
    st.session_state.turnout_session = TurnoutMapSession()
    st.session_state.last_click_count = None


def year_selectors(session: TurnoutMapSession):
    years = session.years
    col1, col2 = st.columns(2)
    with col1:
        previous_year = st.selectbox(
            "Previous Year",
            years,
            index=years.index(session.previous_year) if session.previous_year in years else 0,
        )
    with col2:
        current_year = st.selectbox(
            "Current Year",
            years,
            index=years.index(session.current_year) if session.current_year in years else len(years) - 1,
        )
    return current_year, previous_year


def show_summary(session: TurnoutMapSession):
    """Bucket distribution and the per-county change table."""
    df = delta_table(session.index, session.index.fips_codes(), session.current_year, session.previous_year)
    if df.empty:
        return

    st.subheader(f"Turnout Change Distribution ({session.previous_year} to {session.current_year})")
    counts = df['bucket'].value_counts()
    labels = [bucket.label for bucket in LEGEND]
    fig = px.bar(
        x=labels,
        y=[int(counts.get(label, 0)) for label in labels],
        color=labels,
        color_discrete_map={bucket.label: bucket.color for bucket in LEGEND},
        labels={'x': 'Change in Voter Turnout (VAP)', 'y': 'Counties'},
    )
    fig.update_layout(showlegend=False, margin={"r": 0, "t": 10, "l": 0, "b": 0}, height=300)
    st.plotly_chart(fig, use_container_width=True)

    with st.expander("📊 View County Changes"):
        st.dataframe(df, use_container_width=True)
        csv = df.to_csv(index=False)
        st.download_button(
            label="Download Turnout Changes (CSV)",
            data=csv,
            file_name=f"turnout_change_{session.previous_year}_{session.current_year}.csv",
            mime="text/csv"
        )


def main():
    """Main page function."""
    st.header("Voter Turnout Change by County")
    session = st.session_state.turnout_session

    # API Configuration (in sidebar)
    with st.sidebar.expander("⚙️ API Settings"):
        api_url = st.text_input(
            "API URL",
            value=st.session_state.turnout_client.base_url,
            help="Change the data service URL if needed"
        )
        if api_url.rstrip('/') != st.session_state.turnout_client.base_url:
            st.session_state.turnout_client = TurnoutDataClient(base_url=api_url)
            session.reset()

        if st.button("🔌 Test API Connection"):
            if st.session_state.turnout_client.test_connection():
                st.success("✅ API is reachable!")
            else:
                st.error("❌ Cannot reach API. Check URL and network connection.")

    if not session.data_loaded:
        if session.error is None:
            with st.spinner("Loading map data..."):
                asyncio.run(_load(session, st.session_state.turnout_client))
        if not session.data_loaded:
            st.markdown(session.panel_html, unsafe_allow_html=True)
            if st.button("Reload Data"):
                session.reset()
                st.rerun()
            return

    if not session.years:
        st.info("The statistics dataset has no county records.")
        return

    current_year, previous_year = year_selectors(session)
    if (current_year, previous_year) != (session.current_year, session.previous_year):
        asyncio.run(_apply(session, lambda: session.set_years(current_year, previous_year)))

    map_col, panel_col = st.columns([3, 1])

    with map_col:
        map_state = st_folium(
            session.renderer.map,
            width=900,
            height=600,
            returned_objects=["last_active_drawing", "last_object_clicked_count"],
            key="turnout_map",
        )

    fips_code, click_count = new_click_fips(map_state, st.session_state.last_click_count)
    st.session_state.last_click_count = click_count
    if fips_code:
        asyncio.run(_apply(session, lambda: session.select_county(fips_code)))
        st.rerun()

    with panel_col:
        st.markdown(session.panel_html, unsafe_allow_html=True)

    show_summary(session)


# Run the page
main()
