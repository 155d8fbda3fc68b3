from __future__ import annotations

import streamlit as st

from src.config import ViewConfig, load_settings
from src.data.errors import ViewerError
from src.data.loader import GridFetcher
from src.data.pipeline import build_view
from src.data.polling import GridSession
from src.ui.components.tables import export_file_name, render_grid_table
from src.ui.layout import clear_filter_state, filter_controls, filter_state_from_session, store_filter_state

SESSION_KEY = "iv_grid_session"

LOAD_ERROR_HINT = (
    "Failed to retrieve data from the spreadsheet. Please ensure the web app URL "
    "is correct and the sheet is accessible."
)


def get_session() -> GridSession:
    """One GridSession per browser session, created lazily from settings."""
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        settings = load_settings()
        fetcher = GridFetcher(settings.api_url, timeout=settings.request_timeout)
        session = GridSession(fetcher, interval=settings.poll_interval)
        st.session_state[SESSION_KEY] = session
    return session


def unmount_viewer() -> None:
    session = st.session_state.get(SESSION_KEY)
    if session is not None and session.mounted:
        session.unmount()


def _render_body(session: GridSession, config: ViewConfig, area: str) -> None:
    if session.error:
        st.error("Could not load data")
        st.write(LOAD_ERROR_HINT)
        st.code(session.error, language=None)
        return

    view = build_view(session.grid, config.kind, filter_state_from_session())
    store_filter_state(view.state)
    filter_controls(config.kind, view.facets)
    render_grid_table(view, file_name=export_file_name(config.title, area))
    if session.last_updated is not None:
        st.caption(f"Last updated {session.last_updated:%H:%M:%S}; refreshes every {session.interval:.0f}s.")


def render(config: ViewConfig, area: str) -> None:
    st.subheader(config.title)
    try:
        session = get_session()
    except ViewerError as exc:
        st.error(str(exc))
        return

    with st.spinner("Loading data..."):
        if session.ensure_mounted(area, config.kind):
            clear_filter_state()

    @st.fragment(run_every=session.interval)
    def _live_view() -> None:
        session.refresh_if_due()
        _render_body(session, config, area)

    _live_view()
