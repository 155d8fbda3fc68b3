"""
Layout helpers for the Streamlit application (page setup, navigation, filter controls).
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import streamlit as st

from src.config import AREAS, area_label
from src.data.filters import ALL, DEFAULT_FILTERS, FilterState, Facets, is_filterable, serialize_filters
from src.data.grid import is_equipment

AREA_KEY = "iv_area"
VIEW_KEY = "iv_view"
FILTER_PREFIX = "iv_filter_"
TYPE_KEY = f"{FILTER_PREFIX}type"
AREA_FILTER_KEY = f"{FILTER_PREFIX}area"
CABINET_KEY = f"{FILTER_PREFIX}cabinet"
SEARCH_KEY = f"{FILTER_PREFIX}search"
FILTER_STATE_KEY = f"{FILTER_PREFIX}state"
ACTIVE_FILTERS_KEY = "iv_active_filters"

logger = logging.getLogger(__name__)


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="Plant Inventory Viewer",
        layout="wide",
        page_icon=":clipboard:",
    )
    _inject_table_header_style()


def current_area() -> Optional[str]:
    return st.session_state.get(AREA_KEY)


def current_view() -> Optional[str]:
    return st.session_state.get(VIEW_KEY)


def go_home() -> None:
    st.session_state[AREA_KEY] = None
    st.session_state[VIEW_KEY] = None


def open_area(area: str) -> None:
    st.session_state[AREA_KEY] = area
    st.session_state[VIEW_KEY] = None


def open_view(kind: str) -> None:
    st.session_state[VIEW_KEY] = kind


def back() -> None:
    if current_view():
        st.session_state[VIEW_KEY] = None
    else:
        go_home()


def sidebar_navigation() -> None:
    st.sidebar.header("Navigation")
    st.sidebar.button("🏠 Home", on_click=go_home, use_container_width=True)
    for area in AREAS:
        st.sidebar.button(
            area.label,
            key=f"iv_nav_{area.key}",
            on_click=open_area,
            args=(area.key,),
            use_container_width=True,
            type="primary" if current_area() == area.key else "secondary",
        )


def page_header(title: str) -> None:
    col_back, col_title, col_switch = st.columns([1, 4, 3])
    with col_back:
        st.button("← Back", on_click=back, key="iv_back")
    with col_title:
        st.markdown(f"## {title}")
    area = current_area()
    with col_switch:
        others = [a for a in AREAS if a.key != area]
        cols = st.columns(len(others)) if others else []
        for col, other in zip(cols, others):
            with col:
                st.button(
                    other.key,
                    key=f"iv_switch_{other.key}",
                    on_click=open_area,
                    args=(other.key,),
                    help=f"Switch to {area_label(other.key)}",
                )


def clear_filter_state() -> None:
    _clear_state_prefixes([FILTER_PREFIX])


def _clear_state_prefixes(prefixes: List[str]) -> None:
    for prefix in prefixes:
        for key in list(st.session_state.keys()):
            if key.startswith(prefix):
                del st.session_state[key]


def _on_filter_change(key: str, update: Callable[[FilterState, str], FilterState]) -> None:
    """Widget callback: apply the new widget value through the FilterState API."""
    st.session_state[FILTER_STATE_KEY] = update(filter_state_from_session(), st.session_state[key])


def filter_state_from_session() -> FilterState:
    return st.session_state.get(FILTER_STATE_KEY, DEFAULT_FILTERS)


def store_filter_state(state: FilterState) -> None:
    """Persist the resolved state and mirror it into the widget keys.

    Must run before the filter widgets are created in this script run.
    """
    st.session_state[FILTER_STATE_KEY] = state
    st.session_state[TYPE_KEY] = state.type
    st.session_state[AREA_FILTER_KEY] = state.area
    st.session_state[CABINET_KEY] = state.cabinet
    st.session_state[SEARCH_KEY] = state.search
    serialized = serialize_filters(state)
    if st.session_state.get(ACTIVE_FILTERS_KEY) != serialized:
        logger.debug("Active filters: %s", serialized)
    st.session_state[ACTIVE_FILTERS_KEY] = serialized


def _facet_radio(
    label: str,
    key: str,
    options: List[str],
    update: Callable[[FilterState, str], FilterState],
) -> None:
    st.radio(
        label,
        options=options,
        key=key,
        horizontal=True,
        on_change=_on_filter_change,
        args=(key, update),
    )


def filter_controls(kind: str, facets: Facets) -> None:
    """Render search and facet widgets for an already resolved filter state.

    Facets with a single option (only ``All``) are not shown.
    """
    if not is_filterable(kind):
        return
    equipment = is_equipment(kind)

    if equipment:
        st.text_input(
            "Search columns",
            key=SEARCH_KEY,
            placeholder="Match column names, e.g. slot or cabinet label",
            on_change=_on_filter_change,
            args=(SEARCH_KEY, FilterState.with_search),
        )
    else:
        st.text_input(
            "Search",
            key=SEARCH_KEY,
            placeholder="Search by name, model, etc...",
            on_change=_on_filter_change,
            args=(SEARCH_KEY, FilterState.with_search),
        )

    if len(facets.type_options) > 1:
        _facet_radio("Filter by Type", TYPE_KEY, facets.type_options, FilterState.with_type)
    if equipment and len(facets.area_options) > 1:
        _facet_radio("Filter by Area", AREA_FILTER_KEY, facets.area_options, FilterState.with_area)
    if equipment and len(facets.cabinet_options) > 1:
        st.selectbox(
            "Cabinet",
            options=facets.cabinet_options,
            key=CABINET_KEY,
            on_change=_on_filter_change,
            args=(CABINET_KEY, FilterState.with_cabinet),
        )


def _inject_table_header_style() -> None:
    """Let long equipment header labels wrap instead of truncating."""
    st.markdown(
        """
        <style>
        div[data-testid="stDataFrame"] [role="columnheader"] {
            white-space: normal !important;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
