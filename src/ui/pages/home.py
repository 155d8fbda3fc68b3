from __future__ import annotations

import streamlit as st

from src.config import AREAS
from src.ui.layout import open_area


def render() -> None:
    st.markdown("### Select an Area")
    columns = st.columns(len(AREAS))
    for column, area in zip(columns, AREAS):
        with column:
            st.button(
                area.key,
                key=f"iv_home_{area.key}",
                on_click=open_area,
                args=(area.key,),
                use_container_width=True,
                type="primary",
            )
