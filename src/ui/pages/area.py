"""
Per-area landing page listing the sheet views available for that area.
"""

from __future__ import annotations

import streamlit as st

from src.config import area_label, views_for_area
from src.ui.layout import current_view, open_view, page_header
from src.ui.pages import viewer


def render(area: str) -> None:
    page_header(area_label(area))
    views = views_for_area(area)
    selected = next((v for v in views if v.kind == current_view()), None)

    if selected is None:
        viewer.unmount_viewer()
        columns = st.columns(len(views))
        for column, config in zip(columns, views):
            with column:
                st.button(
                    config.label,
                    key=f"iv_view_{config.kind}",
                    on_click=open_view,
                    args=(config.kind,),
                    use_container_width=True,
                )
        return

    viewer.render(selected, area)
