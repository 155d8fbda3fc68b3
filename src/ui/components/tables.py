"""
Reusable helpers for rendering sheet views as data tables.
"""

from __future__ import annotations

import re

import streamlit as st

from src.data.grid import is_equipment
from src.data.pipeline import GridView


def export_file_name(title: str, area: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", f"{area}_{title}").strip("_").lower()
    return f"{slug or 'export'}.csv"


def render_grid_table(view: GridView, file_name: str = "export.csv") -> None:
    if not view.has_data:
        st.info(view.empty_message)
        return

    display_df = view.to_frame()
    st.dataframe(
        display_df,
        use_container_width=True,
        height=600 if is_equipment(view.kind) else 400,
        hide_index=True,
    )
    st.caption(f"Showing {len(display_df):,} of {view.total_rows:,} rows.")

    csv_bytes = view.to_frame(for_export=True).to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name=file_name,
        mime="text/csv",
    )
