"""
Pure recomputation of the rendered view from a fetched grid.

``build_view`` is re-run synchronously whenever the grid, the facet
selection or the search term changes: reorder -> facets -> row filters ->
column visibility. It never raises on a well-formed grid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

import pandas as pd

from src.data.columns import rendered_columns, resolve_visible_columns
from src.data.filters import (
    ALL,
    DEFAULT_FILTERS,
    Facets,
    FilterState,
    apply_filters,
    derive_facets,
    resolve_selection,
)
from src.data.grid import Grid, body_frame, is_equipment, normalize_grid, reorder_equipment_columns, split_grid

NO_MATCH_MESSAGE = "No items match the current filter."
NO_DATA_MESSAGE = "No data found in this sheet."


@dataclass
class GridView:
    kind: str
    header_rows: Grid
    body: pd.DataFrame
    facets: Facets
    state: FilterState
    visible_columns: Optional[Set[int]]
    total_rows: int = 0
    columns: List[int] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return not self.body.empty

    @property
    def area_filtered(self) -> bool:
        return is_equipment(self.kind) and self.state.area != ALL

    @property
    def empty_message(self) -> str:
        return NO_MATCH_MESSAGE if self.total_rows > 0 else NO_DATA_MESSAGE

    def header_labels(self, columns: List[int]) -> List[str]:
        """Flatten the header rows into one label per column.

        Blank header cells are skipped and duplicate labels get a numeric
        suffix, since a DataFrame needs unique column names to render.
        """
        labels: List[str] = []
        seen: dict = {}
        for col in columns:
            parts = [row[col].strip() for row in self.header_rows if col < len(row) and row[col].strip()]
            label = " / ".join(parts) or f"Column {col + 1}"
            if label in seen:
                seen[label] += 1
                label = f"{label} ({seen[label]})"
            else:
                seen[label] = 1
            labels.append(label)
        return labels

    def to_frame(self, for_export: bool = False) -> pd.DataFrame:
        """Display frame with flattened header labels.

        The export frame keeps the area column even when an area is
        selected; the on-screen frame drops it.
        """
        if for_export:
            columns = rendered_columns(len(self.body.columns), self.visible_columns)
        else:
            columns = self.columns
        frame = self.body[columns].copy()
        frame.columns = self.header_labels(columns)
        return frame.reset_index(drop=True)


def build_view(grid: Optional[Grid], kind: str, state: FilterState = DEFAULT_FILTERS) -> GridView:
    normalized = normalize_grid(grid or [])
    if is_equipment(kind):
        normalized = reorder_equipment_columns(normalized)

    header_rows, body_rows = split_grid(normalized, kind)
    width = len(normalized[0]) if normalized else 0

    facets = derive_facets(normalized, kind, state)
    resolved = resolve_selection(facets, state)
    if resolved.area != state.area:
        # cabinet options are scoped to the area
        facets = derive_facets(normalized, kind, resolved)
    state = resolved
    body = apply_filters(body_frame(body_rows, width), facets, state, kind)
    header_row = header_rows[0] if header_rows else []
    visible = resolve_visible_columns(header_row, body, state.search, kind)

    view = GridView(
        kind=kind,
        header_rows=header_rows,
        body=body,
        facets=facets,
        state=state,
        visible_columns=visible,
        total_rows=len(body_rows),
    )
    view.columns = rendered_columns(width, visible, facets.area_index, view.area_filtered)
    return view
