"""
Facet derivation and row filtering for the sheet viewer.

Facets (type, area, cabinet) are read from the first header row of the
reordered grid. Filters are applied as a fixed sequence of narrowing passes
over the body DataFrame.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import pandas as pd

from src.data.grid import Grid, find_column, header_row_count, is_equipment

ALL = "All"


@dataclass(frozen=True)
class FilterState:
    type: str = ALL
    area: str = ALL
    cabinet: str = ALL
    search: str = ""

    def with_type(self, value: str) -> "FilterState":
        return replace(self, type=value)

    def with_area(self, value: str) -> "FilterState":
        # cabinets belong to an area, so a new area invalidates the cabinet pick
        return replace(self, area=value, cabinet=ALL)

    def with_cabinet(self, value: str) -> "FilterState":
        return replace(self, cabinet=value)

    def with_search(self, value: str) -> "FilterState":
        return replace(self, search=value)


DEFAULT_FILTERS = FilterState()


@dataclass
class Facets:
    type_index: int = -1
    area_index: int = -1
    cabinet_index: int = -1
    type_options: List[str] = field(default_factory=list)
    area_options: List[str] = field(default_factory=list)
    cabinet_options: List[str] = field(default_factory=list)


def is_filterable(kind: str) -> bool:
    return "stock" in kind or is_equipment(kind)


def _distinct_values(rows: Grid, index: int) -> List[str]:
    seen: Dict[str, None] = {}
    for row in rows:
        value = row[index] if index < len(row) else ""
        if value and value not in seen:
            seen[value] = None
    return list(seen)


def _options(values: List[str]) -> List[str]:
    # an "All" cell in the sheet must not show up twice
    return [ALL] + [v for v in values if v != ALL]


def derive_facets(grid: Optional[Grid], kind: str, state: FilterState = DEFAULT_FILTERS) -> Facets:
    """Compute facet column positions and option lists for ``grid``.

    Each facet is derived independently; a missing column leaves that facet
    disabled (index -1, no options). A grid without any data row disables
    every facet.
    """
    facets = Facets()
    count = header_row_count(kind)
    if not grid or len(grid) < count + 1:
        return facets

    header = grid[0]
    body = grid[count:]
    equipment = is_equipment(kind)

    if is_filterable(kind):
        facets.type_index = find_column(header, "type")
        if facets.type_index != -1:
            facets.type_options = _options(_distinct_values(body, facets.type_index))

    if not equipment:
        return facets

    facets.area_index = find_column(header, "area")
    if facets.area_index != -1:
        facets.area_options = _options(_distinct_values(body, facets.area_index))

    facets.cabinet_index = find_column(header, "cabinet")
    if facets.cabinet_index == -1 or state.area == ALL or facets.area_index == -1:
        return facets

    area_idx = facets.area_index
    in_area = [row for row in body if area_idx < len(row) and row[area_idx] == state.area]
    cabinets = _distinct_values(in_area, facets.cabinet_index)
    if cabinets:
        facets.cabinet_options = _options(cabinets)
    return facets


def _keep_if_offered(value: str, options: List[str]) -> str:
    return value if value in options else ALL


def resolve_selection(facets: Facets, state: FilterState) -> FilterState:
    """Fall back to ``All`` for any selection the current options no longer offer.

    A refreshed grid can drop the selected type, area or cabinet. A dropped
    area goes through ``with_area`` so the cabinet is reset with it.
    """
    resolved = state.with_type(_keep_if_offered(state.type, facets.type_options))
    area = _keep_if_offered(state.area, facets.area_options)
    if area != state.area:
        resolved = resolved.with_area(area)
    return resolved.with_cabinet(_keep_if_offered(resolved.cabinet, facets.cabinet_options))


def _contains_term(frame: pd.DataFrame, term: str) -> pd.Series:
    lowered = term.lower()
    mask = pd.Series(False, index=frame.index)
    for col in frame.columns:
        mask |= frame[col].astype(str).str.lower().str.contains(lowered, regex=False, na=False)
    return mask


def _has_content(frame: pd.DataFrame) -> pd.Series:
    stripped = frame.apply(lambda col: col.astype(str).str.strip() != "")
    return stripped.any(axis=1)


def apply_filters(body: pd.DataFrame, facets: Facets, state: FilterState, kind: str) -> pd.DataFrame:
    """Narrow ``body`` by the selected facets and search term.

    Passes run in order: type, area, cabinet, text search, then (equipment
    only) dropping rows whose every cell is blank. For equipment the search
    term selects columns instead of rows, see ``resolve_visible_columns``.
    """
    if body.empty:
        return body
    filtered = body
    equipment = is_equipment(kind)

    if is_filterable(kind) and state.type != ALL and facets.type_index != -1:
        filtered = filtered[filtered[facets.type_index] == state.type]

    if state.area != ALL and facets.area_index != -1:
        filtered = filtered[filtered[facets.area_index] == state.area]

    if equipment and state.cabinet != ALL and facets.cabinet_index != -1:
        filtered = filtered[filtered[facets.cabinet_index] == state.cabinet]

    if state.search and not equipment:
        filtered = filtered[_contains_term(filtered, state.search)]

    if equipment and not filtered.empty:
        filtered = filtered[_has_content(filtered)]

    return filtered


def serialize_filters(state: FilterState) -> Dict[str, Any]:
    """JSON-friendly view of the filter state for session_state and logging."""
    return {
        "type": state.type,
        "area": state.area,
        "cabinet": state.cabinet,
        "search": state.search,
    }
