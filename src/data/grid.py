"""
Grid helpers shared by every stage of the viewer pipeline.

A grid is the raw sheet snapshot returned by the endpoint: a list of rows,
each a list of cell strings. The first ``header_row_count(kind)`` rows are
headers, the rest are data rows.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import pandas as pd

Grid = List[List[str]]

EQUIPMENT = "equipment"


def header_row_count(kind: str) -> int:
    """Stock sheets carry a single header row, the equipment matrix four."""
    return 1 if "stock" in kind else 4


def is_equipment(kind: str) -> bool:
    return kind == EQUIPMENT


def _cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        # Sheets serialises checkboxes as JSON booleans
        return "TRUE" if value else "FALSE"
    return str(value)


def normalize_grid(raw: Sequence[Sequence[Any]]) -> Grid:
    """Return a rectangular copy of ``raw`` with every cell as ``str``.

    Width is taken from row 0. Shorter rows are padded with ``""`` and longer
    rows are truncated so every downstream index lookup is safe.
    """
    if not raw:
        return []
    width = len(raw[0])
    grid: Grid = []
    for row in raw:
        cells = [_cell_to_str(v) for v in list(row)[:width]]
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        grid.append(cells)
    return grid


def find_column(header_row: Optional[Sequence[str]], label: str) -> int:
    """Index of ``label`` in ``header_row`` (case-insensitive, trimmed), else -1."""
    if not header_row:
        return -1
    target = label.strip().lower()
    for idx, header in enumerate(header_row):
        if str(header).strip().lower() == target:
            return idx
    return -1


def split_grid(grid: Optional[Grid], kind: str) -> tuple[Grid, Grid]:
    """Split into (header_rows, body_rows)."""
    if not grid:
        return [], []
    count = header_row_count(kind)
    return grid[:count], grid[count:]


def body_frame(body_rows: Grid, width: int) -> pd.DataFrame:
    """Build a string DataFrame with integer column labels ``0..width-1``."""
    if not body_rows:
        return pd.DataFrame(columns=list(range(width)), dtype=object)
    frame = pd.DataFrame(body_rows, columns=list(range(width)), dtype=object)
    return frame.fillna("")


def reorder_equipment_columns(grid: Optional[Grid]) -> Optional[Grid]:
    """Move the ``cabinet`` column so it directly follows ``area``.

    Every row (headers included) gets the same permutation. The grid is
    returned as-is when either column is missing or the two are already
    adjacent, which also makes the function idempotent.
    """
    if not grid:
        return grid
    area_idx = find_column(grid[0], "area")
    cabinet_idx = find_column(grid[0], "cabinet")
    if area_idx == -1 or cabinet_idx == -1 or cabinet_idx == area_idx + 1:
        return grid

    # area shifts left by one once cabinet is removed from in front of it
    target = area_idx if cabinet_idx > area_idx else area_idx - 1
    reordered: Grid = []
    for row in grid:
        cabinet_value = row[cabinet_idx] if cabinet_idx < len(row) else ""
        remaining = [cell for idx, cell in enumerate(row) if idx != cabinet_idx]
        remaining.insert(target + 1, cabinet_value)
        reordered.append(remaining)
    return reordered
