"""
Column selection for the equipment matrix.

The equipment sheet is wide and sparse: one column per slot or cabinet
position. Without a search term only columns holding a positive count in the
visible rows are kept; with a search term the header labels decide.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence, Set

import pandas as pd

from src.data.grid import is_equipment

CANONICAL_COLUMNS = (0, 1, 2)  # area, cabinet, description

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def leading_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value`` like JavaScript ``parseInt``.

    ``"12 pcs"`` -> 12, ``" 3.9"`` -> 3, ``"abc"`` -> None.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _has_positive(series: pd.Series) -> bool:
    for value in series:
        parsed = leading_int(value)
        if parsed is not None and parsed > 0:
            return True
    return False


def resolve_visible_columns(
    header_row: Optional[Sequence[str]],
    body: pd.DataFrame,
    search: str,
    kind: str,
) -> Optional[Set[int]]:
    """Return the column indices worth rendering, or None for "all columns".

    Only the equipment view prunes columns, and only while it has rows to
    show. Columns 0-2 are always kept.
    """
    if not is_equipment(kind) or body is None or body.empty or not header_row:
        return None

    visible: Set[int] = set(CANONICAL_COLUMNS)
    term = search.lower()
    for col in range(len(CANONICAL_COLUMNS), len(header_row)):
        if search:
            label = header_row[col]
            if label and term in str(label).lower():
                visible.add(col)
        elif col in body.columns and _has_positive(body[col]):
            visible.add(col)
    return visible


def rendered_columns(
    width: int,
    visible: Optional[Set[int]],
    area_index: int = -1,
    area_filtered: bool = False,
) -> List[int]:
    """Ordered column indices to draw.

    Once the view is narrowed to a single area the area column carries the
    same value on every row and is dropped from rendering only; ``visible``
    itself is left intact for export.
    """
    columns = [c for c in range(width) if visible is None or c in visible]
    if area_filtered and area_index != -1:
        columns = [c for c in columns if c != area_index]
    return columns
