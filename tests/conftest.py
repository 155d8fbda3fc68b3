"""
Shared fixtures for the viewer test suite.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

import pytest

from src.data.errors import ViewerError
from src.data.grid import Grid


STOCK_GRID: Grid = [
    ["Name", "Type", "Model", "Qty"],
    ["Pressure transmitter", "Sensor", "PT-100", "4"],
    ["Control valve", "Valve", "CV-22", "2"],
    ["Flow meter", "Sensor", "FM-7", "0"],
    ["Spare valve", "Valve", "CV-22", "1"],
]

EQUIPMENT_GRID: Grid = [
    ["Area", "Cabinet", "Description", "Slot 1", "Slot 2", "Spare"],
    ["", "", "", "AI", "DO", ""],
    ["", "", "", "rev A", "rev B", ""],
    ["", "", "", "", "", ""],
    ["North", "C1", "Valve rack", "0", "3", ""],
    ["North", "C2", "Pump panel", "2", "0", "0"],
    ["South", "C3", "Pump panel", "0", "0", ""],
    ["", "", "", "", "", ""],
]


@pytest.fixture
def stock_grid() -> Grid:
    return [list(row) for row in STOCK_GRID]


@pytest.fixture
def equipment_grid() -> Grid:
    return [list(row) for row in EQUIPMENT_GRID]


class FakeFetcher:
    """Stand-in for GridFetcher returning queued results per call."""

    def __init__(self, results: Optional[List[Union[Grid, Exception]]] = None) -> None:
        self.results = list(results or [])
        self.calls: List[Tuple[str, str]] = []
        self.hooks: Dict[int, object] = {}

    def fetch(self, area: str, kind: str) -> Grid:
        self.calls.append((area, kind))
        hook = self.hooks.get(len(self.calls))
        if hook is not None:
            hook()
        result = self.results.pop(0) if self.results else ViewerError("no result queued")
        if isinstance(result, Exception):
            raise result
        return result


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
