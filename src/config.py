"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Optional

import streamlit as st

from src.data.loader import DEFAULT_TIMEOUT
from src.data.polling import DEFAULT_POLL_INTERVAL


@dataclass(frozen=True)
class AreaConfig:
    key: str
    label: str


@dataclass(frozen=True)
class ViewConfig:
    kind: str
    label: str
    title: str


AREAS: List[AreaConfig] = [
    AreaConfig("Pulp 2", "Pulp 2"),
    AreaConfig("NPP11", "NPP11"),
    AreaConfig("E/WTP", "ETP and WTP"),
]

STOCK_VIEW = ViewConfig("stock", "Stock & Status", "Stock & Status")
STOCK_ABB_VIEW = ViewConfig("stock_abb", "Stock & Status (ABB)", "Stock & Status (ABB)")
STOCK_SUPCON_VIEW = ViewConfig("stock_supcon", "Stock & Status (SUPCON)", "Stock & Status (SUPCON)")
EQUIPMENT_VIEW = ViewConfig("equipment", "Current Equipment", "Current Equipment")

# E/WTP keeps two vendor stock sheets; other areas have a single one
AREA_VIEWS: Dict[str, List[ViewConfig]] = {
    "Pulp 2": [STOCK_VIEW, EQUIPMENT_VIEW],
    "NPP11": [STOCK_VIEW, EQUIPMENT_VIEW],
    "E/WTP": [STOCK_ABB_VIEW, STOCK_SUPCON_VIEW, EQUIPMENT_VIEW],
}


def area_label(area: str) -> str:
    return next((a.label for a in AREAS if a.key == area), area)


def views_for_area(area: str) -> List[ViewConfig]:
    return AREA_VIEWS.get(area, [STOCK_VIEW, EQUIPMENT_VIEW])


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


def _float_setting(name: str, default: float) -> float:
    raw = get_setting(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    api_url: Optional[str]
    poll_interval: float
    request_timeout: float
    log_level: str


def load_settings() -> Settings:
    return Settings(
        api_url=get_setting("SHEET_API_URL"),
        poll_interval=_float_setting("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL),
        request_timeout=_float_setting("REQUEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT),
        log_level=(get_setting("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
