"""
Bootstrap the viewer settings for Streamlit Cloud & local dev.

Settings (SHEET_API_URL, POLL_INTERVAL_SECONDS, REQUEST_TIMEOUT_SECONDS,
LOG_LEVEL) are read from os.environ by ``src.config``. This module fills
the environment from two places, never overriding a variable that is
already set:

- st.secrets, flattened to uppercase keys, so a nested table such as
  ``[sheet] api_url = "..."`` becomes SHEET_API_URL
- a local .env file
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, Iterator, Tuple

import streamlit as st
from dotenv import load_dotenv


def _sanitize_key(key: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    """Yield (ENV_NAME, value) pairs for a secrets entry, joining nested keys with ``_``."""
    if isinstance(val, dict):
        for k, v in val.items():
            yield from flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _read_secrets() -> Dict[str, Any]:
    try:
        items = getattr(st, "secrets", None)
        if not items:
            return {}
        try:
            return items.to_dict()  # type: ignore[attr-defined]
        except AttributeError:
            return dict(items)
    except Exception:
        # st.secrets raises when no secrets.toml exists
        return {}


def bridge_secrets(secrets: Dict[str, Any]) -> None:
    for key, value in secrets.items():
        for env_key, env_value in flatten_secrets(key, value):
            os.environ.setdefault(env_key, env_value)


def ensure_env() -> None:
    """Idempotent; safe to call inside and outside the Streamlit runtime."""
    bridge_secrets(_read_secrets())
    # load_dotenv does not override existing env vars by default
    load_dotenv()


ensure_env()
