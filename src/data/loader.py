"""
Retrieve raw sheet grids from the Apps Script web endpoint.

The endpoint answers ``GET ?action=getData&area=<area>&type=<kind>`` with
``{"success": bool, "data": [[...], ...], "error": str}``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from src.data.errors import FormatError, TransportError, ViewerError
from src.data.grid import Grid, normalize_grid

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
INVALID_FORMAT_MESSAGE = "Invalid data format received."


def _is_grid(data: Any) -> bool:
    return isinstance(data, list) and all(isinstance(row, list) for row in data)


def parse_response(payload: Any) -> Grid:
    """Validate a decoded response body and return its grid.

    Raises FormatError when ``success`` is not true or ``data`` is not a
    list of rows; the server-side ``error`` message is used when present.
    """
    if not isinstance(payload, dict):
        raise FormatError(INVALID_FORMAT_MESSAGE)
    data = payload.get("data")
    if payload.get("success") is not True or not _is_grid(data):
        raise FormatError(str(payload.get("error") or INVALID_FORMAT_MESSAGE))
    return normalize_grid(data)


class GridFetcher:
    """Thin HTTP client for the ``getData`` action."""

    def __init__(
        self,
        base_url: Optional[str],
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_url:
            raise ViewerError("SHEET_API_URL is not configured (env or secrets).")
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, area: str, kind: str) -> Grid:
        params = {"action": "getData", "area": area, "type": kind}
        try:
            # Anonymous access: no cookies or auth headers are attached
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request failed: {exc}") from exc

        if not response.ok:
            raise TransportError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise FormatError(INVALID_FORMAT_MESSAGE) from exc

        grid = parse_response(payload)
        logger.debug("Fetched %d rows for area=%s type=%s", len(grid), area, kind)
        return grid
