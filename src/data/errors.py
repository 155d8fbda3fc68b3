"""
Exceptions raised while retrieving sheet data from the remote endpoint.
"""

from __future__ import annotations

from typing import Optional


class ViewerError(Exception):
    """Root of the viewer exception hierarchy."""


class TransportError(ViewerError):
    """Network failure or non-2xx HTTP response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FormatError(ViewerError):
    """Response body does not match the `{success, data, error}` contract."""
