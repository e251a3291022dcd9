"""Exceptions raised by the chart client."""
from __future__ import annotations

from typing import Optional


class ChartError(Exception):
    """Base class for every failure surfaced by melon_chart."""


class InvalidDate(ChartError, ValueError):
    """Raised when a reference date cannot be parsed into a calendar date."""


class InvalidConfig(ChartError, ValueError):
    """Raised for a malformed base URL or missing key/selector configuration."""


class TransportError(ChartError):
    """Raised when fetching a chart page fails.

    The underlying ``requests`` exception is kept as ``__cause__``.
    """

    def __init__(self, message: str, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class UnparseableResponse(ChartError):
    """Raised when page content is not HTML markup."""
