"""Exceptions for the Netatmo thermostat exporter."""

from __future__ import annotations


class NetatmoError(Exception):
    """Base exception for all Netatmo errors."""


class NetatmoCredentialError(NetatmoError):
    """Raised when the bearer credential cannot be retrieved."""


class NetatmoRequestError(NetatmoError):
    """Raised when a request cannot be built or sent."""


class NetatmoHTTPStatusError(NetatmoError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status: int, endpoint: str) -> None:
        super().__init__(f"{endpoint} request failed: status {status}")
        self.status = status
        self.endpoint = endpoint


class NetatmoDecodeError(NetatmoError):
    """Raised when a response body is not the expected JSON document."""
