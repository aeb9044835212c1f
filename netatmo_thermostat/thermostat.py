"""Netatmo Energy API client for thermostat homes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .const import API_BASE, ENDPOINT_HOMESDATA, ENDPOINT_HOMESTATUS
from .exceptions import (
    NetatmoDecodeError,
    NetatmoHTTPStatusError,
    NetatmoRequestError,
)
from .models import Home, HomeStatus, parse_home_status, parse_homes_data

_LOGGER = logging.getLogger(__name__)


class NetatmoThermostat:
    """Read-only client for the Netatmo homes API."""

    def __init__(
        self,
        access_token: str,
        websession: aiohttp.ClientSession | None = None,
        *,
        base_url: str = API_BASE,
        deadline: float | None = None,
    ) -> None:
        """Initialize the Netatmo client.

        Args:
            access_token: Bearer token sent with every request
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            base_url: API root, overridable for testing
            deadline: Optional event loop time after which requests fail
        """
        self.base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._websession = websession
        self._own_session = websession is None
        self._deadline = deadline

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def __aenter__(self) -> NetatmoThermostat:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close_connection()

    def _timeout(self) -> aiohttp.ClientTimeout | None:
        """Return the timeout left until the deadline, if one is set."""
        if self._deadline is None:
            return None
        remaining = self._deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise NetatmoRequestError("Deadline exceeded before request was sent")
        return aiohttp.ClientTimeout(total=remaining)

    async def _get(self, endpoint: str, params: dict[str, str] | None = None) -> Any:
        """Issue an authenticated GET and return the decoded JSON body."""
        await self._ensure_session()
        assert self._websession is not None
        url = f"{self.base_url}{endpoint}"
        headers = {"Authorization": f"Bearer {self._access_token}"}
        kwargs: dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = params
        timeout = self._timeout()
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            async with self._websession.get(url, **kwargs) as response:
                if not 200 <= response.status < 300:
                    raise NetatmoHTTPStatusError(response.status, endpoint)
                return await response.json(content_type=None)
        except NetatmoHTTPStatusError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise NetatmoRequestError(f"Failed to execute {endpoint} request: {err}") from err
        except ValueError as err:
            raise NetatmoDecodeError(f"Failed to decode {endpoint} response: {err}") from err

    async def async_list_homes(self) -> list[Home]:
        """Fetch the homes visible to the token."""
        payload = await self._get(ENDPOINT_HOMESDATA)
        _LOGGER.debug("Homes data: %s", payload)
        return parse_homes_data(payload)

    async def async_fetch_home_status(self, home_id: str) -> HomeStatus:
        """Fetch rooms and modules status for one home."""
        payload = await self._get(ENDPOINT_HOMESTATUS, params={"home_id": home_id})
        _LOGGER.debug("Home status for %s: %s", home_id, payload)
        return parse_home_status(payload)
