"""Collection cycle: credential, homes, per-home status, samples."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
import inspect
import logging
from typing import Awaitable, Callable, Union

import aiohttp

from .aggregator import aggregate_home
from .exceptions import NetatmoCredentialError, NetatmoError
from .models import Home, MetricSample, Token
from .thermostat import NetatmoThermostat

_LOGGER = logging.getLogger(__name__)

TokenFunc = Callable[[], Union[Token, None, Awaitable[Union[Token, None]]]]


class CollectionState(str, Enum):
    """Terminal state of one collection cycle."""

    DONE = "done"
    SKIPPED = "skipped"
    ABORTED = "aborted"


@dataclass
class CollectionResult:
    """Outcome of one collection cycle."""

    state: CollectionState
    samples: list[MetricSample] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)


class ThermostatCollector:
    """Collect thermostat samples for every home visible to the credential.

    The collector keeps no state between cycles, so ``async_collect`` may run
    concurrently from several scrapes. Each cycle builds its own client bound
    to the token retrieved at its start.
    """

    def __init__(
        self,
        token_func: TokenFunc,
        websession: aiohttp.ClientSession | None = None,
        *,
        timeout: float | None = None,
        base_url: str | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            token_func: Returns the current Token or None, raises when retrieval fails
            websession: Optional shared aiohttp ClientSession
            timeout: Optional deadline in seconds for a whole cycle
            base_url: Optional API root override
        """
        self._token_func = token_func
        self._websession = websession
        self._timeout = timeout
        self._base_url = base_url

    async def _get_token(self) -> Token | None:
        try:
            token = self._token_func()
            if inspect.isawaitable(token):
                token = await token
        except NetatmoCredentialError:
            raise
        except Exception as err:
            raise NetatmoCredentialError(f"Failed to retrieve token: {err}") from err
        return token

    def _client(self, token: Token) -> NetatmoThermostat:
        kwargs = {}
        if self._base_url is not None:
            kwargs["base_url"] = self._base_url
        if self._timeout is not None:
            kwargs["deadline"] = asyncio.get_running_loop().time() + self._timeout
        return NetatmoThermostat(token.access_token, self._websession, **kwargs)

    async def async_collect(self) -> CollectionResult:
        """Run one collection cycle."""
        try:
            token = await self._get_token()
        except NetatmoCredentialError as err:
            _LOGGER.error("Error getting token: %s", err)
            return CollectionResult(CollectionState.ABORTED, errors=[err])

        if token is None or not token.valid:
            _LOGGER.debug("Token not available or invalid, skipping collection")
            return CollectionResult(CollectionState.SKIPPED)

        async with self._client(token) as client:
            try:
                homes = await client.async_list_homes()
            except NetatmoError as err:
                _LOGGER.error("Error fetching homesdata: %s", err)
                return CollectionResult(CollectionState.ABORTED, errors=[err])

            results = await asyncio.gather(
                *(self._collect_home(client, home) for home in homes),
                return_exceptions=True,
            )

        collection = CollectionResult(CollectionState.DONE)
        for home, result in zip(homes, results):
            if isinstance(result, NetatmoError):
                _LOGGER.error("Error fetching homestatus for %s: %s", home.id, result)
                collection.errors.append(result)
            elif isinstance(result, Exception):
                _LOGGER.error(
                    "Unexpected error collecting home %s", home.id, exc_info=result
                )
                collection.errors.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                collection.samples.extend(result)
        _LOGGER.debug(
            "Collected %s samples from %s homes", len(collection.samples), len(homes)
        )
        return collection

    async def _collect_home(
        self, client: NetatmoThermostat, home: Home
    ) -> list[MetricSample]:
        status = await client.async_fetch_home_status(home.id)
        return aggregate_home(home, status)
