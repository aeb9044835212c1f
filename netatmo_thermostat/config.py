"""Environment configuration for the exporter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import os
from typing import Mapping

from .const import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LISTEN_PORT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT,
)
from .models import Token


@dataclass(frozen=True)
class ExporterConfig:
    """Settings read from ``NETATMO_*`` environment variables."""

    access_token: str = ""
    token_expiry: datetime | None = None
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    listen_port: int = DEFAULT_LISTEN_PORT
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExporterConfig:
        """Build the configuration, raising ValueError on malformed values."""
        env = os.environ if environ is None else environ

        expiry = None
        if raw_expiry := env.get("NETATMO_TOKEN_EXPIRY"):
            try:
                expiry = datetime.fromisoformat(raw_expiry)
            except ValueError as err:
                raise ValueError(f"Invalid NETATMO_TOKEN_EXPIRY '{raw_expiry}'") from err
            if expiry.tzinfo is None:
                expiry = expiry.replace(tzinfo=timezone.utc)

        try:
            port = int(env.get("NETATMO_LISTEN_PORT", DEFAULT_LISTEN_PORT))
            timeout = float(env.get("NETATMO_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError as err:
            raise ValueError(f"Invalid numeric setting: {err}") from err
        if not 0 < port < 65536:
            raise ValueError(f"Invalid NETATMO_LISTEN_PORT {port}")
        if timeout <= 0:
            raise ValueError(f"Invalid NETATMO_TIMEOUT {timeout}")
        log_level = env.get("NETATMO_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Invalid NETATMO_LOG_LEVEL '{log_level}'")

        return cls(
            access_token=env.get("NETATMO_ACCESS_TOKEN", ""),
            token_expiry=expiry,
            listen_address=env.get("NETATMO_LISTEN_ADDRESS", DEFAULT_LISTEN_ADDRESS),
            listen_port=port,
            timeout=timeout,
            log_level=log_level,
        )

    def token(self) -> Token | None:
        """Static credential source backed by the environment."""
        if not self.access_token:
            return None
        return Token(self.access_token, self.token_expiry)
