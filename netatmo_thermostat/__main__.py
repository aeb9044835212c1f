"""Serve Netatmo thermostat metrics over HTTP."""

from __future__ import annotations

import logging
import sys
import threading

from prometheus_client import REGISTRY, start_http_server

from .collector import ThermostatCollector
from .config import ExporterConfig
from .metrics import ThermostatMetrics

_LOGGER = logging.getLogger(__name__)


def main() -> None:
    try:
        config = ExporterConfig.from_env()
    except ValueError as err:
        logging.basicConfig(level=logging.INFO)
        _LOGGER.error("Invalid configuration: %s", err)
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not config.access_token:
        _LOGGER.warning("NETATMO_ACCESS_TOKEN is not set, scrapes will be empty")

    collector = ThermostatCollector(config.token, timeout=config.timeout)
    REGISTRY.register(ThermostatMetrics(collector))

    start_http_server(config.listen_port, addr=config.listen_address)
    _LOGGER.info("Listening on %s:%s", config.listen_address, config.listen_port)
    threading.Event().wait()


if __name__ == "__main__":
    main()
