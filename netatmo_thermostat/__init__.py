"""Prometheus exporter for Netatmo Energy thermostats."""

from .aggregator import aggregate_home, rollup_boiler_status
from .collector import CollectionResult, CollectionState, ThermostatCollector
from .exceptions import (
    NetatmoCredentialError,
    NetatmoDecodeError,
    NetatmoError,
    NetatmoHTTPStatusError,
    NetatmoRequestError,
)
from .metrics import ThermostatMetrics, build_metric_families
from .models import (
    BoilerRollup,
    Home,
    HomeStatus,
    MetricKind,
    MetricSample,
    Module,
    Room,
    Token,
)
from .thermostat import NetatmoThermostat

__version__ = "0.1.0"

__all__ = [
    "BoilerRollup",
    "CollectionResult",
    "CollectionState",
    "Home",
    "HomeStatus",
    "MetricKind",
    "MetricSample",
    "Module",
    "NetatmoCredentialError",
    "NetatmoDecodeError",
    "NetatmoError",
    "NetatmoHTTPStatusError",
    "NetatmoRequestError",
    "NetatmoThermostat",
    "Room",
    "ThermostatCollector",
    "ThermostatMetrics",
    "Token",
    "aggregate_home",
    "build_metric_families",
    "rollup_boiler_status",
]
