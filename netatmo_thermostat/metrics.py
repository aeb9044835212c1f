"""Prometheus registry adapter for thermostat samples."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Iterator

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from .collector import ThermostatCollector
from .const import METRIC_PREFIX, THERMOSTAT_LABELS, THERMOSTAT_METRICS
from .models import MetricKind, MetricSample

_LOGGER = logging.getLogger(__name__)


def _new_families(prefix: str) -> dict[MetricKind, GaugeMetricFamily]:
    families = {}
    for kind in MetricKind:
        name, documentation = THERMOSTAT_METRICS[kind.value]
        families[kind] = GaugeMetricFamily(
            f"{prefix}{name}", documentation, labels=list(THERMOSTAT_LABELS)
        )
    return families


def build_metric_families(
    samples: Iterable[MetricSample], prefix: str = METRIC_PREFIX
) -> list[GaugeMetricFamily]:
    """Convert samples into the three thermostat gauge families."""
    families = _new_families(prefix)
    for sample in samples:
        families[sample.kind].add_metric(list(sample.labels), sample.value)
    return list(families.values())


class ThermostatMetrics(Collector):
    """Custom collector running one collection cycle per scrape."""

    def __init__(self, collector: ThermostatCollector, prefix: str = METRIC_PREFIX) -> None:
        self._collector = collector
        self._prefix = prefix
        self._descriptors = list(_new_families(prefix).values())

    def describe(self) -> Iterator[GaugeMetricFamily]:
        return iter(self._descriptors)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        # Scrapes are served from worker threads without a running loop.
        try:
            result = asyncio.run(self._collector.async_collect())
        except Exception:
            _LOGGER.exception("Thermostat collection failed")
            samples: list[MetricSample] = []
        else:
            samples = result.samples
        yield from build_metric_families(samples, self._prefix)
