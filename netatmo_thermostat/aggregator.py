"""Turn a home status into thermostat metric samples."""

from __future__ import annotations

from functools import reduce
from types import MappingProxyType
from typing import Iterable

from .models import (
    BoilerRollup,
    Home,
    HomeStatus,
    MetricKind,
    MetricSample,
    Module,
    merge_home,
)


def _fold_module(rollup: BoilerRollup, module: Module) -> BoilerRollup:
    if module.boiler_status is None:
        return rollup

    value = 1.0 if module.boiler_status else 0.0
    by_room = rollup.by_room
    if module.room_id:
        by_room = {**by_room, module.room_id: value}

    home = rollup.home
    if home is None or value > home:
        home = value
    return BoilerRollup(by_room=by_room, home=home)


def rollup_boiler_status(modules: Iterable[Module]) -> BoilerRollup:
    """Derive room and home level boiler values from module reports.

    Modules tied to a room set that room's value, the last one winning when
    several target the same room. Every reporting module, with or without a
    room, feeds the home level value, which is the maximum seen so far. The
    home level value stays ``None`` until some module reports.
    """
    rollup = reduce(_fold_module, modules, BoilerRollup())
    return BoilerRollup(by_room=MappingProxyType(dict(rollup.by_room)), home=rollup.home)


def aggregate_home(summary: Home, status: HomeStatus) -> list[MetricSample]:
    """Build the samples for one home."""
    home = merge_home(summary, status)
    boiler = rollup_boiler_status(status.modules)
    samples: list[MetricSample] = []

    for room in status.rooms:
        labels = (home.id, home.name, room.id, room.name)
        if room.measured_temperature is not None:
            samples.append(
                MetricSample(MetricKind.TEMPERATURE, room.measured_temperature, labels)
            )
        if room.setpoint_temperature is not None:
            samples.append(
                MetricSample(MetricKind.SETPOINT, room.setpoint_temperature, labels)
            )
        if room.id in boiler.by_room:
            samples.append(
                MetricSample(MetricKind.BOILER_STATUS, boiler.by_room[room.id], labels)
            )

    if boiler.home is not None:
        samples.append(
            MetricSample(MetricKind.BOILER_STATUS, boiler.home, (home.id, home.name, "", ""))
        )
    return samples
