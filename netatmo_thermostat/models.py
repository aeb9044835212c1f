"""Data models for the Netatmo thermostat exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping

from .const import TOKEN_EXPIRY_DELTA
from .exceptions import NetatmoDecodeError


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return a nested object, treating a missing or null key as empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise NetatmoDecodeError(f"Expected object for '{key}', got {type(value).__name__}")
    return value


def _items(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise NetatmoDecodeError(f"Expected list for '{key}', got {type(value).__name__}")
    for item in value:
        if not isinstance(item, Mapping):
            raise NetatmoDecodeError(f"Expected objects in '{key}'")
    return value


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise NetatmoDecodeError(f"Expected string for '{key}', got {type(value).__name__}")
    return value


def _required_string(data: Mapping[str, Any], key: str) -> str:
    value = _string(data, key)
    if not value:
        raise NetatmoDecodeError(f"Missing required '{key}'")
    return value


def _number(data: Mapping[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NetatmoDecodeError(f"Expected number for '{key}', got {type(value).__name__}")
    return float(value)


def _flag(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise NetatmoDecodeError(f"Expected boolean for '{key}', got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Token:
    """Bearer credential handed out by the credential source."""

    access_token: str
    expiry: datetime | None = None  # None means the token never expires

    @property
    def valid(self) -> bool:
        """Check whether the token is usable right now."""
        if not self.access_token:
            return False
        if self.expiry is None:
            return True
        now = datetime.now(timezone.utc)
        return self.expiry - timedelta(seconds=TOKEN_EXPIRY_DELTA) > now


@dataclass(frozen=True)
class Home:
    """Home as listed by the homesdata endpoint."""

    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Home:
        return cls(id=_required_string(data, "id"), name=_string(data, "name"))


@dataclass(frozen=True)
class Room:
    """Room reported by the homestatus endpoint.

    Temperatures are ``None`` when the room did not report them this cycle.
    """

    id: str
    name: str = ""
    measured_temperature: float | None = None
    setpoint_temperature: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Room:
        return cls(
            id=_required_string(data, "id"),
            name=_string(data, "name"),
            measured_temperature=_number(data, "therm_measured_temperature"),
            setpoint_temperature=_number(data, "therm_setpoint_temperature"),
        )


@dataclass(frozen=True)
class Module:
    """Physical device reported by the homestatus endpoint.

    An empty ``room_id`` means the module is not tied to a room and a ``None``
    ``boiler_status`` means it does not report the boiler relay.
    """

    id: str
    type: str = ""
    room_id: str = ""
    boiler_status: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Module:
        return cls(
            id=_string(data, "id"),
            type=_string(data, "type"),
            room_id=_string(data, "room_id"),
            boiler_status=_flag(data, "boiler_status"),
        )


@dataclass(frozen=True)
class HomeStatus:
    """Detailed status of one home."""

    id: str = ""
    name: str = ""
    rooms: tuple[Room, ...] = ()
    modules: tuple[Module, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HomeStatus:
        return cls(
            id=_string(data, "id"),
            name=_string(data, "name"),
            rooms=tuple(Room.from_dict(room) for room in _items(data, "rooms")),
            modules=tuple(Module.from_dict(module) for module in _items(data, "modules")),
        )


def parse_homes_data(payload: Any) -> list[Home]:
    """Parse a homesdata response into the list of homes."""
    if not isinstance(payload, Mapping):
        raise NetatmoDecodeError("homesdata response is not a JSON object")
    body = _section(payload, "body")
    return [Home.from_dict(home) for home in _items(body, "homes")]


def parse_home_status(payload: Any) -> HomeStatus:
    """Parse a homestatus response into the detailed home status."""
    if not isinstance(payload, Mapping):
        raise NetatmoDecodeError("homestatus response is not a JSON object")
    body = _section(payload, "body")
    return HomeStatus.from_dict(_section(body, "home"))


def merge_home(summary: Home, detailed: HomeStatus) -> Home:
    """Merge home identity, preferring non-empty detailed fields."""
    return Home(
        id=detailed.id or summary.id,
        name=detailed.name or summary.name,
    )


class MetricKind(str, Enum):
    """Kinds of thermostat samples."""

    TEMPERATURE = "temperature"
    SETPOINT = "setpoint"
    BOILER_STATUS = "boiler_status"


@dataclass(frozen=True)
class BoilerRollup:
    """Boiler state per room plus the home level maximum."""

    by_room: Mapping[str, float] = field(default_factory=dict)
    home: float | None = None


@dataclass(frozen=True)
class MetricSample:
    """One gauge sample with its (home_id, home_name, room_id, room_name) labels."""

    kind: MetricKind
    value: float
    labels: tuple[str, str, str, str]
