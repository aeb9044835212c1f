from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from netatmo_thermostat.exceptions import NetatmoDecodeError
from netatmo_thermostat.models import (
    Home,
    HomeStatus,
    Module,
    Room,
    Token,
    merge_home,
    parse_home_status,
    parse_homes_data,
)

from conftest import homes_payload, status_payload


def test_token_validity() -> None:
    now = datetime.now(timezone.utc)

    assert Token("abc").valid
    assert Token("abc", now + timedelta(hours=1)).valid
    assert not Token("", now + timedelta(hours=1)).valid
    assert not Token("abc", now - timedelta(minutes=1)).valid
    # Expiring within the safety delta counts as expired
    assert not Token("abc", now + timedelta(seconds=5)).valid


def test_parse_homes_data() -> None:
    homes = parse_homes_data(homes_payload(("H1", "Casa"), ("H2", "")))

    assert homes == [Home("H1", "Casa"), Home("H2", "")]


def test_parse_homes_data_without_body() -> None:
    assert parse_homes_data({}) == []
    assert parse_homes_data({"body": {"homes": None}}) == []


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "text",
        {"body": []},
        {"body": {"homes": {"id": "H1"}}},
        {"body": {"homes": ["H1"]}},
        {"body": {"homes": [{"id": 12}]}},
    ],
)
def test_parse_homes_data_rejects_bad_shapes(payload) -> None:
    with pytest.raises(NetatmoDecodeError):
        parse_homes_data(payload)


def test_parse_home_status_optional_fields() -> None:
    status = parse_home_status(
        status_payload(
            "H1",
            "Casa",
            rooms=[
                {"id": "R1", "name": "Living", "therm_measured_temperature": 19},
                {"id": "R2"},
            ],
            modules=[
                {"id": "M1", "type": "NATherm1", "room_id": "R1", "boiler_status": True},
                {"id": "M2", "type": "NAPlug"},
            ],
        )
    )

    assert status == HomeStatus(
        id="H1",
        name="Casa",
        rooms=(
            Room("R1", "Living", measured_temperature=19.0),
            Room("R2"),
        ),
        modules=(
            Module("M1", "NATherm1", "R1", True),
            Module("M2", "NAPlug", "", None),
        ),
    )
    assert isinstance(status.rooms[0].measured_temperature, float)


def test_parse_home_status_missing_home() -> None:
    assert parse_home_status({"body": {}}) == HomeStatus()


@pytest.mark.parametrize(
    "home",
    [
        {"rooms": [{"id": "R1", "therm_measured_temperature": "19.5"}]},
        {"rooms": [{"id": "R1", "therm_setpoint_temperature": True}]},
        {"modules": [{"id": "M1", "boiler_status": 1}]},
        {"modules": "M1"},
    ],
)
def test_parse_home_status_rejects_bad_values(home) -> None:
    with pytest.raises(NetatmoDecodeError):
        parse_home_status({"body": {"home": home}})


def test_merge_home_prefers_detailed_values() -> None:
    summary = Home("H1", "Summary")

    assert merge_home(summary, HomeStatus()) == Home("H1", "Summary")
    assert merge_home(summary, HomeStatus(id="H1-detail", name="Detail")) == Home(
        "H1-detail", "Detail"
    )
    assert merge_home(summary, HomeStatus(name="Detail")) == Home("H1", "Detail")


@pytest.mark.parametrize("home", [{"name": "Casa"}, {"id": None}, {"id": "", "name": "Casa"}])
def test_parse_homes_data_requires_home_id(home) -> None:
    with pytest.raises(NetatmoDecodeError, match="Missing required 'id'"):
        parse_homes_data({"body": {"homes": [{"id": "H1"}, home]}})


@pytest.mark.parametrize("room", [{"name": "Living"}, {"id": "", "therm_measured_temperature": 19}])
def test_parse_home_status_requires_room_id(room) -> None:
    with pytest.raises(NetatmoDecodeError, match="Missing required 'id'"):
        parse_home_status(status_payload("H1", rooms=[room]))


def test_parse_home_status_tolerates_missing_home_and_module_ids() -> None:
    status = parse_home_status(
        status_payload(rooms=[{"id": "R1"}], modules=[{"room_id": "R1", "boiler_status": True}])
    )

    assert (status.id, status.name) == ("", "")
    assert status.modules == (Module("", room_id="R1", boiler_status=True),)
