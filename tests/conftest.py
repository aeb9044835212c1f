from __future__ import annotations

import json
from typing import Any

from aiohttp import web
from aiohttp.test_utils import TestServer
import pytest

from netatmo_thermostat.const import API_BASE, ENDPOINT_HOMESDATA, ENDPOINT_HOMESTATUS


class MockResponse:
    def __init__(
        self, status: int, json_data: Any = None, *, body: str | bytes | None = None
    ) -> None:
        self.status = status
        if body is None:
            body = json.dumps(json_data)
        self._body = body.encode() if isinstance(body, str) else body

    async def __aenter__(self) -> MockResponse:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def json(self, content_type: str | None = "application/json") -> Any:
        stripped = self._body.strip()
        if not stripped:
            return None
        return json.loads(stripped.decode("utf-8"))


class FakeSession:
    """Route GET requests by endpoint and ``home_id`` query parameter."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str | None], Any] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def add(self, endpoint: str, response: Any, home_id: str | None = None) -> None:
        self.routes[(endpoint, home_id)] = response

    def get(self, url: str, **kwargs: Any) -> Any:
        self.calls.append((url, kwargs))
        endpoint = url[len(API_BASE):]
        home_id = (kwargs.get("params") or {}).get("home_id")
        try:
            result = self.routes[(endpoint, home_id)]
        except KeyError:
            raise AssertionError(f"Unexpected GET {url} {home_id}") from None
        if callable(result):
            result = result()
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True

    def endpoints(self) -> list[str]:
        return [url[len(API_BASE):] for url, _ in self.calls]


def homes_payload(*homes: tuple[str, str]) -> dict[str, Any]:
    return {"body": {"homes": [{"id": home_id, "name": name} for home_id, name in homes]}}


def status_payload(
    home_id: str = "",
    name: str = "",
    rooms: list[dict[str, Any]] | None = None,
    modules: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "body": {
            "home": {
                "id": home_id,
                "name": name,
                "rooms": rooms or [],
                "modules": modules or [],
            }
        }
    }


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def casa_session(session: FakeSession) -> FakeSession:
    """Single home with one room, a room module and a room-less module."""
    session.add(ENDPOINT_HOMESDATA, lambda: MockResponse(200, homes_payload(("H1", "Casa"))))
    session.add(
        ENDPOINT_HOMESTATUS,
        lambda: MockResponse(
            200,
            status_payload(
                rooms=[
                    {
                        "id": "R1",
                        "name": "",
                        "therm_measured_temperature": 17.9,
                        "therm_setpoint_temperature": 20.0,
                    }
                ],
                modules=[
                    {"id": "M1", "type": "NATherm1", "room_id": "R1", "boiler_status": False},
                    {"id": "M2", "type": "NAPlug", "room_id": "", "boiler_status": True},
                ],
            ),
        ),
        home_id="H1",
    )
    return session


async def start_server(routes: web.RouteTableDef) -> TestServer:
    """Serve ``routes`` on a local port; the caller closes the server."""
    app = web.Application()
    app.add_routes(routes)
    server = TestServer(app)
    await server.start_server()
    return server


def server_url(server: TestServer) -> str:
    return str(server.make_url("")).rstrip("/")
