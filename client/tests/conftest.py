import asyncio

import httpx
import pytest

from waypoint.sandbox.auth import create_access_token
from waypoint.sandbox.main import create_app
from waypoint.sandbox.state import seed_state
from waypoint.schemas.checkin import Seat
from waypoint.services.api_client import BookingAPIClient
from waypoint.services.credentials import CredentialAccessor, MemoryCredentialStore
from waypoint.services.notifier import Notifier

DEMO_EMAIL = "demo@waypoint.dev"


def banner_payload(**overrides) -> dict:
    payload = {
        "component_type": "banner",
        "title": "Prices are climbing",
        "body": "Fares on this route rose 8% this week.",
        "cta_list": [{"label": "See cheapest", "action": "show_cheapest"}],
        "priority": "medium",
    }
    payload.update(overrides)
    return payload


def make_seat(seat_id: str, booked: bool = False, pnr: str | None = None) -> Seat:
    row, letter = int(seat_id[:-1]), seat_id[-1]
    kind = {"A": "window", "F": "window", "C": "aisle", "D": "aisle"}.get(letter, "middle")
    return Seat(seat_id=seat_id, row=row, letter=letter, seat_type=kind, booked=booked, booking_pnr=pnr)


class FakeWidgetAPI:
    """Widget endpoint double whose responses are released per page by the test."""

    def __init__(self, widgets: dict | None = None):
        self.widgets = widgets or {}
        self.gates: dict[str, asyncio.Event] = {}
        self.widget_calls: list[str] = []
        self.tracked: list[str] = []
        self.fail_tracking = False
        self.fail_widget: Exception | None = None

    def gate(self, page: str) -> asyncio.Event:
        return self.gates.setdefault(page, asyncio.Event())

    async def track_page_visit(self, page, token):
        if self.fail_tracking:
            raise httpx.ConnectError("tracking down")
        self.tracked.append(page)
        return "ok"

    async def get_widget(self, page, token):
        self.widget_calls.append(page)
        if page in self.gates:
            await self.gates[page].wait()
        if self.fail_widget is not None:
            raise self.fail_widget
        return self.widgets.get(page, "No AI widget for this page")


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def credentials():
    return CredentialAccessor(MemoryCredentialStore({"auth_token": "test-token"}))


@pytest.fixture
def anonymous():
    return CredentialAccessor(MemoryCredentialStore())


@pytest.fixture
def sandbox_state():
    return seed_state()


@pytest.fixture
def sandbox_app(sandbox_state):
    return create_app(sandbox_state)


@pytest.fixture
def sandbox_credentials():
    token = create_access_token(DEMO_EMAIL)
    return CredentialAccessor(MemoryCredentialStore({"auth_token": token}))


@pytest.fixture
async def sandbox_api(sandbox_app):
    api = BookingAPIClient(base_url="http://sandbox", transport=httpx.ASGITransport(app=sandbox_app))
    yield api
    await api.close()
