"""Pytest configuration and fixtures."""

import asyncio
import json
import os
from typing import Any

import pytest


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["A2UI_BASE_URL"] = "http://testserver"
    os.environ["A2UI_LOG_LEVEL"] = "DEBUG"
    os.environ["A2UI_CLEAR_OVERLAY_ON_NAVIGATE"] = "false"

    from a2ui_client.core import configure_logging

    configure_logging("DEBUG")


from a2ui_client.core import get_settings  # noqa: E402
from a2ui_client.protocol import MessageDecoder  # noqa: E402
from a2ui_client.state import SurfaceStateStore  # noqa: E402


def ndjson(*messages: dict[str, Any]) -> str:
    """Encode wire dicts as an NDJSON payload."""
    return "".join(json.dumps(message) + "\n" for message in messages)


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def decoder():
    """Message decoder."""
    return MessageDecoder()


@pytest.fixture
def store():
    """Empty surface store."""
    return SurfaceStateStore()


# ============================================================================
# Surface Payload Fixtures
# ============================================================================

@pytest.fixture
def booking_form_payload():
    """Restaurant booking form, as served by the agent server at /form."""
    return ndjson(
        {"beginRendering": {"surfaceId": "booking-form", "root": "root"}},
        {
            "surfaceUpdate": {
                "surfaceId": "booking-form",
                "components": [
                    {"id": "root", "Column": {"children": ["header", "form-card", "status"]}},
                    {"id": "header", "Text": {"text": "Restaurant Booking"}},
                    {"id": "form-card", "Card": {"child": "form-content"}},
                    {
                        "id": "form-content",
                        "Column": {
                            "children": [
                                "name-field",
                                "date-field",
                                "time-field",
                                "party-field",
                                "submit-btn",
                            ]
                        },
                    },
                    {
                        "id": "name-field",
                        "TextField": {
                            "label": "Name",
                            "placeholder": "Your name",
                            "dataBinding": {"path": "/form/name"},
                        },
                    },
                    {
                        "id": "date-field",
                        "TextField": {
                            "label": "Date",
                            "placeholder": "YYYY-MM-DD",
                            "dataBinding": {"path": "/form/date"},
                        },
                    },
                    {
                        "id": "time-field",
                        "TextField": {
                            "label": "Time",
                            "placeholder": "HH:MM",
                            "dataBinding": {"path": "/form/time"},
                        },
                    },
                    {
                        "id": "party-field",
                        "TextField": {
                            "label": "Party Size",
                            "placeholder": "Number of guests",
                            "dataBinding": {"path": "/form/party"},
                        },
                    },
                    {
                        "id": "submit-btn",
                        "Button": {
                            "text": "Book Table",
                            "action": {"type": "submit", "data": {"endpoint": "/submit"}},
                        },
                    },
                    {"id": "status", "Text": {"text": ""}},
                ],
            }
        },
        {
            "dataModelUpdate": {
                "surfaceId": "booking-form",
                "contents": {
                    "/form/name": "",
                    "/form/date": "2026-10-20",
                    "/form/time": "19:00",
                    "/form/party": "2",
                },
            }
        },
    )


@pytest.fixture
def confirmation_payload():
    """Booking confirmation surface returned by POST /submit."""
    return ndjson(
        {"beginRendering": {"surfaceId": "confirmation", "root": "root"}},
        {
            "surfaceUpdate": {
                "surfaceId": "confirmation",
                "components": [
                    {"id": "root", "Column": {"children": ["success-card"]}},
                    {"id": "success-card", "Card": {"child": "confirm-content"}},
                    {
                        "id": "confirm-content",
                        "Column": {"children": ["title", "booking-id", "details", "back-btn"]},
                    },
                    {"id": "title", "Text": {"text": "Booking Confirmed!"}},
                    {"id": "booking-id", "Text": {"dataBinding": {"path": "/booking/id"}}},
                    {"id": "details", "Text": {"dataBinding": {"path": "/booking/details"}}},
                    {
                        "id": "back-btn",
                        "Button": {
                            "text": "New Booking",
                            "action": {"type": "navigate", "data": {"url": "/form"}},
                        },
                    },
                ],
            }
        },
        {
            "dataModelUpdate": {
                "surfaceId": "confirmation",
                "contents": {
                    "/booking/id": "Confirmation: BK-1",
                    "/booking/details": "Ann - 2026-10-20 at 19:00 for 4 guests",
                },
            }
        },
    )


@pytest.fixture
def loaded_store(store, decoder, booking_form_payload):
    """Store with the booking form applied."""
    store.apply(decoder.decode(booking_form_payload))
    return store


# ============================================================================
# Transport Fixtures
# ============================================================================

class FakeTransport:
    """In-memory transport. Responses are queued per URL; gates hold a response back."""

    def __init__(self) -> None:
        self.responses: dict[str, list[Any]] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, str, Any]] = []

    def respond(self, url: str, payload: Any) -> None:
        self.responses.setdefault(url, []).append(payload)

    def hold(self, url: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[url] = gate
        return gate

    async def _serve(self, url: str) -> str:
        gate = self.gates.pop(url, None)
        if gate is not None:
            await gate.wait()
        payload = self.responses[url].pop(0)
        if isinstance(payload, Exception):
            raise payload
        return payload

    async def get(self, url: str) -> str:
        self.calls.append(("GET", url, None))
        return await self._serve(url)

    async def post(self, url: str, body: dict[str, Any]) -> str:
        self.calls.append(("POST", url, body))
        return await self._serve(url)


@pytest.fixture
def transport():
    """Fake transport for dispatcher tests."""
    return FakeTransport()
