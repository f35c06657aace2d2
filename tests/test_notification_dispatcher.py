"""Tests for notification click routing and close reporting."""

import pytest

from bdc.service_worker.clients import ClientRegistry, WindowClient
from bdc.service_worker.dispatcher import NotificationDispatcher, resolve_url
from bdc.service_worker.registration import DisplayedNotification, NotificationOptions
from tests.conftest import SW_ORIGIN


class RecordingRegistry(ClientRegistry):
    """Registry that records navigation requests."""

    def __init__(self):
        super().__init__()
        self.opened: list[str] = []

    async def open_window(self, url):
        self.opened.append(url)
        return await super().open_window(url)


@pytest.fixture
def clients():
    return RecordingRegistry()


@pytest.fixture
def window(clients):
    client = clients.register(WindowClient(f"{SW_ORIGIN}/dashboard"))
    client.controlled = True
    return client


@pytest.fixture
def dispatcher(sw_config, clients):
    return NotificationDispatcher(sw_config, clients)


def _notification(**data):
    return DisplayedNotification(
        title="Test",
        options=NotificationOptions(
            body="body", icon="/favicon.ico", badge="/badge.png", tag="default", data=data
        ),
    )


# ── URL resolution ────────────────────────────────────────────────


class TestResolveUrl:
    @pytest.mark.parametrize(
        ("data", "action", "expected"),
        [
            ({"leadId": "L1"}, "view_lead", "/leads/L1"),
            ({"appointmentId": "A1"}, "view_appointment", "/appointments/A1"),
            ({"vehicleId": "V1"}, "view_vehicle", "/vehicles/V1"),
            ({"communicationId": "C1"}, "view_communication", "/communications/C1"),
            ({"link": "/reports/7"}, "view_details", "/reports/7"),
            ({}, "view_details", "/notifications"),
            ({"link": "/leads/L9"}, "something_else", "/leads/L9"),
            ({}, "something_else", "/"),
            ({"link": "/inbox"}, "", "/inbox"),
            ({}, "", "/"),
            (None, None, "/"),
        ],
    )
    def test_routes(self, data, action, expected):
        assert resolve_url(data, action) == expected

    def test_explicit_url_wins_over_action(self):
        assert resolve_url({"url": "/custom", "leadId": "L1"}, "view_lead") == "/custom"

    def test_explicit_url_wins_over_link(self):
        assert resolve_url({"url": "/custom", "link": "/inbox"}, "") == "/custom"

    def test_missing_entity_id_falls_back_to_list(self):
        assert resolve_url({}, "view_lead") == "/leads"

    def test_dismiss_has_no_destination(self):
        assert resolve_url({"url": "/custom"}, "dismiss") is None


# ── Click ─────────────────────────────────────────────────────────


class TestClick:
    @pytest.mark.asyncio
    async def test_view_appointment_opens_window(self, dispatcher, clients, window):
        notification = _notification(id="n1", appointmentId="A1")

        url = await dispatcher.click(notification, "view_appointment")

        assert url == "/appointments/A1"
        assert notification.closed is True
        assert clients.opened == [f"{SW_ORIGIN}/appointments/A1"]
        assert window.messages == [
            {
                "type": "NOTIFICATION_CLICKED",
                "notification": {"id": "n1", "action": "view_appointment"},
            }
        ]

    @pytest.mark.asyncio
    async def test_existing_window_is_focused(self, dispatcher, clients):
        existing = clients.register(WindowClient(f"{SW_ORIGIN}/leads/L1"))
        existing.controlled = True

        await dispatcher.click(_notification(leadId="L1"), "view_lead")

        assert existing.focused is True
        assert clients.opened == []

    @pytest.mark.asyncio
    async def test_body_click_reports_default_action(self, dispatcher, window):
        await dispatcher.click(_notification(id="n2", link="/inbox"))
        assert window.messages[0]["notification"] == {"id": "n2", "action": "default"}

    @pytest.mark.asyncio
    async def test_dismiss_does_nothing_but_close(self, dispatcher, clients, window):
        notification = _notification(id="n3", url="/custom")

        assert await dispatcher.click(notification, "dismiss") is None

        assert notification.closed is True
        assert clients.opened == []
        assert window.messages == []
        assert window.focused is False

    @pytest.mark.asyncio
    async def test_click_without_data(self, dispatcher, clients):
        notification = DisplayedNotification(
            title="Bare",
            options=NotificationOptions(body="b", icon="i", badge="b", tag="t"),
        )
        assert await dispatcher.click(notification) == "/"
        assert clients.opened == [f"{SW_ORIGIN}/"]


# ── Close ─────────────────────────────────────────────────────────


class TestClose:
    @pytest.mark.asyncio
    async def test_close_broadcasts_id(self, dispatcher, window):
        assert await dispatcher.close(_notification(id="n4", leadId="L1")) is True
        assert window.messages == [
            {"type": "NOTIFICATION_CLOSED", "notification": {"id": "n4"}}
        ]

    @pytest.mark.asyncio
    async def test_close_without_id_is_silent(self, dispatcher, window):
        assert await dispatcher.close(_notification(leadId="L1")) is False
        assert window.messages == []
