"""Tests for push payload parsing, rendering and the displayed broadcast."""

import json
import time

import pytest

from bdc.service_worker.clients import ClientRegistry, WindowClient
from bdc.service_worker.registration import NotificationRegistration
from bdc.service_worker.renderer import NotificationRenderer


@pytest.fixture
def clients():
    return ClientRegistry()


@pytest.fixture
def registration():
    return NotificationRegistration()


@pytest.fixture
def renderer(sw_config, registration, clients):
    return NotificationRenderer(sw_config, registration, clients)


def _payload(**fields):
    return json.dumps(fields).encode("utf-8")


def _action_names(options):
    return [a.action for a in options.actions]


# ── Parsing ───────────────────────────────────────────────────────


class TestParse:
    def test_json_payload(self, renderer):
        payload = renderer.parse(_payload(title="Hi", leadId="L1", requireInteraction=True))
        assert payload.title == "Hi"
        assert payload.lead_id == "L1"
        assert payload.require_interaction is True

    def test_plain_text_payload(self, renderer):
        payload = renderer.parse(b"Lead Jane Doe just called")
        assert payload.title == "New Notification"
        assert payload.body == "Lead Jane Doe just called"
        assert payload.icon == "/favicon.ico"

    def test_empty_push(self, renderer):
        payload = renderer.parse(None)
        assert payload.title == "New Notification"
        assert payload.body == "No details available"

    def test_json_that_is_not_an_object(self, renderer):
        payload = renderer.parse("[1, 2, 3]")
        assert payload.title == "New Notification"
        assert payload.body == "[1, 2, 3]"

    def test_invalid_field_is_dropped_and_rest_kept(self, renderer):
        payload = renderer.parse(_payload(title="Hi", body="Jane called", vibrate="buzz"))
        assert payload.title == "Hi"
        assert payload.body == "Jane called"
        assert payload.vibrate is None

    @pytest.mark.parametrize(
        "field, value",
        [
            ("id", 1.5),
            ("timestamp", "abc"),
            ("requireInteraction", "sometimes"),
            ("actions", [{"action": "view_lead"}]),
        ],
    )
    def test_mistyped_field_falls_back_to_default(self, renderer, field, value):
        payload = renderer.parse(
            json.dumps({"title": "New Lead", "type": "lead", "leadId": "L1", field: value})
        )
        assert payload.title == "New Lead"
        assert payload.lead_id == "L1"
        assert payload.model_dump(by_alias=True)[field] is None

    def test_mistyped_timestamp_is_replaced_when_rendered(self, renderer):
        before = int(time.time() * 1000)
        title, options = renderer.render(renderer.parse(_payload(title="Hi", timestamp="abc")))
        assert title == "Hi"
        assert options.timestamp >= before


# ── Rendering ─────────────────────────────────────────────────────


class TestRender:
    def test_defaults(self, renderer):
        before = int(time.time() * 1000)
        title, options = renderer.render(renderer.parse(_payload()))
        assert title == "Car Exchange Module"
        assert options.body == "You have a new notification"
        assert options.icon == "/favicon.ico"
        assert options.badge == "/notification-badge.png"
        assert options.tag == "default"
        assert options.vibrate == [200, 100, 200]
        assert options.require_interaction is False
        assert options.image is None
        assert options.actions == []
        assert options.timestamp >= before

    def test_payload_values_win(self, renderer):
        title, options = renderer.render(
            renderer.parse(
                _payload(
                    title="Appointment Reminder",
                    body="10:00 with Jane",
                    icon="/icons/cal.png",
                    tag="appointment-A1",
                    vibrate=[100],
                    image="/img/car.jpg",
                    timestamp=1700000000000,
                )
            )
        )
        assert title == "Appointment Reminder"
        assert options.body == "10:00 with Jane"
        assert options.icon == "/icons/cal.png"
        assert options.tag == "appointment-A1"
        assert options.vibrate == [100]
        assert options.image == "/img/car.jpg"
        assert options.timestamp == 1700000000000

    def test_lead_actions(self, renderer):
        _, options = renderer.render(renderer.parse(_payload(type="lead")))
        assert _action_names(options) == ["view_lead", "dismiss"]
        assert [a.title for a in options.actions] == ["View Lead", "Dismiss"]

    @pytest.mark.parametrize(
        ("notification_type", "first_action", "first_title"),
        [
            ("appointment", "view_appointment", "View Details"),
            ("vehicle", "view_vehicle", "View Vehicle"),
            ("communication", "view_communication", "View Message"),
            ("system", "view_details", "Details"),
        ],
    )
    def test_actions_by_type(self, renderer, notification_type, first_action, first_title):
        _, options = renderer.render(renderer.parse(_payload(type=notification_type)))
        assert _action_names(options) == [first_action, "dismiss"]
        assert options.actions[0].title == first_title

    def test_type_actions_replace_payload_actions(self, renderer):
        _, options = renderer.render(
            renderer.parse(
                _payload(type="vehicle", actions=[{"action": "custom", "title": "Custom"}])
            )
        )
        assert _action_names(options) == ["view_vehicle", "dismiss"]

    def test_unknown_type_keeps_payload_actions(self, renderer):
        _, options = renderer.render(
            renderer.parse(
                _payload(type="billing", actions=[{"action": "custom", "title": "Custom"}])
            )
        )
        assert _action_names(options) == ["custom"]

    def test_unknown_type_without_actions(self, renderer):
        _, options = renderer.render(renderer.parse(_payload(type="billing")))
        assert options.actions == []

    def test_data_bag_carries_routing_fields(self, renderer):
        _, options = renderer.render(
            renderer.parse(
                _payload(
                    id="n1",
                    type="appointment",
                    appointmentId="A1",
                    link="/appointments/A1",
                    data={"url": "/calendar", "id": "from-data"},
                )
            )
        )
        assert options.data == {
            "url": "/calendar",
            "id": "from-data",
            "type": "appointment",
            "appointmentId": "A1",
            "link": "/appointments/A1",
        }


# ── Showing ───────────────────────────────────────────────────────


class TestShow:
    @pytest.mark.asyncio
    async def test_show_and_broadcast(self, renderer, registration, clients):
        controlled = clients.register(WindowClient("https://bdc.example.com/"))
        controlled.controlled = True
        uncontrolled = clients.register(WindowClient("https://bdc.example.com/leads"))

        displayed = await renderer.show(
            _payload(id="n1", title="New Lead", body="Jane Doe", type="lead", timestamp=5)
        )

        assert registration.get_notifications() == [displayed]
        assert controlled.messages == [
            {
                "type": "NOTIFICATION_DISPLAYED",
                "notification": {
                    "id": "n1",
                    "title": "New Lead",
                    "body": "Jane Doe",
                    "timestamp": 5,
                    "type": "lead",
                },
            }
        ]
        assert uncontrolled.messages == []

    @pytest.mark.asyncio
    async def test_malformed_payload_is_still_shown(self, renderer, registration):
        displayed = await renderer.show(b"\xff\xfe not json")
        assert displayed.title
        assert displayed.options.body
        assert registration.get_notifications() == [displayed]

    @pytest.mark.asyncio
    async def test_same_tag_replaces(self, renderer, registration):
        await renderer.show(_payload(title="First"))
        second = await renderer.show(_payload(title="Second"))
        assert registration.get_notifications(tag="default") == [second]

    @pytest.mark.asyncio
    async def test_failing_client_does_not_block_others(self, renderer, clients):
        class BrokenClient(WindowClient):
            async def post_message(self, message):
                raise RuntimeError("window gone")

        broken = clients.register(BrokenClient("https://bdc.example.com/a"))
        healthy = clients.register(WindowClient("https://bdc.example.com/b"))
        await clients.claim()

        await renderer.show(_payload(id="n2", title="Hi"))

        assert broken.messages == []
        assert len(healthy.messages) == 1
