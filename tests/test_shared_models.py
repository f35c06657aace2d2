"""Tests for shared model utilities."""

import uuid
from datetime import UTC, datetime, timedelta, timezone

from bdc.models.shared import DEFAULT_USER_ID, UUIDType, as_utc, generate_uuid, utc_now


class TestGenerateUuid:
    def test_returns_uuid4(self):
        result = generate_uuid()
        assert isinstance(result, uuid.UUID)
        assert result.version == 4

    def test_returns_unique_values(self):
        assert len({generate_uuid() for _ in range(10)}) == 10


class TestUtcNow:
    def test_returns_utc(self):
        assert utc_now().tzinfo == UTC

    def test_returns_current_time(self):
        before = datetime.now(UTC)
        result = utc_now()
        after = datetime.now(UTC)
        assert before <= result <= after


class TestAsUtc:
    def test_naive_is_treated_as_utc(self):
        naive = datetime(2026, 1, 1, 12, 0)
        assert as_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_aware_is_unchanged(self):
        aware = datetime(2026, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert as_utc(aware) is aware


class TestDefaultUserId:
    def test_value(self):
        assert DEFAULT_USER_ID == uuid.UUID("00000000-0000-0000-0000-000000000001")


class TestUUIDType:
    def test_bind_accepts_uuid_and_string(self):
        t = UUIDType()
        value = uuid.uuid4()
        assert t.process_bind_param(value, None) == str(value)
        assert t.process_bind_param(str(value), None) == str(value)
        assert t.process_bind_param(None, None) is None

    def test_result_returns_uuid(self):
        t = UUIDType()
        value = uuid.uuid4()
        assert t.process_result_value(str(value), None) == value
        assert t.process_result_value(value, None) is value
        assert t.process_result_value(None, None) is None
