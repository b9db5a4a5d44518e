"""Tests for shared/clock.py."""

from datetime import datetime, timezone

from shared.clock import from_epoch_ms, to_epoch_ms, utc_now


class TestEpochMillis:
    def test_to_epoch_ms(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert to_epoch_ms(moment) == 1704067200000

    def test_from_epoch_ms(self):
        assert from_epoch_ms("1704067200000") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_from_epoch_ms_missing_or_garbage(self):
        assert from_epoch_ms(None) is None
        assert from_epoch_ms("") is None
        assert from_epoch_ms("not-a-number") is None

    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is not None
