from datetime import datetime, timezone

from core.utils.time import touch_timestamp, utc_now_iso


class TestUtcNowIso:
    def test_returns_valid_iso8601_datetime(self) -> None:
        parsed = datetime.fromisoformat(utc_now_iso())
        assert isinstance(parsed, datetime)

    def test_returns_utc_timezone(self) -> None:
        parsed = datetime.fromisoformat(utc_now_iso())
        assert parsed.tzinfo == timezone.utc

    def test_is_close_to_current_time(self) -> None:
        before = datetime.now(timezone.utc)
        parsed = datetime.fromisoformat(utc_now_iso())
        after = datetime.now(timezone.utc)

        assert before <= parsed <= after

    def test_fixed_width_so_lexicographic_order_matches_time(self) -> None:
        t1 = utc_now_iso()
        t2 = utc_now_iso()
        assert len(t1) == len(t2)
        assert t1 <= t2


class TestTouchTimestamp:
    def test_without_previous_returns_now(self) -> None:
        assert datetime.fromisoformat(touch_timestamp(None)).tzinfo == timezone.utc

    def test_never_moves_backwards(self) -> None:
        future = "2999-01-01T00:00:00.000000+00:00"
        assert touch_timestamp(future) == future

    def test_advances_past_old_value(self) -> None:
        old = "2000-01-01T00:00:00.000000+00:00"
        assert touch_timestamp(old) > old
