import time
from datetime import datetime, timezone

from core.utils.time import http_date, utc_now_iso, utc_now_timestamp


class TestUtcNowIso:
    def test_returns_valid_iso8601_datetime(self) -> None:
        parsed = datetime.fromisoformat(utc_now_iso())
        assert parsed.tzinfo == timezone.utc

    def test_is_close_to_current_time(self) -> None:
        before = datetime.now(timezone.utc)
        parsed = datetime.fromisoformat(utc_now_iso())
        after = datetime.now(timezone.utc)

        assert before <= parsed <= after


class TestUtcNowTimestamp:
    def test_whole_seconds(self) -> None:
        before = int(time.time())
        result = utc_now_timestamp()
        after = int(time.time())

        assert isinstance(result, int)
        assert before <= result <= after


class TestHttpDate:
    def test_epoch(self) -> None:
        assert http_date(0) == "Thu, 01 Jan 1970 00:00:00 GMT"

    def test_known_timestamp(self) -> None:
        assert http_date(1_700_000_000) == "Tue, 14 Nov 2023 22:13:20 GMT"
