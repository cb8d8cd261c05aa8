"""Tests for UTC time helpers."""

from datetime import datetime, timezone, timedelta, UTC

from daisyauth.utils import isodatetime

class TestToTimestamp:
    def test_aware_utc(self):
        dt = datetime(2026, 10, 17, 10, 30, 0, tzinfo=UTC)
        assert isodatetime.to_timestamp(dt) == "2026-10-17T10:30:00Z"

    def test_naive_treated_as_utc(self):
        assert isodatetime.to_timestamp(datetime(2026, 10, 17, 10, 30)) == "2026-10-17T10:30:00Z"

    def test_other_timezone_converted_to_utc(self):
        sgt = timezone(timedelta(hours=8))
        dt = datetime(2026, 10, 17, 18, 30, tzinfo=sgt)
        assert isodatetime.to_timestamp(dt) == "2026-10-17T10:30:00Z"

def test_now_is_utc_string():
    assert isodatetime.now().endswith("Z")

def test_now_utc_is_aware():
    assert isodatetime.now_utc().tzinfo is not None

def test_from_unix():
    assert isodatetime.from_unix(0) == datetime(1970, 1, 1, tzinfo=UTC)
