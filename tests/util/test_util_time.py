import unittest
from datetime import datetime, timedelta, timezone

from classdrive.util.time import now_utc, parse_rfc3339, seconds_until, to_short_date


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_fractional_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.123Z")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, 123000, tzinfo=timezone.utc))

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T02:00:00+09:00")
        self.assertEqual(dt, datetime(2024, 12, 31, 17, 0, 0, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_bad_input(self) -> None:
        for value in ("", "yesterday", "2025-01-01T00:00:00"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_rfc3339(value)

    def test_to_short_date(self) -> None:
        dt = datetime(2025, 3, 7, 23, 0, tzinfo=timezone.utc)
        self.assertEqual(to_short_date(dt), "3/7/2025")

    def test_seconds_until_never_negative(self) -> None:
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(seconds_until(now + timedelta(minutes=5), now), 300)
        self.assertEqual(seconds_until(now - timedelta(minutes=5), now), 0)


if __name__ == "__main__":
    unittest.main()
