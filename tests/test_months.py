from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from schedule.months import month_abbrev
from schedule.months import month_title
from schedule.months import month_window
from schedule.months import parse_month_key
from schedule.months import resolve_timezone
from schedule.months import scope_month_keys
from schedule.months import shift_month


class MonthKeyTests(unittest.TestCase):
    def test_parse_rejects_malformed_keys(self):
        for bad in ("2026-13", "2026-1", "26-01", "", "2026/01", "2026-00"):
            with self.assertRaises(ValueError):
                parse_month_key(bad)

    def test_shift_month_crosses_year_boundaries(self):
        self.assertEqual(shift_month("2026-12", 1), "2027-01")
        self.assertEqual(shift_month("2026-01", -1), "2025-12")
        self.assertEqual(shift_month("2026-05", 0), "2026-05")

    def test_scope_month_keys_from_now(self):
        keys = scope_month_keys(datetime(2026, 1, 15, tzinfo=timezone.utc))
        self.assertEqual(keys, {"last": "2025-12", "this": "2026-01", "next": "2026-02"})

    def test_title_and_abbrev_are_english(self):
        self.assertEqual(month_title("2026-03"), "March 2026")
        self.assertEqual(month_abbrev(datetime(2026, 9, 1)), "SEP")


class MonthWindowTests(unittest.TestCase):
    def test_window_is_half_open_month(self):
        start, end = month_window("2026-02")
        self.assertEqual(start, datetime(2026, 2, 1, tzinfo=timezone.utc))
        self.assertEqual(end, datetime(2026, 3, 1, tzinfo=timezone.utc))
        self.assertTrue(start <= end - timedelta(microseconds=1) < end)

    def test_window_uses_given_timezone(self):
        seoul = ZoneInfo("Asia/Seoul")
        start, end = month_window("2026-12", seoul)
        self.assertEqual(start.isoformat(), "2026-12-01T00:00:00+09:00")
        self.assertEqual(end.isoformat(), "2027-01-01T00:00:00+09:00")

    def test_unknown_timezone_falls_back_to_utc(self):
        self.assertIs(resolve_timezone("Not/AZone"), timezone.utc)
        self.assertIs(resolve_timezone(""), timezone.utc)


if __name__ == "__main__":
    unittest.main()
