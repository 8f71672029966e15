from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError


MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def resolve_timezone(timezone_name: str | None) -> tzinfo:
    clean = str(timezone_name or "").strip()
    if not clean or clean.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(clean)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def parse_month_key(month_key: str) -> tuple[int, int]:
    m = MONTH_KEY_PATTERN.fullmatch(str(month_key or "").strip())
    if not m:
        raise ValueError(f"Invalid month key: {month_key!r} (expected YYYY-MM)")
    return int(m.group(1)), int(m.group(2))


def month_key(year: int, month: int) -> str:
    return f"{int(year):04d}-{int(month):02d}"


def month_key_from_date(value: datetime) -> str:
    return month_key(value.year, value.month)


def shift_month(key: str, delta: int) -> str:
    year, month = parse_month_key(key)
    index = year * 12 + (month - 1) + int(delta)
    return month_key(index // 12, index % 12 + 1)


def month_window(key: str, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` bounds of the month, aware in ``tz`` (UTC by default)."""
    zone = tz or timezone.utc
    year, month = parse_month_key(key)
    next_year, next_month = parse_month_key(shift_month(key, 1))
    start = datetime(year, month, 1, tzinfo=zone)
    end = datetime(next_year, next_month, 1, tzinfo=zone)
    return start, end


def month_title(key: str) -> str:
    year, month = parse_month_key(key)
    return f"{MONTH_NAMES[month - 1]} {year}"


def month_abbrev(value: datetime) -> str:
    return MONTH_NAMES[value.month - 1][:3].upper()


def scope_month_keys(now: datetime) -> dict[str, str]:
    this_month = month_key_from_date(now)
    return {
        "last": shift_month(this_month, -1),
        "this": this_month,
        "next": shift_month(this_month, 1),
    }
