"""Readers for Notion property payloads; every reader tolerates a missing or mistyped property."""

from __future__ import annotations

import re
from datetime import date as date_value
from datetime import datetime
from datetime import time as time_value
from datetime import tzinfo
from typing import Any
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError


DATABASE_ID_PATTERN = re.compile(
    r"([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}|[0-9a-fA-F]{32})"
)


def _typed(prop: Any, type_name: str) -> dict[str, Any] | None:
    if not isinstance(prop, dict) or prop.get("type") != type_name:
        return None
    return prop


def rich_text_plain_items(items: Any) -> str:
    if not isinstance(items, list):
        return ""
    return "".join(str(x.get("plain_text") or "") for x in items if isinstance(x, dict))


def title_plain(prop: Any) -> str:
    p = _typed(prop, "title")
    return rich_text_plain_items(p.get("title")) if p else ""


def rich_text_plain(prop: Any) -> str:
    p = _typed(prop, "rich_text")
    return rich_text_plain_items(p.get("rich_text")) if p else ""


def select_plain(prop: Any) -> str:
    p = _typed(prop, "select")
    if not p or not isinstance(p.get("select"), dict):
        return ""
    return str(p["select"].get("name") or "")


def url_plain(prop: Any) -> str:
    p = _typed(prop, "url")
    return str(p.get("url") or "") if p else ""


def date_start(prop: Any) -> tuple[str | None, str | None]:
    """Return ``(start, time_zone)`` of a date property; ``(None, None)`` when unset."""
    p = _typed(prop, "date")
    if not p or not isinstance(p.get("date"), dict):
        return (None, None)
    start = p["date"].get("start") or None
    tz_name = p["date"].get("time_zone") or None
    return (start, tz_name)


def relation_ids(prop: Any) -> list[str]:
    p = _typed(prop, "relation")
    if not p or not isinstance(p.get("relation"), list):
        return []
    return [str(r["id"]) for r in p["relation"] if isinstance(r, dict) and r.get("id")]


def first_title_from_page(page: Any) -> str:
    props = page.get("properties") if isinstance(page, dict) else None
    if not isinstance(props, dict):
        return ""
    for prop in props.values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            return rich_text_plain_items(prop.get("title"))
    return ""


def parse_date_start(start: str, *, time_zone: str | None, default_tz: tzinfo) -> datetime:
    """Turn a Notion date ``start`` into an aware datetime without shifting it.

    Date-only values and naive datetimes are pinned to the property's own
    ``time_zone`` when Notion sends one, otherwise to ``default_tz``.
    Raises ``ValueError`` for anything unparseable.
    """
    text = str(start or "").strip()
    if not text:
        raise ValueError("empty date")
    zone = default_tz
    if time_zone:
        try:
            zone = ZoneInfo(time_zone)
        except (ZoneInfoNotFoundError, ValueError):
            zone = default_tz
    if len(text) == 10:
        return datetime.combine(date_value.fromisoformat(text), time_value(), tzinfo=zone)
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=zone)
    return parsed


def extract_database_id(link: str) -> str | None:
    m = DATABASE_ID_PATTERN.search(str(link or ""))
    if not m:
        return None
    return m.group(1).replace("-", "").lower()
