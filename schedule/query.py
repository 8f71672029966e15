from __future__ import annotations

from datetime import tzinfo
from typing import Any

from config.defaults import NOTION_PROPS
from config.defaults import NOTION_QUERY_PAGE_SIZE
from config.defaults import NOTION_UPCOMING_STATUS
from config.defaults import RELATION_MAX_NAMES
from schedule.models import QueryResult
from schedule.models import ScheduleEntry
from schedule.models import SkippedRow
from schedule.months import month_window
from schedule.notion_props import date_start
from schedule.notion_props import parse_date_start
from schedule.notion_props import relation_ids
from schedule.notion_props import rich_text_plain
from schedule.notion_props import select_plain
from schedule.notion_props import title_plain
from schedule.notion_props import url_plain
from schedule.resolver import RelationResolver


UNTITLED = "(Untitled)"


def build_month_query(start_iso: str, end_iso: str) -> dict[str, Any]:
    return {
        "filter": {
            "and": [
                {"property": NOTION_PROPS["status"], "select": {"equals": NOTION_UPCOMING_STATUS}},
                {"property": NOTION_PROPS["date"], "date": {"on_or_after": start_iso}},
                {"property": NOTION_PROPS["date"], "date": {"before": end_iso}},
            ],
        },
        "sorts": [{"property": NOTION_PROPS["date"], "direction": "ascending"}],
        "page_size": NOTION_QUERY_PAGE_SIZE,
    }


async def query_month(client, database_id: str, month_key: str, *, tz: tzinfo | None = None) -> QueryResult:
    """Fetch the "Upcoming" rows dated inside ``month_key`` and normalize them.

    Rows without a usable date, or dated outside the month, are left out and
    listed in ``QueryResult.skipped``. Entries come back sorted by date.
    """
    db_id = str(database_id or "").strip()
    if not db_id:
        raise ValueError("database_id is required")
    start, end = month_window(month_key, tz)

    resolver = RelationResolver(client)
    res = await client.query_database(db_id, build_month_query(start.isoformat(), end.isoformat()))

    out = QueryResult(month_key=month_key)
    for page in res.get("results") or []:
        if not isinstance(page, dict):
            continue
        page_id = str(page.get("id") or "")
        p = page.get("properties") if isinstance(page.get("properties"), dict) else {}

        ds, ds_tz = date_start(p.get(NOTION_PROPS["date"]))
        if not ds:
            out.skipped.append(SkippedRow(page_id=page_id, reason="missing_date"))
            continue
        try:
            occurs_at = parse_date_start(ds, time_zone=ds_tz, default_tz=start.tzinfo)
        except ValueError:
            out.skipped.append(SkippedRow(page_id=page_id, reason="invalid_date"))
            continue
        if not (start <= occurs_at < end):
            out.skipped.append(SkippedRow(page_id=page_id, reason="outside_window"))
            continue

        artist_names = await resolver.resolve_names(relation_ids(p.get(NOTION_PROPS["artist"])), RELATION_MAX_NAMES)
        member_names = await resolver.resolve_names(relation_ids(p.get(NOTION_PROPS["member"])), RELATION_MAX_NAMES)

        out.entries.append(
            ScheduleEntry(
                title=title_plain(p.get(NOTION_PROPS["title"])) or UNTITLED,
                category=select_plain(p.get(NOTION_PROPS["type"])),
                occurs_at=occurs_at,
                time_label=rich_text_plain(p.get(NOTION_PROPS["time"])).strip(),
                location_label=select_plain(p.get(NOTION_PROPS["location"])).strip(),
                link_url=url_plain(p.get(NOTION_PROPS["link"])).strip(),
                primary_ref_names=tuple(artist_names),
                secondary_ref_names=tuple(member_names),
                page_id=page_id,
            )
        )

    out.entries.sort(key=lambda e: e.occurs_at)
    out.unresolved_ids = list(resolver.failed_ids)
    return out
