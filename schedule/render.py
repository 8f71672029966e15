from __future__ import annotations

from config.defaults import CATEGORY_GLYPHS
from config.defaults import EMBED_DESCRIPTION_LIMIT
from config.defaults import EMPTY_SCHEDULE_BODY
from schedule.models import RenderedSchedule
from schedule.models import ScheduleEntry
from schedule.months import month_abbrev
from schedule.months import month_title


def format_entry_line(entry: ScheduleEntry) -> str:
    d = entry.occurs_at
    time_part = f" | {entry.time_label}" if entry.time_label else ""
    glyph = CATEGORY_GLYPHS.get(entry.category)
    glyph_part = f"{glyph} " if glyph else ""

    meta_parts: list[str] = []
    if entry.primary_ref_names:
        meta_parts.append(", ".join(entry.primary_ref_names))
    if entry.secondary_ref_names:
        meta_parts.append(", ".join(entry.secondary_ref_names))
    if entry.location_label:
        meta_parts.append(entry.location_label)

    meta = f" — {' • '.join(meta_parts)}" if meta_parts else ""
    link = f" · {entry.link_url}" if entry.link_url else ""
    return f"[{month_abbrev(d)} {d.day:02d}{time_part}] {glyph_part}{entry.title}{meta}{link}".strip()


def _fit_lines(lines: list[str], limit: int) -> str:
    body = "\n".join(lines)
    if len(body) <= limit:
        return body
    kept: list[str] = []
    used = 0
    for idx, line in enumerate(lines):
        marker = f"… +{len(lines) - idx} more"
        extra = len(line) + (1 if kept else 0)
        if used + extra + 1 + len(marker) > limit:
            kept.append(marker)
            break
        kept.append(line)
        used += extra
    return "\n".join(kept)


def render_schedule(month_key: str, entries: list[ScheduleEntry], tz_label: str) -> RenderedSchedule:
    title = f"Schedule — {month_title(month_key)}"
    if entries:
        body = _fit_lines([format_entry_line(e) for e in entries], EMBED_DESCRIPTION_LIMIT)
    else:
        body = EMPTY_SCHEDULE_BODY
    return RenderedSchedule(title=title, body=body, footer=f"Synced from Notion • {tz_label}")
