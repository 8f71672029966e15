from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from config.defaults import SCOPE_KEYS


def _clean_id(value: Any) -> str | None:
    text = str(value).strip() if value is not None else ""
    return text or None


@dataclass(slots=True)
class GuildConfig:
    guild_id: str
    staff_channel_id: str | None = None
    threads: dict[str, str | None] = field(default_factory=dict)
    database_id: str | None = None

    def thread_for(self, scope_key: str) -> str | None:
        return _clean_id(self.threads.get(scope_key))

    def missing_requirement(self) -> str | None:
        if not self.staff_channel_id or not self.thread_for("thisMonth"):
            return "This server is not configured. Run /caltrix setup first."
        if not self.database_id:
            return "Notion DB not configured. Run /caltrix notion <database_link> first."
        return None

    @classmethod
    def from_dict(cls, guild_id: str, raw: dict[str, Any] | None) -> GuildConfig:
        raw = raw if isinstance(raw, dict) else {}
        threads_raw = raw.get("threads") if isinstance(raw.get("threads"), dict) else {}
        notion_raw = raw.get("notion") if isinstance(raw.get("notion"), dict) else {}
        threads = {key: _clean_id(threads_raw.get(key)) for key in SCOPE_KEYS}
        return cls(
            guild_id=str(guild_id),
            staff_channel_id=_clean_id(raw.get("staffChannelId")),
            threads=threads,
            database_id=_clean_id(notion_raw.get("databaseId")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "staffChannelId": self.staff_channel_id,
            "threads": {key: self.thread_for(key) for key in SCOPE_KEYS},
            "notion": {"databaseId": self.database_id},
        }


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    title: str
    category: str
    occurs_at: datetime
    time_label: str = ""
    location_label: str = ""
    link_url: str = ""
    primary_ref_names: tuple[str, ...] = ()
    secondary_ref_names: tuple[str, ...] = ()
    page_id: str = ""


@dataclass(frozen=True, slots=True)
class SkippedRow:
    page_id: str
    reason: str


@dataclass(slots=True)
class QueryResult:
    month_key: str
    entries: list[ScheduleEntry] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)
    unresolved_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RenderedSchedule:
    title: str
    body: str
    footer: str


@dataclass(frozen=True, slots=True)
class PublishResult:
    scope_key: str
    month_key: str
    count: int = 0
    message_id: int | None = None
    created: bool = False
    skipped: tuple[SkippedRow, ...] = ()
    unresolved_ids: tuple[str, ...] = ()
