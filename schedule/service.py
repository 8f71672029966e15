from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone, tzinfo

from config.defaults import DEFAULT_NOTION_INTEGRATION_NAME
from config.defaults import DEFAULT_TZ_LABEL
from config.defaults import REPLY_TEXT_LIMIT
from config.defaults import SYNC_ALL_ORDER
from config.defaults import SYNC_SCOPE_TO_KEY
from schedule.errors import DestinationUnreachableError
from schedule.models import GuildConfig
from schedule.months import scope_month_keys
from schedule.notion_props import extract_database_id


def json_block(data, *, prefix: str = "", limit: int = REPLY_TEXT_LIMIT) -> str:
    """Render ``data`` as a fenced JSON block that fits in ``limit`` characters with ``prefix``."""
    head = prefix + "```json\n"
    tail = "\n```"
    body = json.dumps(data, indent=2, ensure_ascii=False)
    room = limit - len(head) - len(tail)
    if len(body) > room:
        body = body[: max(room - 2, 0)].rstrip() + "\n…"
    return head + body + tail


class ScheduleService:
    def __init__(
        self,
        *,
        config_store,
        publisher,
        store_lock: asyncio.Lock,
        integration_name: str | None = None,
        default_tz_label: str = DEFAULT_TZ_LABEL,
        tz: tzinfo | None = None,
    ) -> None:
        self.config_store = config_store
        self.publisher = publisher
        self.store_lock = store_lock
        self.integration_name = (integration_name or "").strip() or DEFAULT_NOTION_INTEGRATION_NAME
        self.default_tz_label = (default_tz_label or "").strip() or DEFAULT_TZ_LABEL
        self.tz = tz or timezone.utc

    async def get_config(self, guild_id) -> GuildConfig | None:
        async with self.store_lock:
            return await asyncio.to_thread(self.config_store.get, guild_id)

    async def require_config(self, guild_id) -> GuildConfig:
        async with self.store_lock:
            return await asyncio.to_thread(self.config_store.require, guild_id)

    async def _update_config(self, guild_id, patch: dict) -> GuildConfig:
        async with self.store_lock:
            return await asyncio.to_thread(self.config_store.update, guild_id, patch)

    async def config_text(self, guild_id) -> str:
        async with self.store_lock:
            raw = await asyncio.to_thread(self.config_store.get_raw, guild_id)
        return json_block(raw or {})

    async def save_setup(
        self,
        guild_id,
        *,
        staff_channel_id,
        thread_this: str,
        thread_last: str | None = None,
        thread_next: str | None = None,
        thread_archive: str | None = None,
    ) -> str:
        cfg = await self._update_config(
            guild_id,
            {
                "staffChannelId": str(staff_channel_id),
                "threads": {
                    "thisMonth": (thread_this or "").strip() or None,
                    "lastMonth": (thread_last or "").strip() or None,
                    "nextMonth": (thread_next or "").strip() or None,
                    "archive": (thread_archive or "").strip() or None,
                },
            },
        )
        return json_block(cfg.to_dict(), prefix="Saved config for this server:\n")

    async def save_notion_link(self, guild_id, link: str) -> tuple[bool, str]:
        db_id = extract_database_id(link)
        if not db_id:
            return (
                False,
                "I couldn't find a Notion database ID in that link. "
                "Please paste the database link (it contains a 32-char id).",
            )
        await self._update_config(guild_id, {"notion": {"databaseId": db_id}})
        return (
            True,
            "Saved Notion DB for this server.\n\n"
            f"**Next step (required):** Open that Notion database → **Share** → invite the integration **{self.integration_name}**.\n\n"
            "Then run: **/caltrix sync**\n\n"
            f"Stored DB ID: `{db_id}`",
        )

    def _now(self) -> datetime:
        return datetime.now(timezone.utc).astimezone(self.tz)

    async def _sync_scope(self, cfg: GuildConfig, scope: str, month_key: str, tz_label: str) -> int:
        scope_key = SYNC_SCOPE_TO_KEY[scope]
        result = await self.publisher.publish(
            cfg.guild_id,
            cfg.thread_for(scope_key),
            cfg.database_id,
            month_key,
            scope_key,
            tz_label,
        )
        return result.count

    async def sync(self, cfg: GuildConfig, *, scope: str | None = None, tz_label: str | None = None, now: datetime | None = None) -> str:
        """Run a sync for ``this``/``last``/``next``/``all`` and return the reply text.

        Unknown scopes fall back to ``this``. In an ``all`` sync a thread that
        cannot be reached is reported and the remaining scopes still run.
        """
        scope_clean = (scope or "this").strip().lower() or "this"
        label = (tz_label or "").strip() or self.default_tz_label
        keys = scope_month_keys(now or self._now())

        if scope_clean == "all":
            parts: list[str] = []
            failures: list[str] = []
            for name in SYNC_ALL_ORDER:
                try:
                    n = await self._sync_scope(cfg, name, keys[name], label)
                    parts.append(f"{name.capitalize()}: {n}.")
                except DestinationUnreachableError as e:
                    print(f"[Sync] guild={cfg.guild_id} scope={name} failed: {e}")
                    parts.append(f"{name.capitalize()}: failed.")
                    failures.append(f"{name}: {e}")
            text = "Synced. " + " ".join(parts)
            if failures:
                text += "\n" + "\n".join(f"Error ({f})" for f in failures)
            return text

        if scope_clean not in SYNC_SCOPE_TO_KEY:
            scope_clean = "this"
        n = await self._sync_scope(cfg, scope_clean, keys[scope_clean], label)
        return f"Synced {scope_clean} month ({keys[scope_clean]}): {n}."

    def error_text(self, exc: BaseException) -> str:
        raw = str(exc) or "unknown"
        if "Notion API 404" in raw or "could not find database" in raw.lower():
            return (
                "Error: I cannot access that Notion database.\n"
                f"Make sure you opened the database in Notion → **Share** → invited the integration **{self.integration_name}**.\n"
                "Then try /caltrix sync again."
            )
        return f"Error: {raw}"
