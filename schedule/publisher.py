from __future__ import annotations

import asyncio
from datetime import tzinfo

import discord

from config.defaults import SCHEDULE_PLACEHOLDER_TEXT
from schedule.errors import DestinationUnreachableError
from schedule.models import PublishResult
from schedule.models import RenderedSchedule
from schedule.query import query_month
from schedule.render import render_schedule


def build_embed(rendered: RenderedSchedule) -> discord.Embed:
    embed = discord.Embed(title=rendered.title, description=rendered.body)
    embed.set_footer(text=rendered.footer)
    return embed


class SchedulePublisher:
    """Keeps exactly one schedule message per (guild, scope) up to date.

    The message id is remembered in the message record store. When that message
    is gone the next publish posts a fresh one and rebinds the record.
    """

    def __init__(self, *, bot, notion_client, message_store, store_lock: asyncio.Lock, tz: tzinfo | None = None) -> None:
        self.bot = bot
        self.notion_client = notion_client
        self.message_store = message_store
        self.store_lock = store_lock
        self.tz = tz

    async def _get_thread(self, thread_id):
        try:
            channel_id = int(str(thread_id).strip())
        except (TypeError, ValueError):
            raise DestinationUnreachableError(thread_id, "not a channel id") from None
        ch = self.bot.get_channel(channel_id)
        if ch is None:
            try:
                ch = await self.bot.fetch_channel(channel_id)
            except (discord.NotFound, discord.Forbidden, discord.InvalidData) as e:
                raise DestinationUnreachableError(thread_id, type(e).__name__) from e
            except discord.HTTPException as e:
                raise DestinationUnreachableError(thread_id, f"HTTP {e.status}") from e
        if ch is None:
            raise DestinationUnreachableError(thread_id)
        # Categories and forum channels cannot hold messages.
        if not isinstance(ch, discord.abc.Messageable):
            raise DestinationUnreachableError(thread_id, f"{type(ch).__name__} cannot hold messages")
        return ch

    async def ensure_schedule_message(self, thread, guild_id, scope_key: str):
        """Return ``(message, created)`` for the stored message, posting a placeholder if needed."""
        async with self.store_lock:
            msg_id = await asyncio.to_thread(self.message_store.get_message_id, guild_id, scope_key)

        if msg_id:
            try:
                return (await thread.fetch_message(msg_id), False)
            except discord.HTTPException as e:
                print(f"[Sync] stored message {msg_id} for {guild_id}:{scope_key} unavailable ({e.status}); recreating")

        try:
            created = await thread.send(SCHEDULE_PLACEHOLDER_TEXT)
        except (discord.Forbidden, discord.NotFound) as e:
            raise DestinationUnreachableError(thread.id, type(e).__name__) from e
        async with self.store_lock:
            await asyncio.to_thread(self.message_store.set_message_id, guild_id, scope_key, int(created.id))
        return (created, True)

    async def publish(
        self,
        guild_id,
        thread_id,
        database_id: str,
        month_key: str,
        scope_key: str,
        tz_label: str,
    ) -> PublishResult:
        if not thread_id:
            return PublishResult(scope_key=scope_key, month_key=month_key)

        result = await query_month(self.notion_client, database_id, month_key, tz=self.tz)
        thread = await self._get_thread(thread_id)
        msg, created = await self.ensure_schedule_message(thread, guild_id, scope_key)

        rendered = render_schedule(month_key, result.entries, tz_label)
        try:
            await msg.edit(content=None, embed=build_embed(rendered))
        except discord.Forbidden as e:
            raise DestinationUnreachableError(thread_id, type(e).__name__) from e

        print(
            f"[Sync] guild={guild_id} scope={scope_key} month={month_key} entries={len(result.entries)} "
            f"skipped={len(result.skipped)} unresolved={len(result.unresolved_ids)} "
            f"message={msg.id} {'created' if created else 'edited'}"
        )
        return PublishResult(
            scope_key=scope_key,
            month_key=month_key,
            count=len(result.entries),
            message_id=int(msg.id),
            created=created,
            skipped=tuple(result.skipped),
            unresolved_ids=tuple(result.unresolved_ids),
        )
