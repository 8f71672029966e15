from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands
from config.defaults import REPLY_TEXT_LIMIT
from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates
from schedule.errors import ConfigurationIncompleteError


async def _reply(interaction: discord.Interaction, text: str) -> None:
    if interaction.response.is_done():
        await interaction.edit_original_response(content=text[:REPLY_TEXT_LIMIT])
    else:
        await interaction.response.send_message(text[:REPLY_TEXT_LIMIT], ephemeral=True)


def register(
    bot: commands.Bot,
    *,
    deps: CommandDeps,
    gates: CommandGates,
) -> None:
    service = deps.schedule_service

    caltrix = app_commands.Group(
        name="caltrix",
        description="Caltrix schedule bot (admin only)",
        guild_only=True,
        default_permissions=discord.Permissions(manage_guild=True),
    )

    async def report_error(interaction: discord.Interaction, e: Exception) -> None:
        if not isinstance(e, ConfigurationIncompleteError):
            print(f"[Commands] /caltrix failed guild={getattr(interaction, 'guild_id', None)}: {type(e).__name__}: {e}")
        await _reply(interaction, service.error_text(e))

    async def require_guild(interaction: discord.Interaction) -> bool:
        if gates.in_guild(interaction):
            return True
        await _reply(interaction, "Use this command in a server.")
        return False

    @caltrix.command(name="setup", description="Configure this server (staff channel + threads)")
    @app_commands.describe(
        staff_channel="Channel where /caltrix commands are allowed",
        thread_this="Thread ID for THIS month schedule",
        thread_last="Thread ID for LAST month schedule",
        thread_next="Thread ID for NEXT month schedule",
        thread_archive="Thread ID for ARCHIVE (optional)",
    )
    async def caltrix_setup(
        interaction: discord.Interaction,
        staff_channel: discord.abc.GuildChannel,
        thread_this: str,
        thread_last: str | None = None,
        thread_next: str | None = None,
        thread_archive: str | None = None,
    ):
        if not await require_guild(interaction):
            return
        try:
            text = await service.save_setup(
                interaction.guild_id,
                staff_channel_id=staff_channel.id,
                thread_this=thread_this,
                thread_last=thread_last,
                thread_next=thread_next,
                thread_archive=thread_archive,
            )
            await _reply(interaction, text)
        except Exception as e:
            await report_error(interaction, e)

    @caltrix.command(name="notion", description="Configure Notion database for this server")
    @app_commands.describe(database_link="Paste a Notion database link (the bot extracts the DB id)")
    async def caltrix_notion(interaction: discord.Interaction, database_link: str):
        if not await require_guild(interaction):
            return
        try:
            _ok, text = await service.save_notion_link(interaction.guild_id, database_link)
            await _reply(interaction, text)
        except Exception as e:
            await report_error(interaction, e)

    @caltrix.command(name="config", description="Show config for this server")
    async def caltrix_config(interaction: discord.Interaction):
        if not await require_guild(interaction):
            return
        try:
            await _reply(interaction, await service.config_text(interaction.guild_id))
        except Exception as e:
            await report_error(interaction, e)

    @caltrix.command(name="sync", description="Sync from Notion and update schedule message")
    @app_commands.describe(scope="this | last | next | all", tz="Footer label (e.g. KST)")
    async def caltrix_sync(interaction: discord.Interaction, scope: str | None = None, tz: str | None = None):
        if not await require_guild(interaction):
            return
        try:
            cfg = await service.require_config(interaction.guild_id)
            if not gates.in_staff_channel(interaction, cfg.staff_channel_id):
                await _reply(interaction, "Use this command in the configured staff channel.")
                return
            await interaction.response.defer(ephemeral=True, thinking=True)
            text = await service.sync(cfg, scope=scope, tz_label=tz)
            await _reply(interaction, text)
        except Exception as e:
            await report_error(interaction, e)

    bot.tree.add_command(caltrix)
