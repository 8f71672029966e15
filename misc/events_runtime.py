from __future__ import annotations

from discord.ext import commands
from misc.runtime_deps import RuntimeBootDeps


def register_runtime_events(
    bot: commands.Bot,
    *,
    boot: RuntimeBootDeps,
) -> None:
    @bot.event
    async def on_ready():
        print(f"{boot.bot_name} is online as {bot.user} (version {boot.version})")

        # Global commands for a multi-server bot; on_ready can fire again after reconnects.
        if boot.sync_command_tree and not getattr(bot, "_command_tree_synced", False):
            try:
                synced = await bot.tree.sync()
            except Exception as e:
                print(f"[Commands] global command sync failed: {e}")
                return
            bot._command_tree_synced = True
            print(f"[Commands] registered {len(synced)} global command(s)")
