from __future__ import annotations

import asyncio
import importlib.util


class _DummyNotionClient:
    async def query_database(self, database_id: str, body: dict):
        return {"results": []}

    async def get_page(self, page_id: str):
        return {"properties": {}}


def _have_dependencies(*modules: str) -> bool:
    missing = [name for name in modules if importlib.util.find_spec(name) is None]
    if missing:
        print(f"[Smoke] caltrix wiring not checked, cannot import: {', '.join(missing)} (run `pip install -e .`)")
        return False
    return True


def _main() -> int:
    if not _have_dependencies("discord", "httpx"):
        return 0

    import discord
    from discord.ext import commands
    from misc.runtime_wiring import wire_bot_runtime
    from schedule.publisher import SchedulePublisher
    from schedule.service import ScheduleService
    from schedule.store import GuildConfigStore
    from schedule.store import MemoryBackend
    from schedule.store import MessageRecordStore

    intents = discord.Intents.none()
    bot = commands.Bot(command_prefix="!", intents=intents)
    store_lock = asyncio.Lock()

    publisher = SchedulePublisher(
        bot=bot,
        notion_client=_DummyNotionClient(),
        message_store=MessageRecordStore(MemoryBackend()),
        store_lock=store_lock,
    )
    schedule_service = ScheduleService(
        config_store=GuildConfigStore(MemoryBackend()),
        publisher=publisher,
        store_lock=store_lock,
        integration_name="Caltrix",
    )

    wire_bot_runtime(
        bot,
        schedule_service=schedule_service,
        version="smoke",
        sync_command_tree=False,
    )

    group = bot.tree.get_command("caltrix")
    if group is None:
        raise RuntimeError("Missing /caltrix command group")

    expected_subcommands = {"setup", "notion", "config", "sync"}
    existing_subcommands = {cmd.name for cmd in group.commands}
    missing = sorted(expected_subcommands - existing_subcommands)
    if missing:
        raise RuntimeError(f"Missing expected subcommands: {missing}")

    if getattr(bot, "on_ready", None) is None:
        raise RuntimeError("Runtime events were not registered")

    print("Smoke wiring check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
