import os
import asyncio
from pathlib import Path
import discord
from discord.ext import commands
from config.defaults import DEFAULT_DATA_DIR
from config.defaults import DEFAULT_NOTION_INTEGRATION_NAME
from config.defaults import DEFAULT_TIMEZONE
from config.defaults import DEFAULT_TZ_LABEL
from config.defaults import GUILD_CONFIG_FILENAME
from config.defaults import MESSAGE_RECORDS_FILENAME
from misc.runtime_wiring import wire_bot_runtime
from schedule.months import resolve_timezone
from schedule.notion_client import NotionClient
from schedule.publisher import SchedulePublisher
from schedule.service import ScheduleService
from schedule.store import GuildConfigStore
from schedule.store import JsonFileBackend
from schedule.store import MessageRecordStore

BOT_VERSION = "2026-10-19-a"

# =========================
# ENV
# =========================
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")
NOTION_TOKEN = os.getenv("NOTION_TOKEN")

if not DISCORD_TOKEN:
    raise RuntimeError("Missing DISCORD_TOKEN env var")
if not NOTION_TOKEN:
    raise RuntimeError("Missing NOTION_TOKEN env var")

NOTION_INTEGRATION_NAME = (os.getenv("NOTION_INTEGRATION_NAME") or "").strip()
if not NOTION_INTEGRATION_NAME:
    print("[CFG] NOTION_INTEGRATION_NAME not set (optional, but recommended).")
    NOTION_INTEGRATION_NAME = DEFAULT_NOTION_INTEGRATION_NAME

# Window timezone: month bounds for the Notion query and "now" for this/last/next.
TIMEZONE_NAME = os.getenv("CALTRIX_TIMEZONE", DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE
WINDOW_TZ = resolve_timezone(TIMEZONE_NAME)
DEFAULT_FOOTER_TZ_LABEL = os.getenv("CALTRIX_DEFAULT_TZ_LABEL", DEFAULT_TZ_LABEL).strip() or DEFAULT_TZ_LABEL

print(
    f"[CFG] version={BOT_VERSION} discord_token={'set' if DISCORD_TOKEN else 'missing'} "
    f"notion_token={'set' if NOTION_TOKEN else 'missing'} integration={NOTION_INTEGRATION_NAME!r} "
    f"timezone={TIMEZONE_NAME} (resolved {WINDOW_TZ}) default_tz_label={DEFAULT_FOOTER_TZ_LABEL}"
)

# =========================
# STORAGE (per guild)
# =========================
# Railway volume mount
DATA_DIR = Path(os.getenv("DATA_DIR") or DEFAULT_DATA_DIR)
DATA_DIR.mkdir(parents=True, exist_ok=True)

config_store = GuildConfigStore(JsonFileBackend(DATA_DIR / GUILD_CONFIG_FILENAME))
message_store = MessageRecordStore(JsonFileBackend(DATA_DIR / MESSAGE_RECORDS_FILENAME))
store_lock = asyncio.Lock()

print(f"[CFG] data_dir={DATA_DIR.resolve()}")

# =========================
# DISCORD BOT
# =========================
intents = discord.Intents.default()

bot = commands.Bot(command_prefix="!", intents=intents)

notion_client = NotionClient(token=NOTION_TOKEN)

publisher = SchedulePublisher(
    bot=bot,
    notion_client=notion_client,
    message_store=message_store,
    store_lock=store_lock,
    tz=WINDOW_TZ,
)

schedule_service = ScheduleService(
    config_store=config_store,
    publisher=publisher,
    store_lock=store_lock,
    integration_name=NOTION_INTEGRATION_NAME,
    default_tz_label=DEFAULT_FOOTER_TZ_LABEL,
    tz=WINDOW_TZ,
)

wire_bot_runtime(
    bot,
    schedule_service=schedule_service,
    version=BOT_VERSION,
)


bot.run(DISCORD_TOKEN)
