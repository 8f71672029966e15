from __future__ import annotations

# Notion
NOTION_API_BASE_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
NOTION_QUERY_PAGE_SIZE = 100
NOTION_UPCOMING_STATUS = "Upcoming"
DEFAULT_NOTION_INTEGRATION_NAME = "Caltrix"

# Database column names. These must match the Notion schema exactly.
NOTION_PROPS = {
    "title": "Title",
    "date": "Date",
    "time": "Time",  # rich_text, optional
    "type": "Type",  # select
    "artist": "Artist",  # relation
    "member": "Member",  # relation
    "location": "Location",  # select
    "status": "Status",  # select: Upcoming/Done etc
    "link": "Link",  # url
}
RELATION_MAX_NAMES = 2

# Scopes
SCOPE_KEYS = ("thisMonth", "lastMonth", "nextMonth", "archive")
SYNC_SCOPE_TO_KEY = {
    "last": "lastMonth",
    "this": "thisMonth",
    "next": "nextMonth",
}
SYNC_ALL_ORDER = ("last", "this", "next")

# Storage
DEFAULT_DATA_DIR = "data"
GUILD_CONFIG_FILENAME = "guild-config.json"
MESSAGE_RECORDS_FILENAME = "meta.json"

# Rendering
DEFAULT_TIMEZONE = "UTC"
DEFAULT_TZ_LABEL = "KST"
SCHEDULE_PLACEHOLDER_TEXT = "Initializing schedule…"
EMPTY_SCHEDULE_BODY = "_No upcoming entries._"
EMBED_DESCRIPTION_LIMIT = 4096
REPLY_TEXT_LIMIT = 1900
CATEGORY_GLYPHS = {
    "Birthday": "🎂",
    "Comeback": "🔔",
    "Release": "💿",
    "Event": "📍",
}
