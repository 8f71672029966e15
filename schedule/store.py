from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from schedule.errors import ConfigurationIncompleteError
from schedule.models import GuildConfig


# Every write loads the whole document, patches one key and writes it all back.
# Nothing here locks; callers serialize through a shared lock.


class JsonFileBackend:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        return raw if isinstance(raw, dict) else {}

    def save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)


class MemoryBackend:
    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = json.loads(json.dumps(data or {}))
        self.save_count = 0

    def load(self) -> dict[str, Any]:
        return json.loads(json.dumps(self.data))

    def save(self, data: dict[str, Any]) -> None:
        self.data = json.loads(json.dumps(data))
        self.save_count += 1


class GuildConfigStore:
    def __init__(self, backend) -> None:
        self.backend = backend

    def get_raw(self, guild_id) -> dict[str, Any] | None:
        raw = self.backend.load().get(str(guild_id))
        return raw if isinstance(raw, dict) else None

    def get(self, guild_id) -> GuildConfig | None:
        raw = self.get_raw(guild_id)
        if raw is None:
            return None
        return GuildConfig.from_dict(str(guild_id), raw)

    def update(self, guild_id, patch: dict[str, Any]) -> GuildConfig:
        """Shallow-merge ``patch`` into the stored config; ``threads`` and ``notion`` merge one level deeper."""
        key = str(guild_id)
        all_cfg = self.backend.load()
        existing = all_cfg.get(key) if isinstance(all_cfg.get(key), dict) else {}
        merged = {**existing, **patch}
        for nested in ("threads", "notion"):
            merged[nested] = {
                **(existing.get(nested) or {}),
                **(patch.get(nested) or {}),
            }
        all_cfg[key] = merged
        self.backend.save(all_cfg)
        return GuildConfig.from_dict(key, merged)

    def require(self, guild_id) -> GuildConfig:
        cfg = self.get(guild_id) or GuildConfig(guild_id=str(guild_id))
        problem = cfg.missing_requirement()
        if problem:
            raise ConfigurationIncompleteError(problem)
        return cfg


def message_record_key(guild_id, scope_key: str) -> str:
    return f"{guild_id}:{scope_key}"


class MessageRecordStore:
    def __init__(self, backend) -> None:
        self.backend = backend

    def get_message_id(self, guild_id, scope_key: str) -> int | None:
        rec = self.backend.load().get(message_record_key(guild_id, scope_key))
        if not isinstance(rec, dict):
            return None
        try:
            return int(rec.get("messageId"))
        except (TypeError, ValueError):
            return None

    def set_message_id(self, guild_id, scope_key: str, message_id: int) -> None:
        meta = self.backend.load()
        meta[message_record_key(guild_id, scope_key)] = {"messageId": str(int(message_id))}
        self.backend.save(meta)
