from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RuntimeBootDeps:
    bot_name: str
    sync_command_tree: bool
    version: str
