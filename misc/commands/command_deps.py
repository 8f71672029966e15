from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Callable


def _default_false(*args, **kwargs) -> bool:
    return False


@dataclass(frozen=True)
class CommandDeps:
    schedule_service: Any = None


@dataclass(frozen=True)
class CommandGates:
    in_guild: Callable[[Any], bool] = _default_false
    in_staff_channel: Callable[[Any, Any], bool] = _default_false
