from __future__ import annotations

from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates
from misc.commands.commands_schedule import register as register_schedule
from misc.discord_gates import interaction_in_guild
from misc.discord_gates import interaction_in_staff_channel
from misc.events_runtime import register_runtime_events
from misc.runtime_deps import RuntimeBootDeps


def wire_bot_runtime(
    bot,
    *,
    schedule_service,
    bot_name: str = "Caltrix",
    version: str = "",
    sync_command_tree: bool = True,
) -> None:
    command_deps = CommandDeps(
        schedule_service=schedule_service,
    )
    command_gates = CommandGates(
        in_guild=interaction_in_guild,
        in_staff_channel=interaction_in_staff_channel,
    )

    register_schedule(
        bot,
        deps=command_deps,
        gates=command_gates,
    )

    register_runtime_events(
        bot,
        boot=RuntimeBootDeps(
            bot_name=bot_name,
            sync_command_tree=sync_command_tree,
            version=version,
        ),
    )
