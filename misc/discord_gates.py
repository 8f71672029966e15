from __future__ import annotations


def interaction_in_guild(interaction) -> bool:
    return getattr(interaction, "guild_id", None) is not None


def interaction_in_staff_channel(interaction, staff_channel_id) -> bool:
    # Exact channel match only; threads under the staff channel do not count.
    if not staff_channel_id:
        return False
    channel_id = getattr(interaction, "channel_id", None)
    if channel_id is None:
        return False
    return str(channel_id) == str(staff_channel_id).strip()
