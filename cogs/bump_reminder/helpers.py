"""Utility functions for bump reminder system.

Helper functions for datetime handling and embed building.
"""

import discord
from datetime import datetime, timezone
from typing import Optional

from .constants import (
    COOLDOWN_MINUTES,
    REMINDER_TITLE,
    REMINDER_GIF_URL,
    REMINDER_FOOTER,
    CONFIRM_FOOTER,
    HELP_FOOTER,
    COLOR_CONFIRM,
    COLOR_REMINDER,
    COLOR_NO_BUMP,
    COLOR_READY,
    COLOR_COOLDOWN,
    COLOR_HELP,
)


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_utc_datetime(value) -> Optional[datetime]:
    """Normalise a datetime to a timezone-aware UTC datetime.

    discord.py hands out aware datetimes for ``Message.created_at``; naive
    values are assumed to already be in UTC.

    Args:
        value: datetime or None

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    return None


def calculate_time_remaining(total_seconds: float) -> tuple[int, int]:
    """Calculate hours and minutes from total seconds.

    Args:
        total_seconds: Total seconds to convert

    Returns:
        Tuple of (hours, minutes)
    """
    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    return hours, minutes


def build_confirmation_embed(bumped_by, next_bump_at: datetime) -> discord.Embed:
    """Embed posted after a /bump is recorded."""
    embed = discord.Embed(
        title="✅ Bump Detected!",
        description="Server has been bumped successfully!",
        color=COLOR_CONFIRM,
        timestamp=utcnow(),
    )
    embed.add_field(
        name="⏰ Next Bump Available",
        value=discord.utils.format_dt(next_bump_at, style="R"),
        inline=True,
    )
    embed.add_field(name="👤 Bumped By", value=f"{bumped_by}", inline=True)
    embed.set_footer(text=CONFIRM_FOOTER)
    return embed


def build_reminder_embed(channel_mention: str) -> discord.Embed:
    """Build the bump reminder embed message.

    The title doubles as the marker the startup scan looks for, so it must
    stay in sync with REMINDER_TITLE.

    Args:
        channel_mention: Mention of the channel the reminder is posted to

    Returns:
        Configured Discord embed ready to send
    """
    embed = discord.Embed(
        title=REMINDER_TITLE,
        description="It's time to bump the server again!",
        color=COLOR_REMINDER,
        timestamp=utcnow(),
    )
    embed.add_field(name="📝 How to Bump", value="Use `/bump` command to bump the server", inline=False)
    embed.add_field(name="⏱️ Cooldown", value=f"{COOLDOWN_MINUTES} minutes from last bump", inline=True)
    embed.add_field(name="📍 Channel", value=channel_mention, inline=True)
    embed.set_image(url=REMINDER_GIF_URL)
    embed.set_footer(text=REMINDER_FOOTER)
    return embed


def build_no_bump_embed() -> discord.Embed:
    embed = discord.Embed(
        title="⚠️ No Recent Bump",
        description="No bump command has been detected yet.",
        color=COLOR_NO_BUMP,
        timestamp=utcnow(),
    )
    embed.add_field(name="📝 Next Step", value="Use `/bump` to start the cooldown timer", inline=False)
    return embed


def build_ready_embed() -> discord.Embed:
    embed = discord.Embed(
        title="✅ Bump Available!",
        description="The server is ready to be bumped again!",
        color=COLOR_READY,
        timestamp=utcnow(),
    )
    embed.add_field(name="📝 Action", value="Use `/bump` command now", inline=False)
    return embed


def build_cooldown_embed(next_bump_at: datetime) -> discord.Embed:
    embed = discord.Embed(
        title="⏰ Bump Cooldown Active",
        description="The server is still on cooldown.",
        color=COLOR_COOLDOWN,
        timestamp=utcnow(),
    )
    embed.add_field(
        name="⏱️ Time Remaining",
        value=discord.utils.format_dt(next_bump_at, style="R"),
        inline=True,
    )
    embed.add_field(
        name="🕐 Available At",
        value=discord.utils.format_dt(next_bump_at, style="F"),
        inline=True,
    )
    return embed


def build_help_embed(channel_id: int) -> discord.Embed:
    embed = discord.Embed(
        title="🤖 Bump Bot Help",
        description="Here are the available commands and features:",
        color=COLOR_HELP,
        timestamp=utcnow(),
    )
    embed.add_field(name="🚀 `/bump`", value="Bump the server (slash command)", inline=False)
    embed.add_field(name="⏰ `!cooldown`", value="Check remaining cooldown time", inline=False)
    embed.add_field(name="❓ `!help`", value="Show this help message", inline=False)
    embed.add_field(
        name="🔄 **Auto Features**",
        value=(
            "• Automatic bump detection\n"
            f"• {COOLDOWN_MINUTES}-minute cooldown tracking\n"
            "• Reminder notifications"
        ),
        inline=False,
    )
    embed.add_field(name="📍 **Channel**", value=f"This bot only works in <#{channel_id}>", inline=False)
    embed.set_footer(text=HELP_FOOTER)
    return embed
