"""Configuration settings for the bot.

Everything is read once from the environment (or a local .env file) at
process start. The cooldown itself is fixed, see cogs/bump_reminder/constants.py.
"""

import os
from dotenv import load_dotenv
load_dotenv()


def _int_env(name: str, default: int = 0) -> int:
    """Read a Discord snowflake from the environment, 0 when unset or invalid."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Discord credentials
DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")

# The single monitored channel and the role mentioned by reminders
BUMP_CHANNEL_ID = _int_env("BUMP_CHANNEL_ID")
BUMP_ROLE_ID = _int_env("BUMP_ROLE_ID")

# Prefix commands (!cooldown, !help)
COMMAND_PREFIX = "!"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
