"""Bump reminder constants and configuration.

All constants used by the bump reminder system.
"""

import re
from datetime import timedelta

# Timing constants
COOLDOWN_MINUTES = 120
COOLDOWN = timedelta(minutes=COOLDOWN_MINUTES)

# History windows scanned on startup
RECONCILE_HISTORY_LIMIT = 50
REMINDER_LOOKBACK_LIMIT = 10

# Known bump integrations (bot user IDs)
DISBOARD_BOT_ID = 302050872383242240
BUMP_BOT_IDS = frozenset({
    DISBOARD_BOT_ID,
    716390085896962058,
})

# Completion phrases posted by the integrations after a successful bump.
# Matched case-insensitively against content, embed title/description and fields.
BUMP_CONFIRM_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"bump done",
        r"bumped successfully",
        r"server bumped",
        r":thumbsup:",
        r"👍",
    )
]

# Embed texts
REMINDER_TITLE = "🔔 Bump Reminder!"
REMINDER_CONTENT = "<@&{role_id}> Time to bump! 🚀"
REMINDER_GIF_URL = "https://media.giphy.com/media/3o7abKhOpu0NwenH3O/giphy.gif"
REMINDER_FOOTER = "Don't forget to bump! 🚀"
CONFIRM_FOOTER = "Bump Cooldown Tracker"
HELP_FOOTER = "Bump Bot v1.0"

# Embed colours
COLOR_CONFIRM = 0x00FF00
COLOR_REMINDER = 0xFF6B35
COLOR_NO_BUMP = 0xFFA500
COLOR_READY = 0x00FF00
COLOR_COOLDOWN = 0xFF4444
COLOR_HELP = 0x4A90E2
