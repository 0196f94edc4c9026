"""Bump Reminder Package.

Bump cooldown tracking for a single channel with automatic detection,
one-shot reminders and history-based recovery after a restart.

Components:
- detector: Recognises bump integration completion messages
- tracker: Bump cycle state machine and reminder timer
- models: Data models for the bump cycle
- helpers: Embed builders and datetime helpers
- constants: Configuration values
"""

from .cog import BumpReminderCog


async def setup(bot):
    """Load the Bump Reminder cog.

    Args:
        bot: Discord bot instance
    """
    await bot.add_cog(BumpReminderCog(bot))
