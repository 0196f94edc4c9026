from discord.ext import commands


class WrongChannel(commands.CheckFailure):
    """Raised when a command is used outside the monitored channel."""


def ensure_bump_channel(ctx: commands.Context, channel_id: int) -> bool:
    """Check that a prefix command was sent in the bump channel.

    Used from ``cog_check`` since the channel ID is only known at runtime.
    """
    if ctx.channel.id == channel_id:
        return True
    raise WrongChannel(f"Command used outside channel {channel_id}")
