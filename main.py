import discord
import asyncio
import logging
from discord.ext import commands
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

from configs import settings
from core.logger import setup_logger
from web.main import build_server, create_app

# 1. SETUP LOGGING
setup_logger("Main", "main.log", settings.LOG_LEVEL)
logger = logging.getLogger("Main")

EXTENSIONS = (
    "core.errors",
    "cogs.bump_reminder",
)


# 2. CREATE BOT
class BumpBot(commands.Bot):
    """Single-channel bump reminder bot."""

    async def setup_hook(self):
        for extension in EXTENSIONS:
            try:
                await self.load_extension(extension)
                logger.info(f'Loaded: {extension}')
            except Exception as e:
                logger.error(f'Error loading {extension}: {e}', exc_info=True)

        try:
            synced = await self.tree.sync()
            logger.info(f"[SLASH COMMANDS] Synced {len(synced)} command(s): "
                        f"{', '.join('/' + cmd.name for cmd in synced)}")
        except discord.HTTPException as e:
            logger.error(f"Failed to sync slash commands: {e}")

    async def on_ready(self):
        logger.info(f'✅ Bot is online as {self.user} (ID: {self.user.id})')
        logger.info(f'📡 Monitoring channel: {settings.BUMP_CHANNEL_ID}')
        logger.info(f'🔔 Will mention role: {settings.BUMP_ROLE_ID}')

    async def on_error(self, event_method, *args, **kwargs):
        logger.error(f"Unhandled exception in {event_method}", exc_info=True)


def create_bot() -> BumpBot:
    intents = discord.Intents.default()
    intents.guild_messages = True
    intents.message_content = True
    intents.guild_reactions = True
    return BumpBot(
        command_prefix=settings.COMMAND_PREFIX,
        intents=intents,
        help_command=None,
    )


def check_config() -> bool:
    """Log what is missing before trying to log in."""
    ok = True
    if not settings.DISCORD_BOT_TOKEN:
        logger.error("DISCORD_BOT_TOKEN is not set")
        ok = False
    if not settings.BUMP_CHANNEL_ID:
        logger.error("BUMP_CHANNEL_ID is not set or not a valid ID")
        ok = False
    if not settings.BUMP_ROLE_ID:
        logger.warning("BUMP_ROLE_ID is not set or not a valid ID, reminders will not ping anyone")
    return ok


# Run bot
async def main():
    if not check_config():
        return

    bot = create_bot()
    server = build_server(create_app(bot))

    async with bot:
        # Keep-alive server shares the bot's event loop
        keepalive = asyncio.create_task(server.serve(), name="keepalive")
        logger.info("🌐 Keep-alive server starting")
        try:
            await bot.start(settings.DISCORD_BOT_TOKEN)
        except discord.LoginFailure as e:
            logger.error(f"Login failed: {e}")
        finally:
            server.should_exit = True
            await keepalive


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':
    run()
