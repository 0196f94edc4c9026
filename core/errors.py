import discord
from discord import app_commands
from discord.ext import commands
from core.checks import WrongChannel
from core.logger import setup_logger

logger = setup_logger("ErrorHandler", "core/errors.log")


class ErrorHandler(commands.Cog):
    """Global Error Handler to catch and process command errors.

    Nothing here is surfaced to users: unknown commands and commands used in
    the wrong channel are dropped, everything else is logged.
    """

    def __init__(self, bot):
        self.bot = bot
        self._previous_tree_error = None

    async def cog_load(self):
        self._previous_tree_error = self.bot.tree.on_error
        self.bot.tree.on_error = self.on_app_command_error

    async def cog_unload(self):
        if self._previous_tree_error is not None:
            self.bot.tree.on_error = self._previous_tree_error

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError):
        """The event triggered when an error is raised while invoking a command."""

        # If command has its own error handler, ignore global one
        if ctx.command is not None and ctx.command.has_error_handler():
            return

        # Get original error if it exists
        error = getattr(error, 'original', error)

        # 1. IGNORED ERRORS (Normal operation)
        if isinstance(error, (commands.CommandNotFound, WrongChannel)):
            logger.debug(f"Ignored command input from {ctx.author}: {ctx.message.content[:50]!r}")
            return

        # 2. INPUT ERRORS (Malformed usage, ignored silently)
        if isinstance(error, commands.UserInputError):
            logger.info(f"Bad input for command {ctx.command} by {ctx.author}: {error}")
            return

        # 3. UNHANDLED SYSTEM ERRORS (Log only)
        logger.error(f'Ignoring exception in command {ctx.command}:', exc_info=error)

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Tree-level handler for slash command failures."""
        command = interaction.command.name if interaction.command else "unknown"
        error = getattr(error, 'original', error)
        logger.error(f'Ignoring exception in slash command /{command}:', exc_info=error)


async def setup(bot):
    await bot.add_cog(ErrorHandler(bot))
