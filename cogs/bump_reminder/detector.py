"""Bump integration detection module.

Recognises completion messages posted by third-party bump bots and the
reminder embeds this bot posted itself. Matching is phrase based and will
break if an integration changes its wording.
"""

from typing import Iterable, Iterator, Optional

import discord
from core.logger import setup_logger

from .constants import BUMP_BOT_IDS, BUMP_CONFIRM_PATTERNS, REMINDER_TITLE

logger = setup_logger("BumpDetector", "cogs/bump.log")


def _message_texts(message: discord.Message) -> Iterator[str]:
    """Yield every piece of text a completion phrase could appear in."""
    if message.content:
        yield message.content
    for embed in message.embeds or ():
        if embed.title:
            yield embed.title
        if embed.description:
            yield embed.description
        for field in embed.fields or ():
            if field.name:
                yield field.name
            if field.value:
                yield field.value


class BumpDetector:
    """Detects bump completion messages from known integrations.

    Security features:
    - Author ID must be one of the known integration IDs
    - Author must be a bot (user accounts copying the ID are rejected)
    """

    def __init__(self, bot_ids: Iterable[int] = BUMP_BOT_IDS, patterns=BUMP_CONFIRM_PATTERNS):
        self.bot_ids = frozenset(bot_ids)
        self.patterns = list(patterns)

    def is_bump_confirmation(self, message: discord.Message) -> bool:
        """Check if message is a bump completion from a known integration.

        Args:
            message: Discord message to check

        Returns:
            True if the author is a known integration and any text matches
        """
        if message.author.id not in self.bot_ids:
            return False

        if not message.author.bot:
            logger.warning(
                f"[BUMP_DETECT] Message {message.id} from user ID {message.author.id} "
                f"impersonating a bump integration (not a bot)"
            )
            return False

        for text in _message_texts(message):
            if any(pattern.search(text) for pattern in self.patterns):
                logger.debug(f"[BUMP_DETECT] Detected bump in message {message.id}: {text[:100]}")
                return True

        logger.debug(f"[BUMP_DETECT] Integration message {message.id} is not a bump confirmation")
        return False

    def find_latest_bump(self, messages: Iterable[discord.Message]) -> Optional[discord.Message]:
        """Return the first match in newest-first order."""
        for message in messages:
            if self.is_bump_confirmation(message):
                return message
        return None

    @staticmethod
    def is_reminder_message(message: discord.Message, bot_user_id: int) -> bool:
        """True when ``message`` is a reminder previously posted by this bot."""
        if message.author.id != bot_user_id:
            return False
        return any(embed.title == REMINDER_TITLE for embed in message.embeds or ())
