"""
Pytest configuration and fixtures for the bump bot test suite.

This module provides:
- Discord.py object mocks (bot, user, channel, interaction, context)
- A message factory and async history iterator
- A tracker fixture on a frozen clock

Log files are written to a temporary directory so tests never touch ./logs.
"""
import asyncio
import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "bump-bot-test-logs"))

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cogs.bump_reminder.tracker import BumpTracker  # noqa: E402

CHANNEL_ID = 333333333
ROLE_ID = 444444444
BOT_USER_ID = 123456789
INTEGRATION_ID = 716390085896962058


# =============================================================================
# Helpers
# =============================================================================

class AsyncIterator:
    """Minimal stand-in for the iterator returned by ``channel.history``."""

    def __init__(self, items):
        self._items = list(items)

    def __aiter__(self):
        self._iter = iter(self._items)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


def make_author(author_id: int, bot: bool):
    author = MagicMock()
    author.id = author_id
    author.bot = bot
    author.mention = f"<@{author_id}>"
    return author


# =============================================================================
# Clock
# =============================================================================

@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Discord.py Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_bot():
    """Create a mock Discord bot instance."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = BOT_USER_ID
    bot.user.name = "BumpBot"
    bot.guilds = []
    bot.is_closed = MagicMock(return_value=False)
    bot.fetch_channel = AsyncMock()
    return bot


@pytest.fixture
def mock_user():
    """Create a mock Discord user."""
    user = make_author(222222222, bot=False)
    user.name = "TestUser"
    user.display_name = "Test User"
    return user


@pytest.fixture
def mock_channel():
    """Create a mock bump channel with an empty history."""
    channel = MagicMock()
    channel.id = CHANNEL_ID
    channel.mention = f"<#{CHANNEL_ID}>"
    channel.send = AsyncMock()
    channel.messages = []
    channel.history = MagicMock(
        side_effect=lambda limit=100: AsyncIterator(channel.messages[:limit])
    )
    return channel


@pytest.fixture
def mock_interaction(mock_user, mock_channel):
    """Create a mock Discord interaction in the bump channel."""
    interaction = MagicMock()
    interaction.user = mock_user
    interaction.channel = mock_channel
    interaction.channel_id = mock_channel.id
    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock()
    return interaction


@pytest.fixture
def mock_ctx(mock_user, mock_channel):
    """Create a mock prefix command context in the bump channel."""
    ctx = MagicMock()
    ctx.author = mock_user
    ctx.channel = mock_channel
    ctx.command = None
    ctx.message = MagicMock()
    ctx.message.content = "!cooldown"
    ctx.send = AsyncMock()
    ctx.reply = AsyncMock()
    return ctx


@pytest.fixture
def make_message(fixed_now):
    """Factory fixture building history messages.

    ``minutes_ago`` is relative to the frozen clock.
    """
    counter = iter(range(1_000_000, 2_000_000))

    def _make(
        author_id: int = INTEGRATION_ID,
        bot: bool = True,
        content: str = "",
        embeds=None,
        minutes_ago: float = 0,
    ):
        message = MagicMock()
        message.id = next(counter)
        message.author = make_author(author_id, bot)
        message.content = content
        message.embeds = embeds or []
        message.created_at = fixed_now - timedelta(minutes=minutes_ago)
        message.channel = MagicMock()
        message.channel.id = CHANNEL_ID
        return message

    return _make


# =============================================================================
# Tracker
# =============================================================================

@pytest_asyncio.fixture
async def tracker(fixed_now):
    """Tracker on a frozen clock; pending timers are cancelled afterwards."""
    tracker = BumpTracker(role_id=ROLE_ID, clock=lambda: fixed_now)
    yield tracker
    tracker.shutdown()


@pytest.fixture
def blocking_send(mock_channel):
    """Make ``mock_channel.send`` wait until released.

    Returns ``(started, release)`` events: ``started`` is set once the send is
    in flight, setting ``release`` lets it complete.
    """
    started = asyncio.Event()
    release = asyncio.Event()

    async def _send(*args, **kwargs):
        started.set()
        await release.wait()

    mock_channel.send.side_effect = _send
    return started, release
