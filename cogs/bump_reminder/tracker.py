"""Bump cycle tracker.

Owns the single in-memory BumpCycle: records bumps, keeps exactly one
reminder timer alive, sends the reminder when the cooldown ends and rebuilds
the cycle from channel history after a restart.
"""

import asyncio
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

import discord
from core.logger import setup_logger

from .constants import (
    COOLDOWN,
    RECONCILE_HISTORY_LIMIT,
    REMINDER_LOOKBACK_LIMIT,
    REMINDER_CONTENT,
)
from .detector import BumpDetector
from .helpers import (
    build_reminder_embed,
    calculate_time_remaining,
    parse_utc_datetime,
    utcnow,
)
from .models import BumpCycle, CooldownStatus, ReconcileOutcome

logger = setup_logger("BumpTracker", "cogs/bump.log")


async def fetch_recent_messages(channel, limit: int) -> List[discord.Message]:
    """Fetch up to ``limit`` messages from ``channel``, newest first."""
    return [message async for message in channel.history(limit=limit)]


class BumpTracker:
    """State machine for the bump cooldown cycle.

    idle --record_bump--> active --timer fires--> reminded --dispatch--> idle

    A new bump while active or reminded restarts the cycle and cancels the
    pending timer, so at most one reminder is ever scheduled.
    """

    def __init__(
        self,
        role_id: int,
        cooldown: timedelta = COOLDOWN,
        detector: Optional[BumpDetector] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.role_id = role_id
        self.cooldown = cooldown
        self.detector = detector or BumpDetector()
        self.clock = clock
        self.cycle = BumpCycle()

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_bump(
        self,
        channel,
        source_message_id: Optional[int] = None,
        bumped_at: Optional[datetime] = None,
    ) -> bool:
        """Start a new cycle and schedule its reminder.

        Args:
            channel: Channel the reminder will be posted to
            source_message_id: Triggering message, used to drop duplicates
            bumped_at: When the bump happened (defaults to now)

        Returns:
            False if the message was already recorded, True otherwise
        """
        if source_message_id is not None and source_message_id == self.cycle.last_bump_message_id:
            logger.debug(f"[BUMP_RECORD] Message {source_message_id} already recorded, ignoring")
            return False

        bumped_at = parse_utc_datetime(bumped_at) or self.clock()
        self.cycle.start(bumped_at, source_message_id)

        remaining = self.cycle.time_remaining(self.clock(), self.cooldown)
        self.schedule_reminder(channel, remaining.total_seconds())

        hours, minutes = calculate_time_remaining(remaining.total_seconds())
        logger.info(
            f"[BUMP_RECORD] Bump recorded at {bumped_at.isoformat()} "
            f"(message: {source_message_id}), reminder in {hours}h {minutes}m"
        )
        return True

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def schedule_reminder(self, channel, delay: float) -> asyncio.Task:
        """Replace the pending timer with one firing after ``delay`` seconds."""
        self.cancel_reminder()
        timer = asyncio.create_task(self._remind_after(channel, max(delay, 0.0)), name="bump-reminder")
        self.cycle.pending_timer = timer
        return timer

    def cancel_reminder(self) -> bool:
        """Cancel the pending timer.

        Returns:
            True if a live timer was cancelled
        """
        timer = self.cycle.pending_timer
        self.cycle.pending_timer = None
        if timer is None or timer.done():
            return False
        # A dispatch running inside the timer must not cancel itself
        if timer is asyncio.current_task():
            return False
        timer.cancel()
        logger.debug("[BUMP_TIMER] Pending reminder cancelled")
        return True

    async def _remind_after(self, channel, delay: float) -> None:
        await asyncio.sleep(delay)
        await self.dispatch_reminder(channel)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch_reminder(self, channel) -> bool:
        """Send the reminder for the current cycle, once.

        Returns:
            True if a reminder was sent
        """
        if self.cycle.reminder_sent:
            logger.info("[BUMP_REMINDER] Reminder already sent for this cycle, skipping")
            return False

        sending_for = (self.cycle.last_bump_time, self.cycle.last_bump_message_id)
        embed = build_reminder_embed(channel.mention)
        content = REMINDER_CONTENT.format(role_id=self.role_id)

        try:
            await channel.send(content=content, embed=embed)
        except discord.Forbidden as forbidden_error:
            logger.error(
                f"[BUMP_FAILED] Forbidden to send reminder in channel {channel.id}: {forbidden_error}. "
                f"Check bot role permissions.",
                exc_info=True
            )
            return False
        except discord.HTTPException as http_error:
            logger.error(
                f"[BUMP_FAILED] HTTP error when sending reminder to channel {channel.id}: {http_error}",
                exc_info=True
            )
            return False
        except Exception as send_error:
            logger.error(
                f"[BUMP_FAILED] Unexpected error sending reminder: {send_error}",
                exc_info=True
            )
            return False

        logger.info(f"[BUMP_SENT] Reminder sent to channel {channel.id}")

        # A bump recorded while the send was in flight owns the cycle now
        if (self.cycle.last_bump_time, self.cycle.last_bump_message_id) != sending_for:
            logger.info("[BUMP_SENT] New bump recorded during send, keeping its cycle")
            return True

        self.cycle.mark_reminded()
        self.cancel_reminder()
        self.cycle.reset()
        return True

    # ------------------------------------------------------------------
    # Startup reconciliation
    # ------------------------------------------------------------------

    async def reconcile_on_startup(
        self,
        channel,
        bot_user_id: int,
        recent_messages: Optional[Sequence[discord.Message]] = None,
    ) -> ReconcileOutcome:
        """Rebuild the cycle from recent channel history.

        The newest completion message from a known integration decides the
        outcome: still inside the cooldown resumes the timer for what is
        left; past it sends a reminder unless one of our reminders is
        already among the last few messages.

        Args:
            channel: The monitored channel
            bot_user_id: This bot's user ID, to recognise its own reminders
            recent_messages: Newest-first history; fetched when omitted
        """
        if recent_messages is None:
            try:
                recent_messages = await fetch_recent_messages(channel, RECONCILE_HISTORY_LIMIT)
            except Exception as fetch_error:
                logger.error(
                    f"[BUMP_RECONCILE] Failed to fetch history from channel {channel.id}: {fetch_error}",
                    exc_info=True
                )
                return ReconcileOutcome.FAILED

        window = list(recent_messages)[:RECONCILE_HISTORY_LIMIT]
        bump_message = self.detector.find_latest_bump(window)
        if bump_message is None:
            logger.info(
                f"[BUMP_RECONCILE] No bump confirmation in the last {len(window)} messages, staying idle"
            )
            return ReconcileOutcome.NO_BUMP_FOUND

        bumped_at = parse_utc_datetime(bump_message.created_at)
        elapsed = self.clock() - bumped_at

        if elapsed < self.cooldown:
            self.record_bump(channel, bump_message.id, bumped_at)
            logger.info(
                f"[BUMP_RECONCILE] Resumed cycle from message {bump_message.id} "
                f"({int(elapsed.total_seconds() // 60)}m ago)"
            )
            return ReconcileOutcome.RESUMED

        self.cancel_reminder()
        self.cycle.start(bumped_at, bump_message.id)

        lookback = window[:REMINDER_LOOKBACK_LIMIT]
        if any(self.detector.is_reminder_message(message, bot_user_id) for message in lookback):
            self.cycle.mark_reminded()
            logger.info(
                f"[BUMP_RECONCILE] Cooldown expired and a reminder is already in the last "
                f"{len(lookback)} messages, not re-sending"
            )
            return ReconcileOutcome.ALREADY_REMINDED

        logger.info("[BUMP_RECONCILE] Cooldown expired with no reminder found, sending one now")
        if await self.dispatch_reminder(channel):
            return ReconcileOutcome.REMINDER_SENT
        return ReconcileOutcome.FAILED

    # ------------------------------------------------------------------
    # Queries / lifecycle
    # ------------------------------------------------------------------

    def status(self) -> Tuple[CooldownStatus, Optional[datetime]]:
        """Cooldown status and the time the next bump becomes available."""
        next_bump = self.cycle.next_bump_at(self.cooldown)
        if next_bump is None:
            return CooldownStatus.NO_BUMP, None
        if next_bump <= self.clock():
            return CooldownStatus.READY, next_bump
        return CooldownStatus.COOLDOWN, next_bump

    def time_remaining(self) -> Optional[timedelta]:
        return self.cycle.time_remaining(self.clock(), self.cooldown)

    def shutdown(self) -> None:
        if self.cancel_reminder():
            logger.info("[BUMP_TIMER] Pending reminder cancelled on shutdown")
