"""Bump reminder data models.

Data classes for managing bump cycle state.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class CycleState(Enum):
    """Lifecycle of a single bump cycle."""
    IDLE = "idle"
    ACTIVE = "active"
    REMINDED = "reminded"


class CooldownStatus(Enum):
    """Answer to "can we bump yet?" as shown by !cooldown."""
    NO_BUMP = "no_bump"
    READY = "ready"
    COOLDOWN = "cooldown"


class ReconcileOutcome(Enum):
    """Result of the startup history scan."""
    NO_BUMP_FOUND = "no_bump_found"
    RESUMED = "resumed"
    REMINDER_SENT = "reminder_sent"
    ALREADY_REMINDED = "already_reminded"
    FAILED = "failed"


@dataclass
class BumpCycle:
    """In-memory record of the current bump cycle.

    Attributes:
        last_bump_time: UTC datetime of the bump that started this cycle
        reminder_sent: True once a reminder was dispatched for this cycle
        last_bump_message_id: ID of the message that triggered the bump
        pending_timer: Scheduled reminder task, owned by the tracker
    """
    last_bump_time: Optional[datetime] = None
    reminder_sent: bool = False
    last_bump_message_id: Optional[int] = None
    pending_timer: Optional[asyncio.Task] = None

    @property
    def state(self) -> CycleState:
        if self.last_bump_time is None:
            return CycleState.IDLE
        if self.reminder_sent:
            return CycleState.REMINDED
        return CycleState.ACTIVE

    @property
    def has_pending_timer(self) -> bool:
        return self.pending_timer is not None and not self.pending_timer.done()

    def start(self, bumped_at: datetime, message_id: Optional[int] = None) -> None:
        """Begin a new cycle at ``bumped_at``."""
        self.last_bump_time = bumped_at
        self.reminder_sent = False
        self.last_bump_message_id = message_id

    def mark_reminded(self) -> None:
        self.reminder_sent = True

    def reset(self) -> None:
        """Return to idle after a reminder went out.

        ``reminder_sent`` is kept so a second dispatch for the same cycle stays a no-op.
        """
        self.last_bump_time = None
        self.pending_timer = None

    def next_bump_at(self, cooldown: timedelta) -> Optional[datetime]:
        if self.last_bump_time is None:
            return None
        return self.last_bump_time + cooldown

    def time_remaining(self, now: datetime, cooldown: timedelta) -> Optional[timedelta]:
        """Remaining cooldown, clamped at zero. None when idle."""
        next_bump = self.next_bump_at(cooldown)
        if next_bump is None:
            return None
        return max(next_bump - now, timedelta(0))
