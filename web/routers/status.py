"""
Keep-alive Router
Lightweight status endpoints polled by the hosting platform to keep the bot awake.
"""
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
async def root(request: Request) -> Dict[str, Any]:
    """Uptime check."""
    return {
        "status": "Bot is running!",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    """Gateway connectivity check."""
    bot = request.app.state.bot
    connected = bot is not None and bot.user is not None and not bot.is_closed()
    return {
        "status": "healthy",
        "bot": "connected" if connected else "disconnected",
        "guilds": len(bot.guilds) if bot is not None else 0
    }
