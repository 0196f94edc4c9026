"""
Bump Bot Keep-alive Server - FastAPI Entry Point
"""
import time
import traceback
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.logger import setup_logger
from .config import HOST, PORT, LOG_LEVEL
from .routers import status

logger = setup_logger("KeepAlive", "web/keepalive.log")

# Uptime is reported from process start, not from app creation
PROCESS_STARTED_AT = time.monotonic()


def create_app(bot=None, started_at: Optional[float] = None) -> FastAPI:
    """Build the keep-alive app.

    Args:
        bot: The running discord bot, reported on by /health. May be None.
        started_at: ``time.monotonic()`` reading uptime counts from
            (defaults to process start)
    """
    app = FastAPI(
        title="Bump Bot Keep-alive",
        description="Status endpoints for the bump reminder bot",
        version="1.0.0",
        docs_url=None,
        redoc_url=None
    )
    app.state.bot = bot
    app.state.started_at = PROCESS_STARTED_AT if started_at is None else started_at

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global Error: {exc}\n{traceback.format_exc()}")
        return JSONResponse(
            status_code=500,
            content={"message": "Internal Server Error", "detail": str(exc)},
        )

    app.include_router(status.router, tags=["Status"])
    return app


def build_server(app: FastAPI, host: str = HOST, port: Optional[int] = None) -> uvicorn.Server:
    """Uvicorn server that runs on the caller's event loop."""
    config = uvicorn.Config(app, host=host, port=port or PORT, log_level=LOG_LEVEL)
    return uvicorn.Server(config)


if __name__ == "__main__":
    logger.info(f"Starting keep-alive server at http://{HOST}:{PORT}")
    uvicorn.run(create_app(), host=HOST, port=PORT, log_level=LOG_LEVEL)
