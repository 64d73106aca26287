# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from clickhub.logging import logger
from clickhub.managers.connection_registry import connection_registry
from clickhub.managers.counter_state import counter_state
from clickhub.routing import collect_subrouters

__version__ = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application startup and shutdown handler.

    Counters live in memory only, so shutdown just reports the final state;
    open sessions are not drained.
    """
    logger.info("Application startup initiated")
    logger.info(
        f"Click Hub {__version__} on Python "
        f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    )
    yield
    logger.info(
        f"Application shutdown initiated with {len(connection_registry)} "
        f"open connections, total clicks {counter_state.current_total()}"
    )


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Routers are collected from `clickhub.api.http` (health, metrics) and
    `clickhub.api.ws.consumers` (the click counter WebSocket endpoint).
    """
    app = FastAPI(
        title="Click Hub",
        description="Real-time shared click counter over WebSocket",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(collect_subrouters())

    return app
