"""
Server loop.

uvicorn owns the accept loop: it binds the listening socket, runs every
accepted connection in its own task and stops accepting on SIGINT/SIGTERM.
A bind failure (e.g. port already in use) makes uvicorn exit with a
non-zero status; a signal-triggered shutdown exits normally.
"""

import uvicorn

from clickhub.logging import logger
from clickhub.settings import app_settings


def build_config(
    host: str | None = None, port: int | None = None
) -> uvicorn.Config:
    """
    uvicorn configuration for the click hub.

    Args:
        host: Bind address, defaults to `HOST` from settings.
        port: Bind port, defaults to `PORT` from settings.
    """
    return uvicorn.Config(
        "clickhub:application",
        factory=True,
        host=host if host is not None else app_settings.HOST,
        port=port if port is not None else app_settings.PORT,
        # Logging is configured by clickhub.logging
        log_config=None,
        timeout_graceful_shutdown=app_settings.SHUTDOWN_TIMEOUT_SECONDS,
    )


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Serve until a shutdown signal is received."""
    config = build_config(host, port)
    logger.info(
        f"Click Counter Server running at ws://{config.host}:{config.port}"
    )
    logger.info("Press Ctrl+C to shutdown the server.")
    uvicorn.Server(config).run()
    logger.info("Server stopped")
