"""FastAPI application entry point.

This module initialises the FastAPI app, configures logging and
registers API routes.  The `uvicorn` ASGI server can point to
``chat_relay.main:app`` to serve the application.
"""

from fastapi import FastAPI
from loguru import logger

from .config.app_config import get_app_config
from .controllers.chat_controller import router as chat_router
from .services.relay_service import RelayService, build_relay_service
from .utils.error_handler import RelayError, relay_exception_handler
from .utils.logger import setup_logging


def create_app(relay_service: RelayService | None = None) -> FastAPI:
    """Create and configure a FastAPI application.

    When ``relay_service`` is omitted it is built from the environment,
    which fails fast if a required credential is missing.
    """
    app_config = get_app_config()
    setup_logging(app_config)

    app = FastAPI(title="Chat Relay", version="0.1.0")

    app.add_exception_handler(RelayError, relay_exception_handler)

    app.state.relay_service = relay_service or build_relay_service()

    app.include_router(chat_router)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        logger.debug("Health check invoked")
        return {"status": "ok"}

    return app


# Create an application instance for ASGI servers
app = create_app()
