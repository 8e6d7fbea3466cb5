"""FastAPI application for the Nekorekten order checker.

Routes:
- GET /                         liveness check
- POST /webhooks/orders/create  Shopify order webhook
"""

from __future__ import annotations

import logging
import time

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from nekorekten_checker.config import Settings, configure_logging, load_settings
from nekorekten_checker.webhooks.handlers import register_webhook_routes

logger = logging.getLogger(__name__)

HEALTH_TEXT = "Nekorekten Shopify checker is running"


def _warn_on_missing_config(settings: Settings) -> None:
    if not settings.nekorekten_api_key:
        logger.warning("NEKOREKTEN_API_KEY is not set; registry lookups will be rejected")
    if not settings.shopify_configured:
        logger.warning(
            "SHOPIFY_STORE_DOMAIN or SHOPIFY_ADMIN_TOKEN is not set; flagged orders will not be tagged"
        )


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the app. ``transport`` replaces the network for outbound calls."""
    settings = settings or load_settings()
    _warn_on_missing_config(settings)

    app = FastAPI(title="Nekorekten Shopify Checker")
    app.state.settings = settings
    app.state.transport = transport

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        elapsed_ms = (time.time() - start) * 1000
        logger.info(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.get("/", response_class=PlainTextResponse)
    async def health():
        return HEALTH_TEXT

    register_webhook_routes(app)
    return app


def main() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("App listening on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
