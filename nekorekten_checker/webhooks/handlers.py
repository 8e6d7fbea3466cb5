"""Webhook HTTP handlers — FastAPI route for Shopify orders/create.

The handler:
1. Parses the order payload
2. Extracts and normalizes the buyer's phone
3. Looks the phone up in the Nekorekten registry
4. Tags the order in Shopify when the registry has reports
5. Returns 200 in every case

Shopify retries any delivery that is not acknowledged with a 2xx, and
nothing here deduplicates deliveries, so internal failures are logged and
still answered with 200 ("error" instead of "ok").
"""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from nekorekten_checker.clients import OrderTagger, ReportLookupClient
from nekorekten_checker.config import Settings
from nekorekten_checker.phone import extract_phone, normalize_phone

logger = logging.getLogger(__name__)

ORDERS_CREATE_PATH = "/webhooks/orders/create"


async def process_order(
    order: dict,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Run the lookup-and-flag pipeline for one order.

    Returns True when the registry reported a signal for the buyer's phone.
    """
    phone = normalize_phone(extract_phone(order), settings.home_country_code)
    logger.info("Checking order %s in Nekorekten by phone: %s", order.get("id"), phone or "-")

    lookup = await ReportLookupClient(settings, transport=transport).lookup(phone)
    if lookup.error is not None:
        logger.warning("Order %s: registry unavailable, treating as no signal", order.get("id"))

    if not lookup.has_signal:
        logger.info("Order %s: no reports for this phone", order.get("id"))
        return False

    logger.warning("Order %s: registry has reports, flagging order", order.get("id"))
    result = await OrderTagger(settings, transport=transport).add_flag(order)
    if not result.ok:
        logger.warning(
            "Order %s: flag not applied (skipped=%s status=%s)",
            order.get("id"),
            result.skipped,
            result.status_code,
        )
    return True


def register_webhook_routes(app: FastAPI) -> None:
    """Register the orders/create webhook route on the FastAPI app.

    Expects ``app.state.settings`` and ``app.state.transport`` to be set.
    """

    @app.post(ORDERS_CREATE_PATH)
    async def orders_create_webhook(request: Request):
        """Receive Shopify orders/create webhooks."""
        try:
            order = await request.json()
            logger.info("Received order webhook: %s", order.get("id"))
            await process_order(
                order,
                request.app.state.settings,
                transport=request.app.state.transport,
            )
        except Exception:
            logger.exception("orders/create webhook failed")
            return PlainTextResponse("error", status_code=200)

        return PlainTextResponse("ok", status_code=200)

    logger.info("Webhook route registered: %s", ORDERS_CREATE_PATH)
