"""Shopify Admin REST client — merges the review flag into an order's tags.

Failure contract:
- Missing store domain or admin token -> logged, no request, skipped result
- Transport errors and non-2xx responses are captured in
  TagUpdateResult.error, never raised, never retried
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from nekorekten_checker.config import Settings

logger = logging.getLogger(__name__)

TAG_SEPARATOR = ", "


@dataclass
class TagUpdateResult:
    """Outcome of a single order tag update."""

    ok: bool
    tags: str = ""
    status_code: int | None = None
    error: Exception | None = None
    skipped: bool = False


def merge_tags(existing: Any, flag: str) -> str:
    """Add ``flag`` to a comma-separated Shopify tag string.

    Tags are trimmed and empty entries dropped. The flag is appended only
    if no tag already matches it case-insensitively, so merging twice
    yields the same string. A list of tags is accepted as well; any other
    non-string value counts as no tags.
    """
    if isinstance(existing, str):
        raw = existing.split(",")
    elif isinstance(existing, (list, tuple)):
        raw = [t for t in existing if isinstance(t, str)]
    else:
        raw = []
    tags = [t.strip() for t in raw]
    tags = [t for t in tags if t]

    if flag.lower() not in {t.lower() for t in tags}:
        tags.append(flag)

    return TAG_SEPARATOR.join(tags)


class OrderTagger:
    """Writes the review flag onto Shopify orders."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def order_url(self, order_id: Any) -> str:
        s = self._settings
        return (
            f"https://{s.shopify_store_domain}/admin/api/"
            f"{s.shopify_api_version}/orders/{order_id}.json"
        )

    async def add_flag(self, order: Mapping[str, Any]) -> TagUpdateResult:
        """Merge the flag tag into the order and PUT it back to Shopify."""
        if not self._settings.shopify_configured:
            logger.error("SHOPIFY_STORE_DOMAIN or SHOPIFY_ADMIN_TOKEN is not set; cannot tag orders")
            return TagUpdateResult(ok=False, skipped=True)

        order_id = order.get("id")
        tags = merge_tags(order.get("tags"), self._settings.flag_tag)
        body = {"order": {"id": order_id, "tags": tags}}

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._settings.http_timeout_seconds,
            ) as client:
                response = await client.put(
                    self.order_url(order_id),
                    json=body,
                    headers={
                        "X-Shopify-Access-Token": self._settings.shopify_admin_token,
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Shopify tag update failed for order %s: status=%s body=%s",
                order_id,
                e.response.status_code,
                e.response.text,
            )
            return TagUpdateResult(
                ok=False, tags=tags, status_code=e.response.status_code, error=e
            )
        except httpx.HTTPError as e:
            logger.error("Shopify tag update failed for order %s: %s", order_id, e)
            return TagUpdateResult(ok=False, tags=tags, error=e)

        logger.info("Added tag %r to order %s", self._settings.flag_tag, order_id)
        return TagUpdateResult(ok=True, tags=tags, status_code=response.status_code)
