"""Nekorekten registry client — phone lookup against the abuse-report API.

Failure contract:
- Empty phone -> no request, no signal
- Transport errors, non-2xx responses and undecodable bodies are captured
  in LookupResult.error, never raised
- Any failure means "no signal" (fail-open: order flow is never blocked)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from nekorekten_checker.config import Settings

logger = logging.getLogger(__name__)

REPORTS_PATH = "/api/v1/reports"


@dataclass
class LookupResult:
    """Outcome of a single registry lookup."""

    has_signal: bool
    raw: Any = None
    error: Exception | None = None


def classify_response(data: Any) -> bool:
    """Decide whether a registry response carries any reports.

    The registry has answered both with a bare list and with an envelope
    ``{"items": [...], "count": N}``. Checks run in this order:

    1. bare list -> non-empty
    2. ``items`` list -> non-empty
    3. numeric ``count`` -> greater than zero
    """
    if isinstance(data, list):
        return len(data) > 0
    if not isinstance(data, dict):
        return False

    items = data.get("items")
    if isinstance(items, list):
        return len(items) > 0

    count = data.get("count")
    if isinstance(count, (int, float)) and not isinstance(count, bool):
        return count > 0

    return False


def _summarize(data: Any) -> tuple[Any, Any]:
    """Return (count, items length) for the result log line."""
    if not isinstance(data, dict):
        return "n/a", len(data) if isinstance(data, list) else "n/a"
    items = data.get("items")
    return data.get("count"), len(items) if isinstance(items, list) else "n/a"


def _describe_failure(exc: Exception) -> tuple[int | None, str]:
    """Extract HTTP status and body (or message) from a failed call."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code, exc.response.text
    return None, str(exc) or type(exc).__name__


class ReportLookupClient:
    """Queries the Nekorekten reports endpoint by phone number."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._settings.nekorekten_api_url.rstrip("/") + REPORTS_PATH

    async def lookup(self, phone: str) -> LookupResult:
        """Look up a normalized phone number in the registry."""
        if not phone:
            logger.info("Nekorekten: no phone on order, skipping lookup")
            return LookupResult(has_signal=False, raw=None)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._settings.http_timeout_seconds,
            ) as client:
                response = await client.get(
                    self.endpoint,
                    headers={"Api-Key": self._settings.nekorekten_api_key},
                    params={
                        "phone": phone,
                        "searchMode": self._settings.nekorekten_search_mode,
                    },
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            status, detail = _describe_failure(e)
            logger.error("Nekorekten lookup failed: status=%s detail=%s", status, detail)
            return LookupResult(has_signal=False, error=e)

        has_signal = classify_response(data)
        count, items_len = _summarize(data)
        logger.info(
            "Nekorekten result for %s: count=%s items=%s signal=%s",
            phone,
            count,
            items_len,
            has_signal,
        )
        logger.debug("Nekorekten raw: %s", json.dumps(data, ensure_ascii=False))

        return LookupResult(has_signal=has_signal, raw=data)
