"""Shared fixtures for the Nekorekten checker test suite."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from nekorekten_checker.config import Settings

REGISTRY_HOST = "api.nekorekten.com"
STORE_DOMAIN = "test-store.myshopify.com"


class FakeServices:
    """httpx transport standing in for both the registry and Shopify.

    Every request is recorded. Registry responses come from
    ``registry_response`` (a JSON value, or an exception to raise);
    Shopify answers ``shopify_status``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.registry_response: Any = {"items": [], "count": 0}
        self.registry_status = 200
        self.shopify_status = 200

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == REGISTRY_HOST:
            if isinstance(self.registry_response, Exception):
                raise self.registry_response
            return httpx.Response(self.registry_status, json=self.registry_response)
        if request.url.host == STORE_DOMAIN:
            return httpx.Response(self.shopify_status, json={"order": {}})
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def calls_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @property
    def registry_calls(self) -> list[httpx.Request]:
        return self.calls_to(REGISTRY_HOST)

    @property
    def shopify_calls(self) -> list[httpx.Request]:
        return self.calls_to(STORE_DOMAIN)


@pytest.fixture()
def settings() -> Settings:
    """Fully configured settings, isolated from any local .env file."""
    return Settings(
        _env_file=None,
        nekorekten_api_key="nk-test-key",
        shopify_store_domain=STORE_DOMAIN,
        shopify_admin_token="shpat_test",
        http_timeout_seconds=2.0,
    )


@pytest.fixture()
def fake_services() -> FakeServices:
    return FakeServices()


@pytest.fixture()
def make_order() -> Callable[..., dict]:
    """Build a minimal orders/create payload."""

    def _make(phone: str | None = None, tags: str = "", order_id: int = 5551001) -> dict:
        order: dict[str, Any] = {"id": order_id, "tags": tags}
        if phone is not None:
            order["customer"] = {"phone": phone}
        return order

    return _make
