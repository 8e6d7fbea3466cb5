"""Outbound HTTP clients: Nekorekten registry lookup and Shopify order tagging."""

from nekorekten_checker.clients.nekorekten import LookupResult, ReportLookupClient
from nekorekten_checker.clients.shopify import OrderTagger, TagUpdateResult

__all__ = [
    "LookupResult",
    "OrderTagger",
    "ReportLookupClient",
    "TagUpdateResult",
]
