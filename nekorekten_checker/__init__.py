"""Nekorekten order checker.

Receives Shopify orders/create webhooks, checks the buyer's phone against the
Nekorekten report registry and tags reported orders for manual review.
"""

__version__ = "0.1.0"
