"""Inbound Shopify webhooks.

Orders are checked against the Nekorekten registry as they are created.
"""
