"""Etsy API access: OAuth 1.0a request signing and credential exchange."""
