"""Webhook request verification (signature and subscription handshake)."""
