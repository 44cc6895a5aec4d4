"""Command-line interface for the WhatsApp channel adapter."""
