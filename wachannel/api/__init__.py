"""HTTP surface of the WhatsApp channel adapter."""
