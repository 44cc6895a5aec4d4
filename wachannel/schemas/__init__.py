"""
Schemas of the adapter.

- ``schemas.core``: host-neutral enums, outgoing envelopes, normalized inbound messages
- ``schemas.whatsapp``: inbound WhatsApp webhook payloads
"""
