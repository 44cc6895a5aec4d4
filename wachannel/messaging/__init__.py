"""
Outbound messaging components.

Usage:
    from wachannel.messaging.whatsapp import GraphApiClient, TransportError
"""
