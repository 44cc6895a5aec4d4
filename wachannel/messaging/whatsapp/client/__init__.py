from .whatsapp_client import GraphApiClient, MediaMetadata, WhatsAppUrlBuilder

__all__ = ["GraphApiClient", "MediaMetadata", "WhatsAppUrlBuilder"]
