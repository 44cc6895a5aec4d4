from .client import GraphApiClient, MediaMetadata, WhatsAppUrlBuilder
from .utils import TransportError

__all__ = ["GraphApiClient", "MediaMetadata", "TransportError", "WhatsAppUrlBuilder"]
