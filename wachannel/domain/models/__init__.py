from .attachment import Attachment, AttachmentCreate
from .subscriber import SubscriberChannel, SubscriberCreate

__all__ = ["Attachment", "AttachmentCreate", "SubscriberChannel", "SubscriberCreate"]
