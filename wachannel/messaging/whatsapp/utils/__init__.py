from .error_helpers import TransportError, describe_error, is_authentication_error

__all__ = ["TransportError", "describe_error", "is_authentication_error"]
