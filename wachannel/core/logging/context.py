"""
Request context management using contextvars.

The webhook handler sets the business phone number id (tenant) and the
customer's WhatsApp id (user) once per unit; every logger in the same task
picks them up.
"""

from contextvars import ContextVar

_tenant_context: ContextVar[str | None] = ContextVar("tenant_id", default=None)
_user_context: ContextVar[str | None] = ContextVar("user_id", default=None)


def set_request_context(
    tenant_id: str | None = None,
    user_id: str | None = None,
) -> None:
    """
    Set the request context for the current async context.

    Args:
        tenant_id: Business phone number id the notification was addressed to
        user_id: Customer WhatsApp id (wa_id)
    """
    if tenant_id is not None:
        _tenant_context.set(tenant_id)
    if user_id is not None:
        _user_context.set(user_id)


def get_current_tenant_context() -> str | None:
    return _tenant_context.get()


def get_current_user_context() -> str | None:
    return _user_context.get()


def clear_request_context() -> None:
    """Reset both context variables (between units and in tests)."""
    _tenant_context.set(None)
    _user_context.set(None)


def get_context_info() -> dict[str, str | None]:
    return {
        "tenant_id": get_current_tenant_context(),
        "user_id": get_current_user_context(),
    }
