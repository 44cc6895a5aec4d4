"""
Rich-based logger with business-number and user context for wachannel.

Messages are prefixed with ``[T:<phone_number_id>][U:<wa_id>]`` taken from the
request context variables, so webhook processing logs can be followed per
conversation without passing identifiers around.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from wachannel.core.config.settings import settings


class CompactFormatter(logging.Formatter):
    """Shortens wachannel module names to their last two parts."""

    def format(self, record):
        if record.name.startswith("wachannel."):
            parts = record.name.split(".")
            if len(parts) > 2:
                record.name = ".".join(parts[-2:])
        return super().format(record)


_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim white",
    }
)
_console = Console(theme=_theme)


class ContextLogger:
    """
    Logger wrapper that adds tenant and user context to messages.

    The tenant is the business phone number id, the user is the customer's
    WhatsApp id. Context is read on every call so a logger created at import
    time still picks up the current request.
    """

    def __init__(
        self,
        logger: logging.Logger,
        tenant_id: str | None = None,
        user_id: str | None = None,
    ):
        self.logger = logger
        self.tenant_id = tenant_id or "---"
        self.user_id = user_id or "---"

    def _format_message(self, message: str) -> str:
        from .context import get_current_tenant_context, get_current_user_context

        current_tenant = get_current_tenant_context() or self.tenant_id
        current_user = get_current_user_context() or self.user_id

        if current_tenant and current_tenant != "---":
            if current_user and current_user != "---":
                return f"[T:{current_tenant}][U:{current_user}] {message}"
            return f"[T:{current_tenant}] {message}"
        elif current_user and current_user != "---":
            return f"[U:{current_user}] {message}"
        return message

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(self._format_message(message), *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.logger.critical(self._format_message(message), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.logger.exception(self._format_message(message), *args, **kwargs)

    def bind(self, **kwargs) -> ContextLogger:
        """Return a new ContextLogger with tenant_id and/or user_id overridden."""
        return ContextLogger(
            self.logger,
            tenant_id=kwargs.get("tenant_id", self.tenant_id),
            user_id=kwargs.get("user_id", self.user_id),
        )


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Initialize the root logger with Rich formatting.

    Parameters
    ----------
    level : str
        Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
    mode : str
        "DEV" adds a daily log file next to the console; anything else is console only
    log_dir : str, optional
        Directory for log files (DEV mode only)
    console_fmt : str, optional
        Console format string
    file_fmt : str, optional
        File format string
    """
    lvl = level.upper()
    lvl = lvl if lvl in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

    console_format = console_fmt or "[%(name)s] %(message)s"
    file_format = file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        markup=False,
    )
    rich_handler.setFormatter(CompactFormatter(console_format))

    handlers: list[logging.Handler] = [rich_handler]

    if mode.upper() == "DEV" and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, f"wachannel_{datetime.now():%Y%m%d}.log")
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(CompactFormatter(file_format))
        handlers.append(file_handler)
        _console.print(f"[green]DEV mode:[/] console + file → {logfile}")

    logging.basicConfig(level=lvl, handlers=handlers, force=True)
    logging.getLogger("wachannel.logging").info(f"Logging initialized ({lvl})")


def setup_app_logging() -> None:
    """Initialize logging from settings; called once at application startup."""
    setup_logging(
        level=settings.log_level,
        mode="DEV" if settings.is_development else "PROD",
        log_dir=settings.log_dir if settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger that automatically uses request context variables.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextLogger instance with automatic context from context variables
    """
    from .context import get_current_tenant_context, get_current_user_context

    return ContextLogger(
        logging.getLogger(name),
        tenant_id=get_current_tenant_context(),
        user_id=get_current_user_context(),
    )


def get_app_logger() -> ContextLogger:
    """Logger for application lifecycle events (startup, shutdown)."""
    return get_logger("wachannel.app")
