"""Structured logging for ti18n.

Public API:
    - configure_logging(): Opt-in structlog and stdlib logging setup for applications
    - get_module_logger(): Get a logger bound to the calling module
    - logger: Module-level logger instance
"""

from ti18n.logging.setup import (
    configure_logging,
    get_module_logger,
    logger,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "logger",
]
