"""Structlog configuration and logger setup.

Configures structlog on top of the standard library logging module with
callsite context, exception formatting and environment-aware rendering.

Usage:
    # Configure logging at app startup (optional; ti18n never does it on import)
    from ti18n.logging import configure_logging
    configure_logging()

    from ti18n.logging import get_module_logger

    logger = get_module_logger()
    logger.info("translations_loaded", locale="fr", key_count=12)

Dependencies:
    - ti18n.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from ti18n.configuration import settings


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        log_level: Optional override for the log level (DEBUG, INFO, ...).
            Defaults to settings.effective_log_level.
        is_production: Optional override for production mode. Controls JSON
            vs console output. Defaults to settings.is_production.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        # Logs are never emitted under pytest; processors stay minimal
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if not prod_mode:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.effective_log_level
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Module-level logger. Nothing is configured on import; the host application
# owns structlog and stdlib logging and may call configure_logging() itself.
logger: BoundLogger = structlog.stdlib.get_logger()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Binds ``component`` (last dotted segment) and ``module_path`` of the
    calling module. The logger stays lazy, so it picks up whatever structlog
    configuration is active when it first logs.

    Example:
        # In ti18n/store.py
        logger = get_module_logger()
        # context: {"component": "store", "module_path": "ti18n.store"}
    """
    current_frame = inspect.currentframe()
    if current_frame is None:
        return logger

    frame = current_frame.f_back
    if frame is None:
        return logger

    module = inspect.getmodule(frame)
    if module:
        module_name = module.__name__
        parts = module_name.split(".")
        context = {
            "component": parts[-1],
            "module_path": module_name,
        }
        return structlog.stdlib.get_logger(**context)

    return structlog.stdlib.get_logger(component="unknown")
