"""Structlog configuration for localekit.

Every localekit module logs through structlog. Configuration happens once
on import and can be repeated by the host application, e.g. after changing
LOG_LEVEL.

Usage:
    from localekit.logging import configure_logging, get_module_logger

    configure_logging(log_level="DEBUG")

    logger = get_module_logger()
    logger.info("loaded_translations", locale_count=4)
"""

import inspect
import logging
import sys
from types import FrameType
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from localekit.configuration import Settings, get_settings

# Root level used under pytest; nothing is emitted
SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """Return True when running under pytest."""
    return "pytest" in sys.modules


def _base_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
    ]


def _runtime_processors(prod_mode: bool) -> List[Processor]:
    processors = _base_processors() + [
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
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Under pytest all output is suppressed. Otherwise events are rendered
    as JSON in production and with the console renderer elsewhere.

    Args:
        settings: Settings instance (default: get_settings()).
        log_level: Level name overriding settings.LOG_LEVEL.
        is_production: Overrides settings.is_production.

    Returns:
        Logger bound to no context.
    """
    if _is_test_environment():
        processors = _base_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter
        ]
        level = SILENT_LEVEL
    else:
        settings = settings or get_settings()
        prod_mode = settings.is_production if is_production is None else is_production
        processors = _runtime_processors(prod_mode)
        level_name = (log_level or settings.LOG_LEVEL).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=True)
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def _caller_module_name(frame: Optional[FrameType]) -> Optional[str]:
    caller = frame.f_back if frame is not None else None
    if caller is None:
        return None
    module = inspect.getmodule(caller)
    return module.__name__ if module else None


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger bound to name, or to the calling module's name."""
    name = name or _caller_module_name(inspect.currentframe()) or "unknown"
    return logger.bind(logger_name=name)


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Example:
        # In localekit/i18n/resolver.py
        logger = get_module_logger()
        # context: {"component": "resolver", "module_path": "localekit.i18n.resolver"}
    """
    module_name = _caller_module_name(inspect.currentframe())
    if module_name is None:
        return logger.bind(component="unknown")
    return logger.bind(component=module_name.rsplit(".", 1)[-1], module_path=module_name)
