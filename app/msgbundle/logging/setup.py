"""Structlog setup for msgbundle.

msgbundle never configures logging on import. Modules log through
get_module_logger(), a lazy structlog proxy that renders with whatever
configuration is active when the first event is emitted, so the embedding
application stays in charge of its own output. Applications without a
structlog setup of their own can opt in with configure_logging().

Usage:
    from msgbundle.logging import configure_logging

    # Once, at application startup
    configure_logging()                          # LOG_LEVEL / PREFIX from env
    configure_logging("DEBUG", is_production=False)
"""

import inspect
import logging
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from msgbundle.configuration import get_settings

ROOT_LOGGER_NAME = "msgbundle"


def build_processors(is_production: bool) -> List[Processor]:
    """Processor pipeline for stdlib-backed structlog loggers.

    Args:
        is_production: JSON output when True, colored console output otherwise.

    Returns:
        Processors ending in a renderer.
    """
    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
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

    if is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and stdlib logging for an application.

    Opt-in; call once at startup. Events are routed through stdlib logging
    under the "msgbundle" logger hierarchy.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ...). Defaults to
            LOG_LEVEL from settings.
        is_production: JSON instead of console rendering. Defaults to
            settings.is_production.

    Returns:
        Logger for the "msgbundle" hierarchy.

    Raises:
        pydantic.ValidationError: If a default has to come from settings and
            the environment is invalid.
    """
    if log_level is None or is_production is None:
        settings = get_settings()
        log_level = log_level or settings.LOG_LEVEL
        if is_production is None:
            is_production = settings.is_production

    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=build_processors(is_production),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)

    return structlog.stdlib.get_logger(ROOT_LOGGER_NAME)


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    The logger is named after the module, so stdlib level configuration of
    "msgbundle" or "msgbundle.i18n" applies to it.

    Returns:
        Lazy logger carrying component and module_path context

    Example:
        # In msgbundle/i18n/bundle.py
        logger = get_module_logger()
        # context: {"component": "bundle", "module_path": "msgbundle.i18n.bundle"}
    """
    current_frame = inspect.currentframe()
    caller = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None

    if module is None:
        return structlog.stdlib.get_logger(ROOT_LOGGER_NAME, component="unknown")

    module_name = module.__name__
    return structlog.stdlib.get_logger(
        module_name,
        component=module_name.split(".")[-1],
        module_path=module_name,
    )
