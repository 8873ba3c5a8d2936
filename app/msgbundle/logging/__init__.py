"""Structured logging for msgbundle.

Exports:
    - configure_logging: Opt-in logging setup for applications
    - get_module_logger: Get logger for calling module
"""

from msgbundle.logging.setup import (
    configure_logging,
    get_module_logger,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
]
