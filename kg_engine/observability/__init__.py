"""
Observability Layer

RESPONSIBILITY: Logging
WHAT THIS LAYER MUST NOT DO: alter any result it observes
"""

from .logging import PACKAGE_LOGGER, configure_logging, get_logger, resolve_log_level

__all__ = ['PACKAGE_LOGGER', 'configure_logging', 'get_logger', 'resolve_log_level']
