"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.info("Processing request", extra={"sort": "name"})

    # Lazy evaluation for expensive operations
    from connection_service.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug("Order: %s", lambda: describe(order))  # Only runs if DEBUG enabled
"""

from connection_service.infra.logging.config import configure_logging, setup_logging
from connection_service.infra.logging.formatters import JSONFormatter
from connection_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
