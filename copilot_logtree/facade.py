# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Process-wide entry point for obtaining context loggers.

The application calls ``init(service)`` once at startup; library code calls
``get_logger(context)`` anywhere. Before ``init`` (or after ``shutdown``)
every context gets a shared no-op logger.
"""

import threading

from .logger import Logger
from .null_logger import NullLogger
from .service import LogService

_null_logger = NullLogger()


class LoggingContext:
    """Holds the LogService an application resolves loggers from."""

    def __init__(self, service: LogService | None = None):
        self._service = service
        self._lock = threading.Lock()

    @property
    def service(self) -> LogService | None:
        return self._service

    @property
    def is_initialized(self) -> bool:
        return self._service is not None

    def init(self, service: LogService) -> None:
        """Install the service used by get_logger."""
        with self._lock:
            self._service = service

    def get_logger(self, context: str) -> Logger:
        """Return the logger for context, or a no-op logger if not initialized."""
        service = self._service
        if service is None:
            return _null_logger
        return service.get_logger(context)

    def shutdown(self) -> None:
        """Close the installed service and forget it."""
        with self._lock:
            service, self._service = self._service, None
        if service is not None:
            service.close()


_default_context = LoggingContext()


def get_default_context() -> LoggingContext:
    """Return the process-wide LoggingContext."""
    return _default_context


def init(service: LogService) -> None:
    """Install the process-wide LogService.

    Example:
        >>> from copilot_logtree import LogService, init, get_logger
        >>> init(LogService({"billing": {"kind": "console", "level": "info"}}))
        >>> get_logger("billing.invoices").info("Invoice sent", invoice_id=42)
    """
    _default_context.init(service)


def get_logger(context: str) -> Logger:
    """Return the logger for context from the process-wide LogService."""
    return _default_context.get_logger(context)


def shutdown() -> None:
    """Close and remove the process-wide LogService."""
    _default_context.shutdown()
