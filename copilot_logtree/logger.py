# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract logger interface."""

import sys
from abc import ABC, abstractmethod
from typing import Any

from .levels import Severity


class Logger(ABC):
    """Abstract base class for loggers.

    Implementations only provide ``log``; the per-severity methods route
    through it.
    """

    @abstractmethod
    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        """Log a message at an arbitrary severity.

        Args:
            level: Severity of the record
            message: The log message
            **kwargs: Additional structured data to log
        """
        pass

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug-level message."""
        self.log(Severity.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info-level message.

        Args:
            message: The log message
            **kwargs: Additional structured data to log
        """
        self.log(Severity.INFO, message, **kwargs)

    def notice(self, message: str, **kwargs: Any) -> None:
        """Log a notice-level message."""
        self.log(Severity.NOTICE, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning-level message.

        Args:
            message: The log message
            **kwargs: Additional structured data to log
        """
        self.log(Severity.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error-level message.

        Args:
            message: The log message
            **kwargs: Additional structured data to log
        """
        self.log(Severity.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical-level message."""
        self.log(Severity.CRITICAL, message, **kwargs)

    def alert(self, message: str, **kwargs: Any) -> None:
        """Log an alert-level message."""
        self.log(Severity.ALERT, message, **kwargs)

    def emergency(self, message: str, **kwargs: Any) -> None:
        """Log an emergency-level message."""
        self.log(Severity.EMERGENCY, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error-level message with the exception being handled.

        Intended for logging an error message in an exception handler. The
        active exception is attached as ``exception`` unless the caller
        already passed one.

        Args:
            message: The log message
            **kwargs: Additional structured data to log
        """
        exc = sys.exc_info()[1]
        if exc is not None:
            kwargs.setdefault("exception", exc)
        self.log(Severity.ERROR, message, **kwargs)
