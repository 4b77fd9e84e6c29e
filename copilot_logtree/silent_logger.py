# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Silent logger implementation for testing."""

import threading
from typing import Any

from .levels import Severity, parse_level
from .logger import Logger


class SilentLogger(Logger):
    """Logger that stores log records in memory without output.

    Useful for testing to verify logging behavior without cluttering test output.
    Records below ``level`` are dropped, so the default of DEBUG keeps everything.
    """

    def __init__(self, level: Severity | str = Severity.DEBUG, name: str | None = None):
        """Initialize silent logger.

        Args:
            level: Minimum severity to keep
            name: Optional logger name for identification
        """
        self.level = parse_level(level)
        self.name = name or "copilot"
        self.logs: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        """Store a log record if it meets the threshold.

        Args:
            level: Log level
            message: The log message
            **kwargs: Additional structured data to log
        """
        level = parse_level(level)
        if level < self.level:
            return

        log_entry: dict[str, Any] = {
            "level": level.name,
            "message": message,
        }

        if kwargs:
            log_entry["extra"] = kwargs

        with self._lock:
            self.logs.append(log_entry)

    def clear_logs(self) -> None:
        """Clear all stored log messages (useful for testing)."""
        with self._lock:
            self.logs.clear()

    def get_logs(self, level: str | None = None) -> list[dict[str, Any]]:
        """Get stored log messages, optionally filtered by level.

        Args:
            level: Optional level name to filter by (e.g. "INFO", "notice")

        Returns:
            List of log entries
        """
        if level is None:
            return self.logs
        name = parse_level(level).name
        return [log for log in self.logs if log["level"] == name]

    def has_log(self, message: str, level: str | None = None) -> bool:
        """Check if a specific log message exists.

        Args:
            message: Message to search for (substring match)
            level: Optional log level to filter by

        Returns:
            True if message is found, False otherwise
        """
        logs_to_search = self.get_logs(level) if level else self.logs
        return any(message in log["message"] for log in logs_to_search)
