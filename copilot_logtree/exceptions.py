# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions for context logger resolution and construction."""

from typing import Any


class LogTreeError(Exception):
    """Base exception for logger tree errors."""
    pass


class WrongLoggersConfigurationError(LogTreeError):
    """Raised when a context or logger spec configuration is malformed."""
    pass


class LoggerBuildingFailedError(LogTreeError):
    """Raised when the logger for a context could not be constructed."""

    def __init__(self, context: str, message: str | None = None):
        self.context = context
        super().__init__(message or f"Failed to build logger for context '{context}'")


class UnsupportedFileLoggerDirectoryInitializerError(WrongLoggersConfigurationError):
    """Raised when the file logger directory is neither a path nor a callable returning one."""
    pass


class SinkDispatchError(LogTreeError):
    """Raised after a fan-out when one or more sinks failed.

    Attributes:
        failures: List of (logger, exception) pairs in dispatch order
    """

    def __init__(self, failures: list[tuple[Any, BaseException]]):
        self.failures = failures
        details = "; ".join(f"{type(exc).__name__}: {exc}" for _, exc in failures)
        super().__init__(f"{len(failures)} sink(s) failed: {details}")
