# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logger builders, one per sink variant.

Each builder is constructed with the owning service, the resolved context
path, a severity threshold and its free-form config, and builds its logger
once during construction.
"""

import itertools
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import timezone, tzinfo
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .channel_logger import ChannelLogger
from .exceptions import WrongLoggersConfigurationError
from .formatter import CONSOLE_FORMAT, TIME_ONLY_DATE_FORMAT, TemplateFormatter
from .handlers import BrowserConsoleHandler, create_stdout_handler
from .html_formatter import HtmlDebugFormatter
from .levels import Severity, parse_level
from .logger import Logger
from .models import BuilderKind
from .processors import IntrospectionFilter, ProcessIdFilter
from .silent_logger import SilentLogger

if TYPE_CHECKING:
    from .service import LogService

DEFAULT_FILENAME = "application.log"

_channel_ids = itertools.count(1)


def _resolve_timezone(name: Any) -> tzinfo | None:
    if not name:
        return None
    if isinstance(name, tzinfo):
        return name
    if str(name).upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise WrongLoggersConfigurationError(f"Unknown timezone: {name!r}") from exc


class LoggerBuilder(ABC):
    """Interface for objects that build the logger of one sink."""

    kind: BuilderKind

    @abstractmethod
    def get_logger(self) -> Logger:
        """Return the built logger; repeated calls return the same instance."""
        pass


class BaseLoggerBuilder(LoggerBuilder):
    """Common wiring: stdlib channel, threshold, timezone and metadata filters."""

    def __init__(
        self,
        service: "LogService",
        context: str,
        level: Severity | str,
        config: Mapping[str, Any] | None = None,
    ):
        """Initialize and build the logger.

        Args:
            service: Service that owns the context tree
            context: Resolved context path
            level: Severity threshold
            config: Builder-specific options

        Raises:
            WrongLoggersConfigurationError: If the config cannot produce a logger
        """
        self.service = service
        self.context = context
        self.level = parse_level(level)
        self.config = dict(config or {})
        self.timezone = _resolve_timezone(self.config.get("timezone"))
        self._logger = self._build()

    def _create_channel(self) -> logging.Logger:
        # Unregistered logger: a private channel per builder, never shared by name
        channel = logging.Logger(f"copilot_logtree.{self.kind.value}.{next(_channel_ids)}", self.level)
        channel.propagate = False
        channel.addFilter(ProcessIdFilter())
        channel.addFilter(IntrospectionFilter())
        return channel

    @abstractmethod
    def _create_handler(self) -> logging.Handler:
        """Create the sink handler for this variant."""
        pass

    def _build(self) -> Logger:
        channel = self._create_channel()
        channel.addHandler(self._create_handler())
        return ChannelLogger(channel, self.context)

    def get_logger(self) -> Logger:
        return self._logger


class ConsoleLoggerBuilder(BaseLoggerBuilder):
    """Writes time-stamped lines to standard output."""

    kind = BuilderKind.CONSOLE

    def _create_handler(self) -> logging.Handler:
        formatter = TemplateFormatter(CONSOLE_FORMAT, TIME_ONLY_DATE_FORMAT, self.timezone)
        return create_stdout_handler(formatter)


class FileLoggerBuilder(BaseLoggerBuilder):
    """Appends full-field lines to a file in the service's log directory."""

    kind = BuilderKind.FILE

    def get_filename(self) -> str:
        return self.config.get("filename") or DEFAULT_FILENAME

    def _create_handler(self) -> logging.Handler:
        directory = self.service.get_file_loggers_directory()
        if not directory:
            raise WrongLoggersConfigurationError("Directory for file logger is not set")

        return self.service.open_file_handler(os.path.join(directory, self.get_filename()), self.timezone)


class BrowserConsoleLoggerBuilder(BaseLoggerBuilder):
    """Buffers records as ChromeLogger and FirePHP response headers.

    Rows accumulate on ``handler`` until the web layer sends them: read
    ``handler.headers()`` for each response, then call ``handler.reset()``.
    ``config["max_rows"]`` bounds the buffer, keeping the newest rows.
    """

    kind = BuilderKind.BROWSER_CONSOLE

    def _create_handler(self) -> logging.Handler:
        max_rows = self.config.get("max_rows")
        if max_rows is not None and (isinstance(max_rows, bool) or not isinstance(max_rows, int) or max_rows < 1):
            raise WrongLoggersConfigurationError(f"max_rows must be a positive integer, got {max_rows!r}")

        self.handler = BrowserConsoleHandler(TemplateFormatter(timezone=self.timezone), max_rows)
        return self.handler


class BrowserPageLoggerBuilder(BaseLoggerBuilder):
    """Writes HTML debug blocks into the page output stream."""

    kind = BuilderKind.BROWSER_PAGE

    def _create_handler(self) -> logging.Handler:
        return create_stdout_handler(HtmlDebugFormatter(TemplateFormatter(timezone=self.timezone)))


class SilentLoggerBuilder(LoggerBuilder):
    """Keeps records in memory; useful for tests."""

    kind = BuilderKind.SILENT

    def __init__(
        self,
        service: "LogService",
        context: str,
        level: Severity | str,
        config: Mapping[str, Any] | None = None,
    ):
        self.service = service
        self.context = context
        self.level = parse_level(level)
        self.config = dict(config or {})
        self._logger = SilentLogger(level=self.level, name=context)

    def get_logger(self) -> SilentLogger:
        return self._logger
