# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Log service resolving context strings to configured loggers.

Contexts are delimited strings such as ``billing.invoices`` or
``\\app\\http``. For ``a.b.c`` the service returns:

1. the logger configured for ``a.b.c``, ``a.b`` or ``a`` (most specific wins,
   following the literal path only),
2. otherwise the logger configured for DEFAULT_CONTEXT,
3. otherwise a shared no-op logger.

Example config::

    {
        "billing": [
            {"kind": "console", "level": "info"},
            {"kind": "file", "level": "debug", "config": {"filename": "billing.log"}},
        ],
        DEFAULT_CONTEXT: {"kind": "file", "level": "warning"},
    }

Configured segments must not start with ``_`` unless they are one of the
reserved context names.
"""

import logging
import os
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import tzinfo
from typing import Any, Union

from .composite_logger import CompositeLogger, SinkFailurePolicy
from .context_tree import DEFAULT_DELIMITERS, ContextNode, ContextTree
from .exceptions import LoggerBuildingFailedError, UnsupportedFileLoggerDirectoryInitializerError
from .factory import create_logger_builder
from .formatter import TemplateFormatter
from .handlers import LockedFileHandler
from .logger import Logger
from .models import ContextConfig

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "_default"
SYSTEM_CONSOLE_CONTEXT = "_system_console_context"
BROWSER_CONSOLE_CONTEXT = "_browser_console_context"
BROWSER_PAGE_CONTEXT = "_browser_page_context"

RESERVED_CONTEXTS = (
    DEFAULT_CONTEXT,
    SYSTEM_CONSOLE_CONTEXT,
    BROWSER_CONSOLE_CONTEXT,
    BROWSER_PAGE_CONTEXT,
)

DirectoryInitializer = Union[str, os.PathLike, Callable[[], Any]]


class LogService:
    """Builds and caches loggers for contexts from a static configuration."""

    DEFAULT_CONTEXT = DEFAULT_CONTEXT
    SYSTEM_CONSOLE_CONTEXT = SYSTEM_CONSOLE_CONTEXT
    BROWSER_CONSOLE_CONTEXT = BROWSER_CONSOLE_CONTEXT
    BROWSER_PAGE_CONTEXT = BROWSER_PAGE_CONTEXT

    def __init__(
        self,
        contexts_config: ContextConfig,
        file_loggers_directory: DirectoryInitializer | None = None,
        *,
        sink_failure_policy: SinkFailurePolicy | str = SinkFailurePolicy.PROPAGATE,
        delimiters: Iterable[str] = DEFAULT_DELIMITERS,
    ):
        """Initialize the service and build the context tree.

        Args:
            contexts_config: Mapping of context path -> logger spec or list of specs
            file_loggers_directory: Directory (or callable returning it) for file loggers
            sink_failure_policy: How composite loggers handle a failing sink
            delimiters: Strings separating context segments

        Raises:
            WrongLoggersConfigurationError: If the config structure is malformed
        """
        self._file_loggers_directory: str | None = None
        if file_loggers_directory is not None:
            self.set_file_loggers_directory(file_loggers_directory)

        self.sink_failure_policy = SinkFailurePolicy.parse(sink_failure_policy)
        self.contexts_config = dict(contexts_config) if isinstance(contexts_config, Mapping) else contexts_config
        self.tree = ContextTree.from_config(self.contexts_config, delimiters, RESERVED_CONTEXTS)

        self._nop_logger = CompositeLogger(failure_policy=self.sink_failure_policy)
        self._default_logger: Logger | None = None
        self._is_default_logger_resolved = False
        self._context_cache: dict[str, Logger] = {}
        self._lock = threading.RLock()

        self._file_locks: dict[str, threading.RLock] = {}
        self._file_handlers: dict[tuple[str, tzinfo | None], LockedFileHandler] = {}
        self._closed = False

    def set_file_loggers_directory(self, log_directory: DirectoryInitializer) -> None:
        """Set the directory used by file loggers.

        Only loggers built afterwards pick up the new directory.

        Args:
            log_directory: Directory path, or a callable returning one

        Raises:
            UnsupportedFileLoggerDirectoryInitializerError: If the value is not a path or
                the callable does not return one
        """
        if isinstance(log_directory, (str, os.PathLike)):
            directory = log_directory
        elif callable(log_directory):
            directory = log_directory()
        else:
            raise UnsupportedFileLoggerDirectoryInitializerError(
                f"Unsupported file logger directory initializer: {type(log_directory).__name__}"
            )

        if not isinstance(directory, (str, os.PathLike)):
            raise UnsupportedFileLoggerDirectoryInitializerError(
                f"File logger directory initializer returned {type(directory).__name__}, expected a path"
            )

        self._file_loggers_directory = os.fspath(directory)

    def get_file_loggers_directory(self) -> str | None:
        """Return the directory for file loggers, or None if it is not set."""
        return self._file_loggers_directory

    def open_file_handler(self, path: str, timezone: tzinfo | None = None) -> LockedFileHandler:
        """Return the file handler for a path, opening it on first use.

        Builders asking for the same absolute path and timezone share one
        handler. Handlers for one path with different timezones share its lock.
        """
        key = os.path.abspath(path)
        with self._lock:
            handler = self._file_handlers.get((key, timezone))
            if handler is None:
                lock = self._file_locks.setdefault(key, threading.RLock())
                handler = LockedFileHandler(key, lock)
                handler.setFormatter(TemplateFormatter(timezone=timezone))
                self._file_handlers[(key, timezone)] = handler
                logger.debug("Opened file handler for %s", key)
        return handler

    def _build_node_logger(self, node: ContextNode) -> Logger:
        composite = CompositeLogger(failure_policy=self.sink_failure_policy)
        try:
            for spec in node.specs or ():
                builder = create_logger_builder(self, node.path, spec)
                composite.add_logger(builder.get_logger())
        except LoggerBuildingFailedError:
            raise
        except Exception as exc:
            logger.warning("Failed to build logger for context '%s': %s", node.path, exc)
            raise LoggerBuildingFailedError(node.path, f"Failed to build logger for context '{node.path}': {exc}") from exc

        logger.debug("Built logger for context '%s' with %d sink(s)", node.path, len(composite.loggers))
        return composite

    def _logger_for_node(self, node: ContextNode | None) -> Logger | None:
        if node is None:
            return None
        return node.get_logger(self._build_node_logger)

    def _get_default_logger(self) -> Logger | None:
        if self._is_default_logger_resolved:
            return self._default_logger

        # The node cell guarantees a single build; the lock only publishes the result
        default_logger = self._logger_for_node(self.tree.resolve(DEFAULT_CONTEXT))
        with self._lock:
            if not self._is_default_logger_resolved:
                self._default_logger = default_logger
                self._is_default_logger_resolved = True
            return self._default_logger

    def get_logger(self, context: str) -> Logger:
        """Return the logger for a context string.

        Args:
            context: Delimited context path, e.g. ``billing.invoices``

        Returns:
            Logger for the most specific configured context, the default
            logger, or a no-op logger (always, once the service is closed)

        Raises:
            LoggerBuildingFailedError: If the resolved logger could not be built
        """
        if self._closed:
            return self._nop_logger

        cached = self._context_cache.get(context)
        if cached is not None:
            return cached

        resolved = self._logger_for_node(self.tree.resolve(context))
        if resolved is None:
            resolved = self._get_default_logger()
        if resolved is None:
            resolved = self._nop_logger

        with self._lock:
            return self._context_cache.setdefault(context, resolved)

    def close(self) -> None:
        """Close every file handler opened by this service."""
        with self._lock:
            handlers, self._file_handlers = self._file_handlers, {}
            self._context_cache.clear()
            self._closed = True
        for handler in handlers.values():
            handler.close()

    @property
    def closed(self) -> bool:
        return self._closed
