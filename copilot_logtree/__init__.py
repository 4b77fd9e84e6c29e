# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Copilot-for-Consensus Context Logger Tree.

Resolves hierarchical context strings (``billing.invoices``,
``\\app\\http``) to loggers built from declarative per-context
configuration. The most specific configured prefix wins, the
DEFAULT_CONTEXT config catches everything else, and loggers are built
lazily and cached per context string.

Example:
    >>> from copilot_logtree import LogService, DEFAULT_CONTEXT, init, get_logger
    >>>
    >>> service = LogService(
    ...     {
    ...         "billing": [
    ...             {"kind": "console", "level": "info"},
    ...             {"kind": "file", "level": "debug", "config": {"filename": "billing.log"}},
    ...         ],
    ...         DEFAULT_CONTEXT: {"kind": "console", "level": "warning"},
    ...     },
    ...     file_loggers_directory="/var/log/app",
    ... )
    >>> init(service)
    >>> get_logger("billing.invoices").info("Invoice sent", invoice_id=42)
"""

__version__ = "0.1.0"

from .builders import (
    BrowserConsoleLoggerBuilder,
    BrowserPageLoggerBuilder,
    ConsoleLoggerBuilder,
    FileLoggerBuilder,
    LoggerBuilder,
    SilentLoggerBuilder,
)
from .channel_logger import ChannelLogger
from .composite_logger import CompositeLogger, SinkFailurePolicy
from .config import create_log_service_from_env, load_contexts_config
from .exceptions import (
    LoggerBuildingFailedError,
    LogTreeError,
    SinkDispatchError,
    UnsupportedFileLoggerDirectoryInitializerError,
    WrongLoggersConfigurationError,
)
from .facade import LoggingContext, get_default_context, get_logger, init, shutdown
from .factory import create_logger_builder
from .formatter import TemplateFormatter, convert_to_string, normalize_exception
from .html_formatter import HtmlDebugFormatter
from .levels import Severity, parse_level
from .logger import Logger
from .models import BuilderKind, LoggerSpec
from .null_logger import NullLogger
from .service import (
    BROWSER_CONSOLE_CONTEXT,
    BROWSER_PAGE_CONTEXT,
    DEFAULT_CONTEXT,
    SYSTEM_CONSOLE_CONTEXT,
    LogService,
)
from .silent_logger import SilentLogger

__all__ = [
    "__version__",
    "BROWSER_CONSOLE_CONTEXT",
    "BROWSER_PAGE_CONTEXT",
    "DEFAULT_CONTEXT",
    "SYSTEM_CONSOLE_CONTEXT",
    "BrowserConsoleLoggerBuilder",
    "BrowserPageLoggerBuilder",
    "BuilderKind",
    "ChannelLogger",
    "CompositeLogger",
    "ConsoleLoggerBuilder",
    "FileLoggerBuilder",
    "HtmlDebugFormatter",
    "LogService",
    "LogTreeError",
    "Logger",
    "LoggerBuilder",
    "LoggerBuildingFailedError",
    "LoggerSpec",
    "LoggingContext",
    "NullLogger",
    "Severity",
    "SilentLogger",
    "SilentLoggerBuilder",
    "SinkDispatchError",
    "SinkFailurePolicy",
    "TemplateFormatter",
    "UnsupportedFileLoggerDirectoryInitializerError",
    "WrongLoggersConfigurationError",
    "convert_to_string",
    "create_log_service_from_env",
    "create_logger_builder",
    "get_default_context",
    "get_logger",
    "init",
    "load_contexts_config",
    "normalize_exception",
    "parse_level",
    "shutdown",
]
