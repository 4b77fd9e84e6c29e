# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory functions for creating logger builders."""

from typing import TYPE_CHECKING, Any

from .builders import (
    BrowserConsoleLoggerBuilder,
    BrowserPageLoggerBuilder,
    ConsoleLoggerBuilder,
    FileLoggerBuilder,
    LoggerBuilder,
    SilentLoggerBuilder,
)
from .exceptions import WrongLoggersConfigurationError
from .models import BuilderKind, LoggerSpec, coerce_spec

if TYPE_CHECKING:
    from .service import LogService

BUILDERS: dict[BuilderKind, type[LoggerBuilder]] = {
    BuilderKind.CONSOLE: ConsoleLoggerBuilder,
    BuilderKind.FILE: FileLoggerBuilder,
    BuilderKind.BROWSER_CONSOLE: BrowserConsoleLoggerBuilder,
    BuilderKind.BROWSER_PAGE: BrowserPageLoggerBuilder,
    BuilderKind.SILENT: SilentLoggerBuilder,
}


def create_logger_builder(
    service: "LogService",
    context: str,
    spec: LoggerSpec | dict[str, Any],
) -> LoggerBuilder:
    """Factory function to create the builder for one logger spec.

    Args:
        service: Service that owns the context tree
        context: Resolved context path the logger is built for
        spec: LoggerSpec or raw mapping with ``kind``/``class``, ``level`` and ``config``

    Returns:
        LoggerBuilder whose logger is already built

    Raises:
        WrongLoggersConfigurationError: If the spec is malformed or its kind is unknown

    Example:
        >>> builder = create_logger_builder(service, "billing", {"kind": "console", "level": "info"})
        >>> builder.get_logger().info("Invoice sent", invoice_id=42)
    """
    spec = coerce_spec(spec)

    try:
        builder_class = BUILDERS[spec.kind]
    except KeyError as exc:
        supported = ", ".join(kind.value for kind in BUILDERS)
        raise WrongLoggersConfigurationError(
            f"Unknown logger kind: {spec.kind}. Supported kinds: {supported}"
        ) from exc

    return builder_class(service, context, spec.level, spec.config)
