# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Configuration data models for context loggers."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import WrongLoggersConfigurationError
from .levels import Severity, parse_level


class BuilderKind(str, Enum):
    """Closed set of logger builder variants."""

    CONSOLE = "console"
    FILE = "file"
    BROWSER_CONSOLE = "browser_console"
    BROWSER_PAGE = "browser_page"
    SILENT = "silent"

    @classmethod
    def parse(cls, value: Any) -> "BuilderKind":
        """Match a configured kind, ignoring case and '-' vs '_'."""
        if isinstance(value, BuilderKind):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            for kind in cls:
                if kind.value == normalized:
                    return kind
        supported = ", ".join(kind.value for kind in cls)
        raise WrongLoggersConfigurationError(
            f"Unknown logger kind: {value!r}. Supported kinds: {supported}"
        )


@dataclass(frozen=True)
class LoggerSpec:
    """Declarative description of one sink attached to a context.

    Attributes:
        kind: Builder variant that creates the logger
        level: Severity threshold for the sink
        config: Builder-specific options (e.g. ``filename``, ``timezone``)
    """
    kind: BuilderKind
    level: Severity
    config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggerSpec":
        """Create a LoggerSpec from a raw configuration mapping.

        ``class`` is accepted as an alias for ``kind``.

        Raises:
            WrongLoggersConfigurationError: If a required field is missing or invalid
        """
        if not isinstance(data, Mapping):
            raise WrongLoggersConfigurationError(
                f"Logger config must be a mapping, got {type(data).__name__}"
            )

        kind = data.get("kind", data.get("class"))
        if kind is None:
            raise WrongLoggersConfigurationError("Logger config must contain 'kind' field")

        level = data.get("level")
        if level is None:
            raise WrongLoggersConfigurationError("Logger config must contain 'level' field")

        config = data.get("config") or {}
        if not isinstance(config, Mapping):
            raise WrongLoggersConfigurationError("Logger 'config' field must be a mapping")

        return cls(kind=BuilderKind.parse(kind), level=parse_level(level), config=dict(config))


def is_spec_like(value: Any) -> bool:
    """Return True if value looks like a single spec rather than a list of specs."""
    return isinstance(value, (Mapping, LoggerSpec))


def normalize_specs(value: Any) -> tuple[Any, ...]:
    """Normalize one context value to a tuple of spec-like entries.

    Entries are not validated here; that happens when the context's logger
    is first built.

    Raises:
        WrongLoggersConfigurationError: If value is neither a spec nor a sequence of specs
    """
    if is_spec_like(value):
        return (value,)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(value)

    raise WrongLoggersConfigurationError(
        f"Context config must be a logger spec or a list of logger specs, got {type(value).__name__}"
    )


def coerce_spec(value: Any) -> LoggerSpec:
    """Return value as a LoggerSpec, parsing raw mappings."""
    if isinstance(value, LoggerSpec):
        return value
    return LoggerSpec.from_dict(value)


ContextConfig = Mapping[str, Any]
