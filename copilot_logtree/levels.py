# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Severity levels shared by every logger in the tree."""

import logging
from enum import IntEnum
from typing import Any

from .exceptions import WrongLoggersConfigurationError


class Severity(IntEnum):
    """The eight standard severities, ordered by ascending urgency.

    Values sit on the stdlib ``logging`` scale so a threshold can be handed
    straight to ``logging.Logger.setLevel``.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    NOTICE = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL
    ALERT = 55
    EMERGENCY = 60


# stdlib only knows five of the eight names
for _extra_level in (Severity.NOTICE, Severity.ALERT, Severity.EMERGENCY):
    logging.addLevelName(_extra_level.value, _extra_level.name)

_ALIASES = {
    "WARN": Severity.WARNING,
    "FATAL": Severity.CRITICAL,
}


def parse_level(value: Any) -> Severity:
    """Convert a configured level into a Severity.

    Args:
        value: Severity member, level name (any case) or stdlib integer level

    Returns:
        Matching Severity

    Raises:
        WrongLoggersConfigurationError: If the value names no known severity
    """
    if isinstance(value, Severity):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Severity(value)
        except ValueError as exc:
            raise WrongLoggersConfigurationError(f"Unknown log level: {value}") from exc

    if isinstance(value, str):
        name = value.strip().upper()
        if name in Severity.__members__:
            return Severity[name]
        if name in _ALIASES:
            return _ALIASES[name]

    raise WrongLoggersConfigurationError(
        f"Unknown log level: {value!r}. "
        f"Must be one of: {', '.join(s.name.lower() for s in Severity)}"
    )
