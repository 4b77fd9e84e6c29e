# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logger backed by a dedicated stdlib logging channel."""

import logging
from typing import Any

from .levels import Severity, parse_level
from .logger import Logger


class ChannelLogger(Logger):
    """Logger that hands records to one non-propagating stdlib logger.

    The keyword context travels on the LogRecord as ``log_context`` so
    formatters can render it as structured data.
    """

    def __init__(self, channel: logging.Logger, name: str):
        """Initialize channel logger.

        Args:
            channel: Configured stdlib logger (level, filters, handlers)
            name: Context path the channel was built for
        """
        self._channel = channel
        self.name = name

    @property
    def level(self) -> Severity:
        return parse_level(self._channel.level)

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._channel.handlers)

    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        level = parse_level(level)
        if not self._channel.isEnabledFor(level):
            return

        self._channel.log(
            level,
            str(message),
            extra={"log_context": kwargs, "log_extra": {}, "channel": self.name},
        )

    def __repr__(self) -> str:
        return f"ChannelLogger(name={self.name!r}, level={self.level.name})"
