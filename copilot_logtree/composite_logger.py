# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logger that fans each call out to several underlying loggers."""

from collections.abc import Iterable
from enum import Enum
from typing import Any

from .exceptions import SinkDispatchError, WrongLoggersConfigurationError
from .levels import Severity
from .logger import Logger


class SinkFailurePolicy(str, Enum):
    """What a composite logger does when one of its loggers raises."""

    PROPAGATE = "propagate"
    COLLECT = "collect"

    @classmethod
    def parse(cls, value: "SinkFailurePolicy | str") -> "SinkFailurePolicy":
        try:
            return cls(str(getattr(value, "value", value)).lower())
        except ValueError as exc:
            raise WrongLoggersConfigurationError(
                f"Unknown sink failure policy: {value!r}. "
                f"Must be one of: {', '.join(p.value for p in cls)}"
            ) from exc


class CompositeLogger(Logger):
    """Dispatches every record to its loggers in registration order.

    With ``SinkFailurePolicy.PROPAGATE`` the first failing logger aborts the
    dispatch and its exception reaches the caller. With
    ``SinkFailurePolicy.COLLECT`` every logger runs and failures are raised
    afterwards as a single SinkDispatchError.
    """

    def __init__(
        self,
        loggers: Iterable[Logger] = (),
        failure_policy: SinkFailurePolicy | str = SinkFailurePolicy.PROPAGATE,
    ):
        self._loggers: list[Logger] = list(loggers)
        self.failure_policy = SinkFailurePolicy.parse(failure_policy)

    @property
    def loggers(self) -> tuple[Logger, ...]:
        return tuple(self._loggers)

    def add_logger(self, logger: Logger) -> None:
        """Append a logger to the dispatch list."""
        self._loggers.append(logger)

    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        if self.failure_policy is SinkFailurePolicy.PROPAGATE:
            for logger in self._loggers:
                logger.log(level, message, **kwargs)
            return

        failures: list[tuple[Logger, BaseException]] = []
        for logger in self._loggers:
            try:
                logger.log(level, message, **kwargs)
            except Exception as exc:
                failures.append((logger, exc))

        if failures:
            raise SinkDispatchError(failures)

    def __repr__(self) -> str:
        return f"CompositeLogger(loggers={len(self._loggers)}, failure_policy={self.failure_policy.value})"
