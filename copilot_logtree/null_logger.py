# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logger that discards everything."""

from typing import Any

from .levels import Severity
from .logger import Logger


class NullLogger(Logger):
    """Logger whose calls are no-ops and never raise."""

    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        pass

    def __repr__(self) -> str:
        return "NullLogger()"
