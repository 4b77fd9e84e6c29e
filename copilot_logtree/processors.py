# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logging filters that enrich records with process and call-site metadata.

Metadata lands in ``record.log_extra`` and is exposed to templates as
``%extra.<key>%``.
"""

import logging
import os
import sys
from types import FrameType


def _extra(record: logging.LogRecord) -> dict:
    extra = getattr(record, "log_extra", None)
    if extra is None:
        extra = {}
        record.log_extra = extra
    return extra


class ProcessIdFilter(logging.Filter):
    """Adds ``process_id`` to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        _extra(record)["process_id"] = record.process if record.process is not None else os.getpid()
        return True


class IntrospectionFilter(logging.Filter):
    """Adds the caller's ``file``, ``line``, ``class`` and ``function``.

    Frames belonging to this package or to the stdlib logging package are
    skipped so the reported location is the application code that logged.
    """

    def __init__(self, skip_modules: tuple[str, ...] = ("copilot_logtree", "logging")):
        super().__init__()
        self.skip_modules = skip_modules

    def _is_skipped(self, frame: FrameType) -> bool:
        module = frame.f_globals.get("__name__", "")
        return any(module == name or module.startswith(name + ".") for name in self.skip_modules)

    def filter(self, record: logging.LogRecord) -> bool:
        frame: FrameType | None = sys._getframe(1)
        while frame is not None and self._is_skipped(frame):
            frame = frame.f_back

        extra = _extra(record)
        if frame is None:
            extra.update({"file": None, "line": None, "class": None, "function": None})
            return True

        owner = frame.f_locals.get("self")
        if owner is not None:
            class_name = type(owner).__name__
        else:
            cls = frame.f_locals.get("cls")
            class_name = cls.__name__ if isinstance(cls, type) else None

        extra.update({
            "file": frame.f_code.co_filename,
            "line": frame.f_lineno,
            "class": class_name,
            "function": frame.f_code.co_name,
        })
        return True
