# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Sink handlers used by the logger builders."""

import base64
import json
import logging
import sys
import threading
from collections import deque
from typing import Any

from .formatter import TemplateFormatter
from .levels import Severity


class RaisingHandlerMixin:
    """Re-raise emit errors instead of reporting them on stderr.

    ``logging.Handler.emit`` implementations call ``handleError`` from
    inside their ``except`` block, so the active exception reaches the
    logging call and from there the composite logger.
    """

    def handleError(self, record: logging.LogRecord) -> None:  # pylint: disable=invalid-name
        exc = sys.exc_info()[1]
        if exc is None:
            super().handleError(record)  # type: ignore[misc]
            return
        raise exc


class StdoutHandler(RaisingHandlerMixin, logging.StreamHandler):
    """Writes already-terminated lines to standard output."""

    terminator = ""

    def __init__(self):
        super().__init__(sys.stdout)


def create_stdout_handler(formatter: logging.Formatter) -> StdoutHandler:
    """Create a handler writing already-terminated lines to standard output."""
    handler = StdoutHandler()
    handler.setFormatter(formatter)
    return handler


class LockedFileHandler(RaisingHandlerMixin, logging.FileHandler):
    """Append-only file handler whose writes are serialized by a shared lock.

    Every handler writing to the same path receives the same lock, so
    records from different loggers never interleave inside one line.
    Once closed, the handler drops records instead of reopening the file.
    """

    terminator = ""

    def __init__(self, filename: str, lock: threading.RLock):
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)
        self.lock = lock
        self.is_closed = False

    def emit(self, record: logging.LogRecord) -> None:
        if self.is_closed:
            return
        super().emit(record)

    def close(self) -> None:
        self.acquire()
        try:
            self.is_closed = True
        finally:
            self.release()
        super().close()


class BrowserConsoleHandler(RaisingHandlerMixin, logging.Handler):
    """Buffers records as browser-console response headers.

    Two protocols are produced from the same buffer: ChromeLogger
    (``X-ChromeLogger-Data``) and FirePHP over Wildfire (``X-Wf-*``).
    The web layer reads ``headers()`` when it sends a response and then
    calls ``reset()``; with ``max_rows`` set only the newest rows are kept.
    """

    CHROME_HEADER = "X-ChromeLogger-Data"
    CHROME_VERSION = "4.1.0"
    WILDFIRE_PROTOCOL = "http://meta.wildfirehq.org/Protocol/JsonStream/0.2"
    FIREPHP_PLUGIN = "http://meta.firephp.org/Wildfire/Plugin/FirePHP/Library-FirePHPCore/0.3"
    FIREPHP_STRUCTURE = "http://meta.firephp.org/Wildfire/Structure/FirePHP/FirebugConsole/0.1"

    def __init__(self, normalizer: TemplateFormatter | None = None, max_rows: int | None = None):
        super().__init__()
        self._normalizer = normalizer or TemplateFormatter()
        self._rows: deque[dict[str, Any]] = deque(maxlen=max_rows)

    @property
    def max_rows(self) -> int | None:
        return self._rows.maxlen

    @staticmethod
    def _console_type(levelno: int) -> str:
        if levelno >= Severity.ERROR:
            return "error"
        if levelno >= Severity.WARNING:
            return "warn"
        if levelno >= Severity.INFO:
            return "info"
        return "log"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            fields = self._normalizer.normalize_record(record)
            extra = fields.get("extra") or {}
            self._rows.append({
                "channel": fields.get("channel", ""),
                "message": fields.get("message", ""),
                "context": fields.get("context") or {},
                "type": self._console_type(record.levelno),
                "file": extra.get("file"),
                "line": extra.get("line"),
            })
        except Exception:
            self.handleError(record)

    def reset(self) -> None:
        """Drop buffered records."""
        self.acquire()
        try:
            self._rows.clear()
        finally:
            self.release()

    def _chrome_header(self) -> str:
        rows = []
        for row in self._rows:
            payload: list[Any] = [row["channel"], row["message"]]
            if row["context"]:
                payload.append(row["context"])
            backtrace = f"{row['file']} : {row['line']}" if row["file"] else "unknown"
            rows.append([payload, backtrace, row["type"]])

        data = {
            "version": self.CHROME_VERSION,
            "columns": ["log", "backtrace", "type"],
            "rows": rows,
        }
        encoded = json.dumps(data, default=str).encode("utf-8")
        return base64.b64encode(encoded).decode("ascii")

    def _wildfire_headers(self) -> dict[str, str]:
        headers = {
            "X-Wf-Protocol-1": self.WILDFIRE_PROTOCOL,
            "X-Wf-1-Plugin-1": self.FIREPHP_PLUGIN,
            "X-Wf-1-Structure-1": self.FIREPHP_STRUCTURE,
        }
        for index, row in enumerate(self._rows, start=1):
            meta = {
                "Type": row["type"].upper(),
                "File": row["file"] or "",
                "Line": row["line"] or 0,
                "Label": row["channel"],
            }
            body: Any = {"message": row["message"], "context": row["context"]} if row["context"] else row["message"]
            message = json.dumps([meta, body], default=str)
            headers[f"X-Wf-1-1-1-{index}"] = f"{len(message)}|{message}|"
        return headers

    def headers(self) -> dict[str, str]:
        """Return the response headers for the buffered records."""
        self.acquire()
        try:
            if not self._rows:
                return {}
            headers = {self.CHROME_HEADER: self._chrome_header()}
            headers.update(self._wildfire_headers())
            return headers
        finally:
            self.release()
