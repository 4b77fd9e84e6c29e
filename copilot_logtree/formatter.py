# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Template formatter that renders structured records into text lines.

A record is normalized into a flat mapping before rendering:

- ``message``: the log message
- ``context``: structured keyword data passed with the call
- ``level`` / ``level_name``: numeric severity and its name
- ``channel``: the context path the logger was resolved for
- ``datetime``: the record time rendered with the formatter's date format
- ``extra``: metadata added by filters (``process_id``, ``file``, ``line``, ...)

Templates reference fields as ``%field%`` and metadata as ``%extra.key%``.
"""

import logging
import traceback
from collections.abc import Mapping
from datetime import date, datetime, tzinfo
from typing import Any, Iterable

MAX_PREVIOUS_EXCEPTION_DEPTH = 10
MAX_NORMALIZE_DEPTH = 9

SIMPLE_FORMAT = "%extra.process_id% %datetime% %level_name% %message%%context%\n"
CONSOLE_FORMAT = "%datetime% %level_name% %message%\n"

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_ONLY_DATE_FORMAT = "%H:%M:%S"


def _exception_class_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _previous_exception(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def normalize_exception(exc: BaseException, max_depth: int = MAX_PREVIOUS_EXCEPTION_DEPTH) -> str:
    """Render an exception and its chain of causes, outermost first.

    Each exception contributes its class, message, origin and stack trace.
    Consecutive blocks are separated by ``Previous exception[n]:`` lines.
    Causes beyond ``max_depth`` (capped at MAX_PREVIOUS_EXCEPTION_DEPTH)
    are dropped.

    Args:
        exc: Outermost exception
        max_depth: Maximum number of exceptions to render

    Returns:
        Multi-line description of the chain
    """
    max_depth = min(max_depth, MAX_PREVIOUS_EXCEPTION_DEPTH)
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    depth = 0

    while current is not None and depth < max_depth:
        depth += 1
        seen.add(id(current))

        frames = traceback.extract_tb(current.__traceback__)
        if frames:
            origin = f"{frames[-1].filename}:{frames[-1].lineno}"
        else:
            origin = "[unknown]:0"
        stack = "".join(traceback.format_list(frames)).rstrip("\n")

        parts.append(
            f"\nClass: {_exception_class_name(current)}"
            f"\nMessage: {current}"
            f"\nThrown at {origin}"
            f"\nStack trace:\n{stack}\n"
        )

        current = _previous_exception(current)
        if current is not None and id(current) in seen:
            current = None

        if current is not None and depth < max_depth:
            parts.append(f"\nPrevious exception[{depth}]:")

    return "".join(parts)


def _literal(value: Any) -> str:
    if value is None:
        return "NULL"
    return "true" if value else "false"


def _dump(value: Any, indent: int = 0) -> str:
    """Render nested data as an indented ``[key] => value`` listing."""
    if isinstance(value, Mapping):
        items: Iterable[tuple[Any, Any]] = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    elif value is None or isinstance(value, bool):
        return _literal(value)
    else:
        return str(value)

    pad = " " * indent
    lines = [type(value).__name__, "\n", pad, "(\n"]
    for key, item in items:
        lines.append(f"{pad}    [{key}] => ")
        if isinstance(item, (Mapping, list, tuple)):
            lines.append(_dump(item, indent + 8))
        else:
            lines.append(_dump(item))
        lines.append("\n")
    lines.append(f"{pad})\n")
    return "".join(lines)


def convert_to_string(data: Any) -> str:
    """Convert a normalized value to the text placed in a template.

    Empty containers become an empty string, None and booleans their
    literal names, scalars their plain string form and anything else a
    nested dump.
    """
    if isinstance(data, (Mapping, list, tuple)) and not data:
        return ""

    if data is None or isinstance(data, bool):
        return _literal(data)

    if isinstance(data, (str, int, float)):
        return str(data)

    return _dump(data)


class TemplateFormatter(logging.Formatter):
    """Formatter that substitutes normalized record fields into a template.

    Accepts stdlib ``LogRecord`` objects as produced by the loggers in this
    package, or plain mappings already shaped like a normalized record.
    """

    def __init__(
        self,
        template: str | None = None,
        date_format: str | None = None,
        timezone: tzinfo | None = None,
    ):
        """Initialize template formatter.

        Args:
            template: Output template (default: SIMPLE_FORMAT)
            date_format: strftime format for ``%datetime%`` (default: DEFAULT_DATE_FORMAT)
            timezone: Zone for record timestamps (default: local time)
        """
        super().__init__()
        self.template = template or SIMPLE_FORMAT
        self.date_format = date_format or DEFAULT_DATE_FORMAT
        self.timezone = timezone

    def record_to_dict(self, record: logging.LogRecord) -> dict[str, Any]:
        """Extract the raw record fields from a stdlib LogRecord."""
        context = dict(getattr(record, "log_context", None) or {})
        if record.exc_info and record.exc_info[1] is not None:
            context.setdefault("exception", record.exc_info[1])

        return {
            "message": record.getMessage(),
            "context": context,
            "level": record.levelno,
            "level_name": record.levelname,
            "channel": getattr(record, "channel", record.name),
            "datetime": datetime.fromtimestamp(record.created, tz=self.timezone),
            "extra": dict(getattr(record, "log_extra", None) or {}),
        }

    def normalize(self, data: Any, depth: int = 0) -> Any:
        """Reduce a value to strings, scalars, lists and dicts."""
        if data is None or isinstance(data, (bool, int, float, str)):
            return data

        if depth > MAX_NORMALIZE_DEPTH:
            return f"Over {MAX_NORMALIZE_DEPTH} levels deep, aborting normalization"

        if isinstance(data, BaseException):
            return normalize_exception(data)

        if isinstance(data, datetime):
            if data.tzinfo is None and self.timezone is not None:
                data = data.replace(tzinfo=self.timezone)
            return data.strftime(self.date_format)

        if isinstance(data, date):
            return data.isoformat()

        if isinstance(data, Mapping):
            return {str(key): self.normalize(value, depth + 1) for key, value in data.items()}

        if isinstance(data, (list, tuple, set, frozenset)):
            values = sorted(data, key=repr) if isinstance(data, (set, frozenset)) else data
            return [self.normalize(value, depth + 1) for value in values]

        if type(data).__str__ is not object.__str__:
            return str(data)

        return f"[object] ({type(data).__name__})"

    def normalize_record(self, record: logging.LogRecord | Mapping[str, Any]) -> dict[str, Any]:
        """Return the normalized field mapping for a record."""
        raw = self.record_to_dict(record) if isinstance(record, logging.LogRecord) else dict(record)
        raw.setdefault("extra", {})
        return self.normalize(raw)

    def format(self, record: logging.LogRecord | Mapping[str, Any]) -> str:  # type: ignore[override]
        """Render one record through the template.

        Args:
            record: LogRecord or mapping of record fields

        Returns:
            Rendered text
        """
        fields = self.normalize_record(record)
        output = self.template

        extra = dict(fields.get("extra") or {})
        for key, value in list(extra.items()):
            placeholder = f"%extra.{key}%"
            if placeholder in output:
                output = output.replace(placeholder, convert_to_string(value))
                del extra[key]
        fields["extra"] = extra

        for key, value in fields.items():
            placeholder = f"%{key}%"
            if placeholder not in output:
                continue

            text = convert_to_string(value)
            if key == "context" and text != "":
                text = "\n" + text
            output = output.replace(placeholder, text)

        return output

    def format_batch(self, records: Iterable[logging.LogRecord | Mapping[str, Any]]) -> str:
        """Render several records and concatenate the output in order."""
        return "".join(self.format(record) for record in records)
