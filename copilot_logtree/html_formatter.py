# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""HTML formatter for debug output written into a page."""

import html
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .formatter import TemplateFormatter, convert_to_string


class HtmlDebugFormatter(logging.Formatter):
    """Wraps each record in a ``<pre>`` block with its call site and context."""

    def __init__(self, normalizer: TemplateFormatter | None = None):
        super().__init__()
        self._normalizer = normalizer or TemplateFormatter()

    def format(self, record: logging.LogRecord | Mapping[str, Any]) -> str:  # type: ignore[override]
        fields = self._normalizer.normalize_record(record)
        extra = fields.get("extra") or {}
        file = extra.get("file", "")
        line = extra.get("line", "")

        output = f"<pre>{html.escape(str(file))}:{line} {html.escape(str(fields.get('message', '')))}\n"

        context = fields.get("context")
        if context:
            output += html.escape(convert_to_string(context))

        output += "</pre>"
        return output

    def format_batch(self, records: Iterable[logging.LogRecord | Mapping[str, Any]]) -> str:
        return "".join(self.format(record) for record in records)
