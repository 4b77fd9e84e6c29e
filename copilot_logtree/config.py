# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Loading context configuration from mappings, JSON files and the environment."""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .exceptions import WrongLoggersConfigurationError
from .models import normalize_specs
from .service import DEFAULT_CONTEXT, LogService

logger = logging.getLogger(__name__)

CONTEXTS_CONFIG_ENV = "LOG_CONTEXTS_CONFIG"
LOG_DIRECTORY_ENV = "LOG_DIRECTORY"

DEFAULT_CONTEXTS_CONFIG: dict[str, Any] = {
    DEFAULT_CONTEXT: [{"kind": "console", "level": "info"}],
}


def _default(value: Any, env_var: str, fallback: Any) -> Any:
    """Helper to pick an explicit value, then env var, then fallback."""
    return value or os.getenv(env_var) or fallback


def _read_json(source: str | os.PathLike) -> Any:
    text = str(source)
    path = Path(text)
    try:
        if not text.lstrip().startswith(("{", "[")) and path.is_file():
            logger.debug("Loading contexts config from %s", path)
            return json.loads(path.read_text(encoding="utf-8"))
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise WrongLoggersConfigurationError(f"Contexts config is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise WrongLoggersConfigurationError(f"Cannot read contexts config {text}: {exc}") from exc


def load_contexts_config(source: Mapping[str, Any] | str | os.PathLike) -> dict[str, list[Any]]:
    """Load a context -> logger specs mapping.

    Single spec values are wrapped in a list. Spec entries themselves are
    validated when their context's logger is first built.

    Args:
        source: Mapping, path to a JSON file, or a JSON document

    Returns:
        Mapping of context path to list of spec mappings

    Raises:
        WrongLoggersConfigurationError: If the source cannot be read or is not shaped like a config
    """
    data = source if isinstance(source, Mapping) else _read_json(source)

    if not isinstance(data, Mapping):
        raise WrongLoggersConfigurationError(
            f"Contexts config must be a mapping, got {type(data).__name__}"
        )

    return {str(context): list(normalize_specs(value)) for context, value in data.items()}


def create_log_service_from_env(
    contexts_config: Mapping[str, Any] | str | os.PathLike | None = None,
    log_directory: str | None = None,
    **kwargs: Any,
) -> LogService:
    """Create a LogService from explicit values or the environment.

    Args:
        contexts_config: Config source. Defaults to LOG_CONTEXTS_CONFIG env
            (path or inline JSON) or a console logger at INFO for DEFAULT_CONTEXT.
        log_directory: File logger directory. Defaults to LOG_DIRECTORY env.
        **kwargs: Passed through to LogService

    Returns:
        Configured LogService
    """
    source = _default(contexts_config, CONTEXTS_CONFIG_ENV, DEFAULT_CONTEXTS_CONFIG)
    directory = _default(log_directory, LOG_DIRECTORY_ENV, None)

    return LogService(load_contexts_config(source), directory, **kwargs)
