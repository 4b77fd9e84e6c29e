# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Test fixtures for copilot_logtree."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

import copilot_logtree.facade as facade
from copilot_logtree import LogService


@pytest.fixture(autouse=True)
def reset_default_context() -> Iterator[None]:
    """Reset the process-wide logging context before and after each test."""
    facade.shutdown()
    yield
    facade.shutdown()


@pytest.fixture
def make_service() -> Iterator[Callable[..., LogService]]:
    """Create LogService instances and close their file handlers afterwards."""
    services: list[LogService] = []

    def _make(contexts_config: Any, *args: Any, **kwargs: Any) -> LogService:
        service = LogService(contexts_config, *args, **kwargs)
        services.append(service)
        return service

    yield _make

    for service in services:
        service.close()


def _build_exception_chain(length: int) -> BaseException:
    try:
        raise ValueError("level 1")
    except ValueError as exc:
        current: BaseException = exc

    for index in range(2, length + 1):
        try:
            raise RuntimeError(f"level {index}") from current
        except RuntimeError as exc:
            current = exc

    return current


@pytest.fixture
def exception_chain() -> Callable[[int], BaseException]:
    """Return a helper raising an exception chain of the requested length.

    The outermost exception is "level <length>", the innermost "level 1".
    """
    return _build_exception_chain
