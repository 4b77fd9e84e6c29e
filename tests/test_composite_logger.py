# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the fan-out composite logger."""

from typing import Any

import pytest

from copilot_logtree import (
    CompositeLogger,
    Logger,
    Severity,
    SilentLogger,
    SinkDispatchError,
    SinkFailurePolicy,
    WrongLoggersConfigurationError,
)


class FailingLogger(Logger):
    """Logger that raises on every call."""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        self.calls += 1
        raise self.error


class OrderRecorder(Logger):
    def __init__(self, name: str, order: list[str]):
        self.name = name
        self.order = order

    def log(self, level: Severity, message: str, **kwargs: Any) -> None:
        self.order.append(self.name)


@pytest.mark.parametrize(
    "method, level",
    [
        ("debug", "DEBUG"),
        ("info", "INFO"),
        ("notice", "NOTICE"),
        ("warning", "WARNING"),
        ("error", "ERROR"),
        ("critical", "CRITICAL"),
        ("alert", "ALERT"),
        ("emergency", "EMERGENCY"),
    ],
)
def test_every_level_fans_out(method, level):
    first, second = SilentLogger(), SilentLogger()
    composite = CompositeLogger([first, second])

    getattr(composite, method)("Something happened", request_id="r-1")

    for logger in (first, second):
        assert logger.logs == [
            {"level": level, "message": "Something happened", "extra": {"request_id": "r-1"}}
        ]


def test_dispatch_follows_registration_order():
    order: list[str] = []
    composite = CompositeLogger()
    composite.add_logger(OrderRecorder("a", order))
    composite.add_logger(OrderRecorder("b", order))
    composite.add_logger(OrderRecorder("c", order))

    composite.info("hello")

    assert order == ["a", "b", "c"]
    assert len(composite.loggers) == 3


def test_empty_composite_is_a_no_op():
    composite = CompositeLogger()

    composite.emergency("nobody listens")
    composite.log(Severity.DEBUG, "still nobody")


def test_propagate_policy_aborts_remaining_sinks():
    before, after = SilentLogger(), SilentLogger()
    failing = FailingLogger(OSError("disk full"))
    composite = CompositeLogger([before, failing, after])

    with pytest.raises(OSError, match="disk full"):
        composite.error("write failed")

    assert len(before.logs) == 1
    assert after.logs == []


def test_collect_policy_runs_every_sink():
    before, after = SilentLogger(), SilentLogger()
    first_error, second_error = OSError("disk full"), ValueError("bad value")
    first, second = FailingLogger(first_error), FailingLogger(second_error)
    composite = CompositeLogger([before, first, after, second], failure_policy="collect")

    with pytest.raises(SinkDispatchError) as exc_info:
        composite.warning("partial failure")

    assert len(before.logs) == 1
    assert len(after.logs) == 1
    assert exc_info.value.failures == [(first, first_error), (second, second_error)]
    assert "2 sink(s) failed" in str(exc_info.value)


def test_collect_policy_without_failures():
    sink = SilentLogger()
    composite = CompositeLogger([sink], failure_policy=SinkFailurePolicy.COLLECT)

    composite.info("fine")

    assert sink.has_log("fine", level="INFO")


def test_unknown_policy_rejected():
    with pytest.raises(WrongLoggersConfigurationError, match="sink failure policy"):
        CompositeLogger(failure_policy="ignore")


def test_exception_attaches_active_exception():
    sink = SilentLogger()
    composite = CompositeLogger([sink])

    try:
        raise ValueError("bad input")
    except ValueError as exc:
        composite.exception("Handler failed")
        expected = exc

    assert sink.logs[0]["level"] == "ERROR"
    assert sink.logs[0]["extra"]["exception"] is expected
