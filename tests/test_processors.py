# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the record enrichment filters."""

import logging
import os

from copilot_logtree.processors import IntrospectionFilter, ProcessIdFilter


def test_process_id_filter():
    record = logging.makeLogRecord({"msg": "hello"})

    assert ProcessIdFilter().filter(record) is True
    assert record.log_extra["process_id"] == os.getpid()


def test_process_id_filter_keeps_existing_extra():
    record = logging.makeLogRecord({"msg": "hello", "log_extra": {"request_id": "r-1"}})

    ProcessIdFilter().filter(record)

    assert record.log_extra == {"request_id": "r-1", "process_id": os.getpid()}


def test_introspection_reports_calling_function():
    record = logging.makeLogRecord({"msg": "hello"})

    IntrospectionFilter().filter(record)

    assert os.path.basename(record.log_extra["file"]) == "test_processors.py"
    assert record.log_extra["function"] == "test_introspection_reports_calling_function"
    assert record.log_extra["class"] is None
    assert isinstance(record.log_extra["line"], int)


class TestIntrospectionInClass:
    def test_reports_class_name(self):
        record = logging.makeLogRecord({"msg": "hello"})

        IntrospectionFilter().filter(record)

        assert record.log_extra["class"] == "TestIntrospectionInClass"
        assert record.log_extra["function"] == "test_reports_class_name"


def test_skip_modules_are_configurable():
    record = logging.makeLogRecord({"msg": "hello"})

    IntrospectionFilter(skip_modules=(__name__,)).filter(record)

    assert record.log_extra["file"] != __file__
