"""
Unit tests for response outcome reporting.
"""

import logging
from http import HTTPStatus

import pytest

from painterqueue.telemetry.dispatcher import TelemetryDispatcher
from painterqueue.telemetry.reporting import ProblemDetails, ResponseReporter
from painterqueue.telemetry.sinks import InMemoryTraceSink, LoggerLogSink



@pytest.fixture
def trace_sink():
    return InMemoryTraceSink()


@pytest.fixture
def reporter(trace_sink):
    telemetry = TelemetryDispatcher[dict](LoggerLogSink(logging.getLogger("painterqueue.test.reporting")), trace_sink)
    return ResponseReporter[dict](telemetry)


class TestSuccessResponses:
    """Test success outcomes."""

    @pytest.mark.parametrize("method,status", [
        ("ok", HTTPStatus.OK),
        ("created", HTTPStatus.CREATED),
        ("no_content", HTTPStatus.NO_CONTENT),
    ])
    def test_success_logs_information(self, reporter, trace_sink, method, status):
        result = getattr(reporter, method)("Rules", "Rules returned", {"count": 2}, {"Page": 1})

        assert result == status
        properties = trace_sink.find("Information")[0].properties
        assert properties["Message"] == "Rules returned"
        assert properties["StatusCode"] == str(int(status))
        assert properties["Title"] == "Rules"
        assert properties["Page"] == "1"
        assert properties["InputPayload"] == '{"count":2}'

    def test_no_content_warning(self, reporter, trace_sink):
        assert reporter.no_content_warning("Rules", "Nothing to update") == HTTPStatus.NO_CONTENT

        properties = trace_sink.find("Warning")[0].properties
        assert properties == {"WarningMessage": "Nothing to update", "StatusCode": "204", "Title": "Rules"}


class TestClientErrors:
    """Test client error outcomes."""

    @pytest.mark.parametrize("method,status", [
        ("bad_request", 400),
        ("forbidden", 403),
        ("not_found", 404),
    ])
    def test_client_error(self, reporter, trace_sink, method, status):
        problem = getattr(reporter, method)("Rule", "Rule 7 was rejected")

        assert problem == ProblemDetails(title="Rule", status=status, detail="Rule 7 was rejected")
        assert trace_sink.find("Warning")[0].properties["StatusCode"] == str(status)


class TestExceptionResponses:
    """Test exception outcomes."""

    @pytest.mark.parametrize("method,status", [
        ("bad_request_exception", 400),
        ("forbidden_exception", 403),
        ("not_found_exception", 404),
    ])
    def test_exception_response(self, reporter, trace_sink, method, status):
        problem = getattr(reporter, method)(KeyError("rule"), "Rule lookup failed")

        assert problem.status == status
        assert problem.title == "Rule lookup failed"
        assert problem.detail == "'rule'"
        properties = trace_sink.find("Exception")[0].properties
        assert properties["Custom Message"] == "Rule lookup failed"
        assert properties["Type"] == "KeyError"

    def test_internal_server_error(self, reporter, trace_sink):
        problem = reporter.internal_server_error(RuntimeError("db down"), {"id": 1})

        assert problem.model_dump() == {"title": "Internal Server Error", "status": 500, "detail": "db down"}
        assert trace_sink.find("Exception")[0].properties["InputPayload"] == '{"id":1}'


def test_reporter_requires_telemetry():
    with pytest.raises(ValueError):
        ResponseReporter(None)
