"""
Outcome reporting for request handlers.

Handlers report how a request ended through ResponseReporter, which records
the matching telemetry event (information for success, warning for client
errors, exception for failures) and builds the problem details body a
handler returns for non-success outcomes.
"""

from http import HTTPStatus
from typing import Any, Dict, Generic, Mapping, Optional

from pydantic import BaseModel

from .dispatcher import TelemetryDispatcher
from .models import T

STATUS_CODE_KEY = "StatusCode"
TITLE_KEY = "Title"


class ProblemDetails(BaseModel):
    """RFC 7807 problem details body."""

    title: str
    status: int
    detail: Optional[str] = None


def _outcome_context(
    title: str,
    status: HTTPStatus,
    context_data: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    context = dict(context_data or {})
    context[STATUS_CODE_KEY] = int(status)
    context[TITLE_KEY] = title
    return context


class ResponseReporter(Generic[T]):
    """Turns handler outcomes into telemetry events and problem details."""

    def __init__(self, telemetry: TelemetryDispatcher[T]):
        if telemetry is None:
            raise ValueError("telemetry cannot be null")
        self.telemetry = telemetry

    # Success responses

    def ok(self, title: str, detail: str, payload: Optional[T] = None,
           context_data: Optional[Mapping[str, Any]] = None) -> HTTPStatus:
        return self._success(HTTPStatus.OK, title, detail, payload, context_data)

    def created(self, title: str, detail: str, payload: Optional[T] = None,
                context_data: Optional[Mapping[str, Any]] = None) -> HTTPStatus:
        return self._success(HTTPStatus.CREATED, title, detail, payload, context_data)

    def no_content(self, title: str, detail: str, payload: Optional[T] = None,
                   context_data: Optional[Mapping[str, Any]] = None) -> HTTPStatus:
        return self._success(HTTPStatus.NO_CONTENT, title, detail, payload, context_data)

    def no_content_warning(self, title: str, detail: str, payload: Optional[T] = None,
                           context_data: Optional[Mapping[str, Any]] = None) -> HTTPStatus:
        """A request that succeeded with nothing to do, worth a warning."""
        self.telemetry.log_warning(detail, payload, _outcome_context(title, HTTPStatus.NO_CONTENT, context_data))
        return HTTPStatus.NO_CONTENT

    # Client error responses

    def bad_request(self, title: str, detail: str, payload: Optional[T] = None,
                    context_data: Optional[Mapping[str, Any]] = None) -> ProblemDetails:
        return self._client_error(HTTPStatus.BAD_REQUEST, title, detail, payload, context_data)

    def forbidden(self, title: str, detail: str, payload: Optional[T] = None,
                  context_data: Optional[Mapping[str, Any]] = None) -> ProblemDetails:
        return self._client_error(HTTPStatus.FORBIDDEN, title, detail, payload, context_data)

    def not_found(self, title: str, detail: str, payload: Optional[T] = None,
                  context_data: Optional[Mapping[str, Any]] = None) -> ProblemDetails:
        return self._client_error(HTTPStatus.NOT_FOUND, title, detail, payload, context_data)

    # Exception responses

    def bad_request_exception(self, exception: BaseException, title: str,
                              payload: Optional[T] = None) -> ProblemDetails:
        return self._exception(HTTPStatus.BAD_REQUEST, exception, title, payload)

    def forbidden_exception(self, exception: BaseException, title: str,
                            payload: Optional[T] = None) -> ProblemDetails:
        return self._exception(HTTPStatus.FORBIDDEN, exception, title, payload)

    def not_found_exception(self, exception: BaseException, title: str,
                            payload: Optional[T] = None) -> ProblemDetails:
        return self._exception(HTTPStatus.NOT_FOUND, exception, title, payload)

    def internal_server_error(self, exception: BaseException,
                              payload: Optional[T] = None) -> ProblemDetails:
        return self._exception(HTTPStatus.INTERNAL_SERVER_ERROR, exception, "Internal Server Error", payload)

    def _success(self, status: HTTPStatus, title: str, detail: str, payload: Optional[T],
                 context_data: Optional[Mapping[str, Any]]) -> HTTPStatus:
        self.telemetry.log_information(detail, payload, _outcome_context(title, status, context_data))
        return status

    def _client_error(self, status: HTTPStatus, title: str, detail: str, payload: Optional[T],
                      context_data: Optional[Mapping[str, Any]]) -> ProblemDetails:
        self.telemetry.log_warning(detail, payload, _outcome_context(title, status, context_data))
        return ProblemDetails(title=title, status=int(status), detail=detail)

    def _exception(self, status: HTTPStatus, exception: BaseException, title: str,
                   payload: Optional[T]) -> ProblemDetails:
        self.telemetry.log_exception(exception, payload, message=title)
        return ProblemDetails(title=title, status=int(status), detail=str(exception))
