"""Structured error handling — error kinds, analyzer exceptions, and tool error model."""

from __future__ import annotations

from enum import Enum

import httpx
from google.genai import errors as genai_errors
from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Closed set of failure kinds. Exactly one is assigned per failed call."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    TIMEOUT = "timeout"
    API_ERROR = "api_error"
    PARSING_ERROR = "parsing_error"
    INVALID_RESPONSE = "invalid_response"
    NETWORK_ERROR = "network_error"
    RATE_LIMIT = "rate_limit"
    AUTH_ERROR = "auth_error"
    UNKNOWN = "unknown"


RETRY_AFTER_SECONDS = {ErrorKind.RATE_LIMIT: 60}


class AnalyzerError(Exception):
    """Base for every failure surfaced by the analysis services.

    Carries the user-facing copy alongside the classified kind so callers can
    render an alert without string matching.
    """

    kind: ErrorKind | None = ErrorKind.UNKNOWN
    title = "Analysis Failed"
    recovery_suggestion = "Please try again."
    retryable = True
    action_text = "Try Again"

    def __init__(self, failure_reason: str) -> None:
        super().__init__(failure_reason)
        self.failure_reason = failure_reason


_CONNECTION_REASON = "Unable to connect to the analysis service. Please check your internet connection."
_CONNECTION_RECOVERY = "Check your internet connection and try again."


class ServiceUnavailableError(AnalyzerError):
    """The AI facade is not configured or the provider reported 503."""

    kind = ErrorKind.SERVICE_UNAVAILABLE
    title = "Connection Error"
    recovery_suggestion = _CONNECTION_RECOVERY

    def __init__(self, failure_reason: str = _CONNECTION_REASON) -> None:
        super().__init__(failure_reason)


class NetworkError(AnalyzerError):
    kind = ErrorKind.NETWORK_ERROR
    title = "Connection Error"
    recovery_suggestion = _CONNECTION_RECOVERY

    def __init__(self, failure_reason: str = _CONNECTION_REASON) -> None:
        super().__init__(failure_reason)


class ProcessingFailedError(AnalyzerError):
    """The AI service could not produce an analysis."""

    kind = ErrorKind.API_ERROR
    recovery_suggestion = "Try recording a shorter, clearer video."

    def __init__(self, details: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(f"The AI service couldn't analyze your video. {details}".rstrip())
        self.details = details
        if kind is not None:
            self.kind = kind


class RequestTimeoutError(ProcessingFailedError):
    kind = ErrorKind.TIMEOUT

    def __init__(self, details: str = "The request timed out.") -> None:
        super().__init__(details)


class UpstreamAPIError(ProcessingFailedError):
    """Non-success status from the provider; ``kind`` reflects the status code."""

    def __init__(
        self,
        details: str,
        *,
        status_code: int | None = None,
        kind: ErrorKind = ErrorKind.API_ERROR,
    ) -> None:
        super().__init__(details, kind=kind)
        self.status_code = status_code


class InvalidResponseError(ProcessingFailedError):
    """The provider answered, but with nothing usable (empty or blocked)."""

    kind = ErrorKind.INVALID_RESPONSE


class ResponseParsingError(AnalyzerError):
    """Sanitized output did not decode into the expected schema."""

    kind = ErrorKind.PARSING_ERROR

    def __init__(self, failure_reason: str, *, stage: str = "analysis") -> None:
        super().__init__(failure_reason)
        self.stage = stage
        if stage == "validation":
            self.title = "Validation Failed"
            self.recovery_suggestion = "This is usually temporary. Try again in a few seconds."
        else:
            self.title = "Processing Failed"
            self.recovery_suggestion = (
                "The analysis completed but couldn't be displayed. Try analyzing again."
            )


INVALID_CONTENT_TIPS = (
    "Use a hockey stick and puck",
    "Record on ice, street, or synthetic surface",
    "Make sure the full shooting motion is visible",
    "Use good lighting and keep the camera steady",
)


class InvalidContentError(AnalyzerError):
    """Validation rejected the video. A content verdict, not a call failure."""

    kind = None
    title = "Invalid Video"
    recovery_suggestion = "Record a hockey shot with proper form."
    retryable = False
    action_text = "Record New Video"
    tips = INVALID_CONTENT_TIPS


def _kind_for_status(code: int | None) -> ErrorKind:
    if code == 429:
        return ErrorKind.RATE_LIMIT
    if code in (401, 403):
        return ErrorKind.AUTH_ERROR
    if code == 503:
        return ErrorKind.SERVICE_UNAVAILABLE
    return ErrorKind.API_ERROR


def classify_exception(error: BaseException) -> AnalyzerError:
    """Map a transport or SDK exception onto the analyzer taxonomy.

    Classification is by exception type and status code. An ``AnalyzerError``
    is returned unchanged.
    """
    if isinstance(error, AnalyzerError):
        return error
    if isinstance(error, genai_errors.APIError):
        kind = _kind_for_status(error.code)
        if kind is ErrorKind.SERVICE_UNAVAILABLE:
            return ServiceUnavailableError()
        details = error.message or error.status or str(error)
        return UpstreamAPIError(details, status_code=error.code, kind=kind)
    if isinstance(error, (httpx.TimeoutException, TimeoutError)):
        return RequestTimeoutError()
    if isinstance(error, (httpx.NetworkError, ConnectionError)):
        return NetworkError()
    return ProcessingFailedError(str(error), kind=ErrorKind.UNKNOWN)


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    title: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    classified = classify_exception(error)
    category = classified.kind.value if classified.kind else "invalid_content"
    return ToolError(
        error=classified.failure_reason,
        category=category,
        title=classified.title,
        hint=classified.recovery_suggestion,
        retryable=classified.retryable,
        retry_after_seconds=RETRY_AFTER_SECONDS.get(classified.kind),
    ).model_dump(mode="json")
