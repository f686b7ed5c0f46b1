"""Tests for error classification and the structured tool error."""

from __future__ import annotations

import httpx
import pytest
from google.genai import errors as genai_errors

from snaphockey_ai.errors import (
    AnalyzerError,
    ErrorKind,
    InvalidContentError,
    NetworkError,
    ProcessingFailedError,
    RequestTimeoutError,
    ResponseParsingError,
    ServiceUnavailableError,
    UpstreamAPIError,
    classify_exception,
    make_tool_error,
)


def _api_error(code: int, message: str = "boom") -> genai_errors.APIError:
    return genai_errors.APIError(code, {"error": {"message": message, "status": "ERR"}})


class TestClassifyException:
    def test_analyzer_error_passes_through(self):
        original = ResponseParsingError("bad json")
        assert classify_exception(original) is original

    @pytest.mark.parametrize(
        "code, kind",
        [
            (429, ErrorKind.RATE_LIMIT),
            (401, ErrorKind.AUTH_ERROR),
            (403, ErrorKind.AUTH_ERROR),
            (400, ErrorKind.API_ERROR),
            (500, ErrorKind.API_ERROR),
        ],
    )
    def test_api_status_codes(self, code, kind):
        result = classify_exception(_api_error(code))
        assert isinstance(result, UpstreamAPIError)
        assert result.kind is kind
        assert result.status_code == code

    def test_503_is_service_unavailable(self):
        result = classify_exception(_api_error(503))
        assert isinstance(result, ServiceUnavailableError)
        assert result.kind is ErrorKind.SERVICE_UNAVAILABLE

    def test_api_message_in_failure_reason(self):
        result = classify_exception(_api_error(400, "video too long"))
        assert "video too long" in result.failure_reason

    def test_builtin_timeout(self):
        assert isinstance(classify_exception(TimeoutError()), RequestTimeoutError)

    def test_httpx_timeout(self):
        result = classify_exception(httpx.ReadTimeout("read timed out"))
        assert result.kind is ErrorKind.TIMEOUT

    def test_httpx_connect_error(self):
        result = classify_exception(httpx.ConnectError("connection refused"))
        assert isinstance(result, NetworkError)
        assert result.kind is ErrorKind.NETWORK_ERROR

    def test_connection_error(self):
        assert classify_exception(ConnectionResetError()).kind is ErrorKind.NETWORK_ERROR

    def test_unrecognised_is_unknown(self):
        result = classify_exception(RuntimeError("weird"))
        assert isinstance(result, ProcessingFailedError)
        assert result.kind is ErrorKind.UNKNOWN
        assert result.failure_reason.endswith("weird")


class TestAnalyzerErrors:
    def test_processing_failed_message(self):
        err = ProcessingFailedError("Quota exceeded.")
        assert err.failure_reason == "The AI service couldn't analyze your video. Quota exceeded."
        assert err.kind is ErrorKind.API_ERROR

    def test_connection_errors_share_title(self):
        assert ServiceUnavailableError().title == NetworkError().title == "Connection Error"

    def test_parsing_error_title_by_stage(self):
        assert ResponseParsingError("x", stage="validation").title == "Validation Failed"
        assert ResponseParsingError("x").title == "Processing Failed"

    def test_invalid_content_is_not_retryable(self):
        err = InvalidContentError("No stick in frame")
        assert err.kind is None
        assert err.retryable is False
        assert err.action_text == "Record New Video"
        assert len(err.tips) == 4

    def test_all_are_analyzer_errors(self):
        for err in (ServiceUnavailableError(), RequestTimeoutError(), InvalidContentError("x")):
            assert isinstance(err, AnalyzerError)


class TestMakeToolError:
    def test_rate_limit_has_retry_after(self):
        result = make_tool_error(_api_error(429))
        assert result["category"] == "rate_limit"
        assert result["retry_after_seconds"] == 60
        assert result["retryable"] is True

    def test_invalid_content_category(self):
        result = make_tool_error(InvalidContentError("Not hockey"))
        assert result["category"] == "invalid_content"
        assert result["error"] == "Not hockey"
        assert result["retryable"] is False
        assert result["title"] == "Invalid Video"

    def test_timeout_has_no_retry_after(self):
        result = make_tool_error(TimeoutError())
        assert result["category"] == "timeout"
        assert result["retry_after_seconds"] is None
