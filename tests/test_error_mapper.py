"""
Tests for error mapping
"""

import pytest

from libsql_batch import DecodeError, HttpStatusError, TransportError
from libsql_batch.error_mapper import (
    REQUEST_EXCERPT_LIMIT,
    map_decode_error,
    map_status_error,
    map_transport_error,
    merge_route_errors,
    request_excerpt,
)


class TestErrorMapper:
    def test_transport_error_keeps_cause(self) -> None:
        cause = OSError("connection refused")
        error = map_transport_error(cause, "https://db")

        assert isinstance(error, TransportError)
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.code == "CONNECTION_ERROR"

    def test_status_error(self) -> None:
        error = map_status_error(401, "https://db/queries")
        assert error.status_code == 401
        assert error.details == {"status_code": 401, "url": "https://db/queries"}

    def test_decode_error(self) -> None:
        cause = ValueError("bad")
        error = map_decode_error("[]", cause, '{"statements": ["SELECT 1"]}')

        assert isinstance(error, DecodeError)
        assert error.raw == "[]"
        assert error.cause is cause
        assert "SELECT 1" in str(error)

    def test_request_excerpt(self) -> None:
        assert request_excerpt("short") == "short"
        long_body = "x" * (REQUEST_EXCERPT_LIMIT + 10)
        excerpt = request_excerpt(long_body)
        assert excerpt.startswith("x" * REQUEST_EXCERPT_LIMIT)
        assert excerpt.endswith("[10 more characters]")

    @pytest.mark.parametrize(
        "primary,fallback,expected_type",
        [
            (HttpStatusError(500, "a"), HttpStatusError(404, "b"), HttpStatusError),
            (TransportError("x", "a"), HttpStatusError(404, "b"), HttpStatusError),
            (TransportError("x", "a"), TransportError("y", "b"), TransportError),
            (HttpStatusError(500, "a"), TransportError("y", "b"), HttpStatusError),
        ],
    )
    def test_merge_route_errors(self, primary, fallback, expected_type) -> None:  # type: ignore[no-untyped-def]
        assert isinstance(merge_route_errors(primary, fallback), expected_type)

    def test_merge_keeps_primary_status_when_fallback_unreachable(self) -> None:
        fallback = TransportError("y", "b")
        merged = merge_route_errors(HttpStatusError(500, "a"), fallback)
        assert isinstance(merged, HttpStatusError)
        assert merged.status_code == 500
        assert merged.__cause__ is fallback
