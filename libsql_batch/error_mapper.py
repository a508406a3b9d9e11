"""
Maps transport, HTTP and codec failures onto the client's exception types
"""

from typing import Optional

from .exceptions import BatchError, DecodeError, HttpStatusError, TransportError

REQUEST_EXCERPT_LIMIT = 512


def request_excerpt(body: str, limit: int = REQUEST_EXCERPT_LIMIT) -> str:
    """Bounded copy of a request body for error messages"""
    if len(body) <= limit:
        return body
    return f"{body[:limit]}... [{len(body) - limit} more characters]"


def map_transport_error(error: BaseException, url: str) -> TransportError:
    mapped = TransportError(f"Request to {url} failed: {error}", url, cause=error)
    mapped.__cause__ = error
    return mapped


def map_status_error(status_code: int, url: str) -> HttpStatusError:
    return HttpStatusError(status_code, url)


def map_decode_error(raw: str, cause: BaseException, request_body: str) -> DecodeError:
    mapped = DecodeError(raw, cause, request_excerpt(request_body))
    mapped.__cause__ = cause
    return mapped


def merge_route_errors(primary: Optional[BatchError], fallback: BatchError) -> BatchError:
    """
    Pick the error to surface once both routes have failed.

    A status from either route wins over a transport failure, so callers only
    see a TransportError when no status was ever obtained.
    """
    if isinstance(fallback, TransportError) and isinstance(primary, HttpStatusError):
        merged = HttpStatusError(primary.status_code, primary.url)
        merged.__cause__ = fallback
        return merged
    return fallback
