"""
Legacy route fallback for libsql batch requests
Older servers only accept batches on the root path, so a failed request to
the queries path is sent once more to the root path
"""

import logging
from typing import Awaitable, Callable, Tuple, TypeVar

from .connection import Connection
from .error_mapper import merge_route_errors
from .exceptions import BatchError, HttpStatusError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FALLBACK_ERRORS = (TransportError, HttpStatusError)


class LegacyRouteFallback:
    """Tries the queries route, then the legacy root route. Never more."""

    def __init__(self, connection: Connection):
        self.routes: Tuple[str, str] = (connection.queries_url, connection.base_url)

    def _on_primary_failure(self, error: BatchError) -> BatchError:
        logger.debug(
            "Request to %s failed (%s), retrying legacy route %s",
            self.routes[0],
            error.code,
            self.routes[1],
        )
        return error

    def execute(self, send: Callable[[str], T]) -> T:
        """
        Send to each route in order until one succeeds

        Args:
            send: Sends the request to the given URL; raises TransportError or
                HttpStatusError on failure

        Raises:
            TransportError: If no route answered
            HttpStatusError: If no route answered with 200
        """
        primary, legacy = self.routes
        try:
            return send(primary)
        except FALLBACK_ERRORS as error:
            primary_error = self._on_primary_failure(error)
        try:
            return send(legacy)
        except FALLBACK_ERRORS as error:
            raise merge_route_errors(primary_error, error)

    async def execute_async(self, send: Callable[[str], Awaitable[T]]) -> T:
        """Async variant of ``execute``"""
        primary, legacy = self.routes
        try:
            return await send(primary)
        except FALLBACK_ERRORS as error:
            primary_error = self._on_primary_failure(error)
        try:
            return await send(legacy)
        except FALLBACK_ERRORS as error:
            raise merge_route_errors(primary_error, error)
