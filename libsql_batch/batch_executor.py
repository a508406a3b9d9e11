"""
Batch execution for libsql connections
Sends a batch of statements over HTTP and decodes the per-statement results
"""

import logging
from typing import Dict, Iterable, List, Optional

import httpx
import requests  # type: ignore[import-untyped]

from .codec import CodecError, QueryResult, StatementLike, body_to_query_results, statements_to_body
from .connection import Connection
from .error_mapper import map_decode_error, map_status_error, map_transport_error
from .route_fallback import LegacyRouteFallback

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "libsql-batch-python/1.0.0"

RequestsException = requests.RequestException  # type: ignore[assignment,reportUnknownMemberType]


def _request_headers(connection: Connection) -> Dict[str, str]:
    return {
        "Authorization": connection.auth_header,
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }


def _decode(raw: str, body: str, statement_count: int) -> List[QueryResult]:
    try:
        return body_to_query_results(raw, statement_count)
    except CodecError as e:
        raise map_decode_error(raw, e, body)


class BatchExecutor:
    """Runs batches against a connection with an ``httpx.AsyncClient``"""

    def __init__(
        self,
        connection: Connection,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.connection = connection
        self.client = client
        self.timeout = timeout
        self.fallback = LegacyRouteFallback(connection)

    async def batch(self, statements: Iterable[StatementLike]) -> List[QueryResult]:
        """
        Execute a batch of statements

        Returns:
            List[QueryResult]: One result per statement, in order

        Raises:
            ValidationError: If a statement cannot be encoded
            TransportError: If neither route could be reached
            HttpStatusError: If neither route answered with 200
            DecodeError: If the response does not decode into one result per statement
        """
        body, statement_count = statements_to_body(statements)
        headers = _request_headers(self.connection)

        if self.client is not None:
            raw = await self._dispatch(self.client, body, headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                raw = await self._dispatch(client, body, headers)
        return _decode(raw, body, statement_count)

    async def _dispatch(
        self, client: httpx.AsyncClient, body: str, headers: Dict[str, str]
    ) -> str:
        async def _send(url: str) -> str:
            logger.debug("POST %s", url)
            try:
                response = await client.post(
                    url,
                    content=body,
                    headers=headers,
                    timeout=self.timeout,
                    follow_redirects=True,
                )
            except httpx.RequestError as e:
                raise map_transport_error(e, url)
            if response.status_code != 200:
                raise map_status_error(response.status_code, url)
            return response.text

        return await self.fallback.execute_async(_send)


class SyncBatchExecutor:
    """Runs batches against a connection with a ``requests.Session``"""

    def __init__(
        self,
        connection: Connection,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.connection = connection
        self.session = session
        self.timeout = timeout
        self.fallback = LegacyRouteFallback(connection)

    def batch(self, statements: Iterable[StatementLike]) -> List[QueryResult]:
        """Execute a batch of statements, blocking until it completes"""
        body, statement_count = statements_to_body(statements)
        headers = _request_headers(self.connection)

        if self.session is not None:
            raw = self._dispatch(self.session, body, headers)
        else:
            session = requests.Session()
            try:
                raw = self._dispatch(session, body, headers)
            finally:
                session.close()
        return _decode(raw, body, statement_count)

    def _dispatch(self, session: requests.Session, body: str, headers: Dict[str, str]) -> str:
        def _send(url: str) -> str:
            logger.debug("POST %s", url)
            try:
                response = session.post(
                    url,
                    data=body.encode("utf-8"),
                    headers=headers,
                    timeout=self.timeout,
                )
            except RequestsException as e:  # type: ignore[misc]
                raise map_transport_error(e, url)
            if response.status_code != 200:
                raise map_status_error(response.status_code, url)
            response.encoding = response.encoding or "utf-8"
            return response.text

        return self.fallback.execute(_send)
