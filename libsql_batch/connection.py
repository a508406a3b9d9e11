"""
Database connection value
Holds the normalized endpoint and the authorization header for a database
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from .codec import QueryResult, StatementLike

QUERIES_PATH = "/queries"


@dataclass(frozen=True)
class Connection:
    """
    Immutable connection to a database endpoint.

    Build one with ``connect``, ``connect_with_credentials``,
    ``connect_from_url`` or ``connect_from_config``. Instances hold no
    sockets and can be shared freely between concurrent batch calls.
    """

    base_url: str
    auth_header: str = field(repr=False)

    @property
    def queries_url(self) -> str:
        return self.base_url + QUERIES_PATH

    async def batch(
        self,
        statements: Iterable[StatementLike],
        client: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> List[QueryResult]:
        """
        Execute a batch of SQL statements.

        Each statement runs in its own transaction unless the batch wraps
        them in BEGIN and END.

        Args:
            statements: SQL strings, ``Statement`` objects or ``(sql, params)`` tuples
            client: Optional ``httpx.AsyncClient`` to send requests with
            timeout: Transport timeout in seconds

        Returns:
            List[QueryResult]: One result per statement, in order
        """
        from .batch_executor import BatchExecutor, DEFAULT_TIMEOUT

        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        executor = BatchExecutor(self, client=client, timeout=timeout)
        return await executor.batch(statements)

    def batch_sync(
        self,
        statements: Iterable[StatementLike],
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> List[QueryResult]:
        """Blocking variant of ``batch`` backed by a ``requests.Session``"""
        from .batch_executor import SyncBatchExecutor, DEFAULT_TIMEOUT

        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        executor = SyncBatchExecutor(self, session=session, timeout=timeout)
        return executor.batch(statements)

    async def execute(
        self,
        statement: StatementLike,
        client: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> QueryResult:
        """Execute a single statement"""
        results = await self.batch([statement], client=client, timeout=timeout)
        return results[0]
