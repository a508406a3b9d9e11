"""
Pytest configuration for libsql batch client tests
"""

import json
from typing import Any, Callable, Dict, List

import pytest

from libsql_batch import Connection, connect


@pytest.fixture
def connection() -> Connection:
    return connect("db.example.com", "secret-token")


@pytest.fixture
def make_response_body() -> Callable[[int], str]:
    def _make(count: int) -> str:
        results: List[Dict[str, Any]] = [
            {"results": {"columns": ["n"], "rows": [[i]]}} for i in range(count)
        ]
        return json.dumps(results)

    return _make
