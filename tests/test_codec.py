"""
Tests for the statement and result codec
"""

import json

import pytest

from libsql_batch import Statement, ValidationError
from libsql_batch.codec import CodecError, body_to_query_results, statements_to_body


class TestStatementsToBody:
    def test_plain_and_parameterized_statements(self) -> None:
        body, count = statements_to_body(
            [
                "CREATE TABLE t(id)",
                ("INSERT INTO t VALUES (?)", [42]),
                Statement("SELECT * FROM t WHERE id = ?", [None]),
            ]
        )

        assert count == 3
        assert json.loads(body) == {
            "statements": [
                "CREATE TABLE t(id)",
                {"q": "INSERT INTO t VALUES (?)", "params": [42]},
                {"q": "SELECT * FROM t WHERE id = ?", "params": [None]},
            ]
        }

    def test_blob_and_bool_params(self) -> None:
        body, _ = statements_to_body([("INSERT INTO t VALUES (?, ?)", [b"\x00\x01", True])])
        params = json.loads(body)["statements"][0]["params"]
        assert params == [{"base64": "AAE="}, 1]

    def test_empty_batch(self) -> None:
        body, count = statements_to_body([])
        assert count == 0
        assert json.loads(body) == {"statements": []}

    def test_unsupported_param(self) -> None:
        with pytest.raises(ValidationError):
            statements_to_body([("SELECT ?", [object()])])

    def test_unsupported_statement(self) -> None:
        with pytest.raises(ValidationError):
            statements_to_body([42])  # type: ignore[list-item]


class TestBodyToQueryResults:
    def test_success_and_error_entries(self) -> None:
        body = json.dumps(
            [
                {"results": {"columns": ["id", "data"], "rows": [[1, {"base64": "AAE="}]]}},
                {"error": {"message": "no such table: x"}},
            ]
        )
        results = body_to_query_results(body, 2)

        assert results[0].success is True
        assert results[0].result_set is not None
        assert results[0].result_set.rows == [[1, b"\x00\x01"]]
        assert results[0].result_set.as_dicts() == [{"id": 1, "data": b"\x00\x01"}]
        assert results[1].success is False
        assert results[1].error == "no such table: x"

    def test_count_mismatch(self) -> None:
        body = json.dumps([{"results": {"columns": [], "rows": []}}])
        with pytest.raises(CodecError, match="expected 2 results"):
            body_to_query_results(body, 2)

    def test_malformed_json(self) -> None:
        with pytest.raises(CodecError):
            body_to_query_results("{not json", 1)

    def test_not_an_array(self) -> None:
        with pytest.raises(CodecError):
            body_to_query_results('{"results": []}', 1)

    def test_entry_missing_results(self) -> None:
        with pytest.raises(CodecError, match="Schema validation failed"):
            body_to_query_results('[{"rows": []}]', 1)

    def test_invalid_base64_cell(self) -> None:
        body = json.dumps([{"results": {"columns": ["b"], "rows": [[{"base64": "abc"}]]}}])
        with pytest.raises(CodecError, match="Invalid base64"):
            body_to_query_results(body, 1)

    def test_deeply_nested_body(self) -> None:
        body = "[" * 100000 + "]" * 100000
        with pytest.raises(CodecError):
            body_to_query_results(body, 1)


class TestStatementCoerce:
    def test_tuple_with_tuple_params(self) -> None:
        stmt = Statement.coerce(("SELECT ?", (1,)))
        assert stmt.params == [1]

    def test_tuple_with_none_params(self) -> None:
        with pytest.raises(ValidationError, match="must be a list or tuple"):
            Statement.coerce(("SELECT 1", None))  # type: ignore[arg-type]
