"""
Statement and result codec for the libsql HTTP batch protocol
Uses the JSON schema shipped with the package to validate payloads
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union, cast

import jsonschema  # type: ignore[import-untyped]

from .exceptions import ValidationError

_validate: Callable[[object, Dict[str, Any]], None] = jsonschema.validate  # type: ignore[assignment]
JSValidationError = jsonschema.ValidationError  # type: ignore[assignment]

SCHEMA_PATH = Path(__file__).parent / "schema" / "libsql.schema.json"
with open(SCHEMA_PATH, encoding="utf-8") as f:
    SCHEMA = json.load(f)

Value = Union[None, int, float, str, bytes]


class CodecError(ValueError):
    """Raised when a response body does not match the batch protocol"""


@dataclass
class Statement:
    sql: str
    params: List[Value] = field(default_factory=list)

    @classmethod
    def coerce(cls, stmt: "StatementLike") -> "Statement":
        """Build a Statement from a Statement, a SQL string or a (sql, params) tuple"""
        if isinstance(stmt, Statement):
            return stmt
        if isinstance(stmt, str):
            return cls(stmt)
        if isinstance(stmt, tuple) and len(stmt) == 2:
            sql, params = stmt
            if not isinstance(params, (list, tuple)):
                raise ValidationError(
                    f"Statement params must be a list or tuple, got {type(params).__name__}",
                    {"statement": repr(stmt)[:100]},
                )
            return cls(sql, list(params))
        raise ValidationError(
            f"Unsupported statement type: {type(stmt).__name__}",
            {"statement": repr(stmt)[:100]},
        )

    def to_json(self) -> Any:
        if not self.params:
            return self.sql
        return {"q": self.sql, "params": [_encode_value(p) for p in self.params]}


StatementLike = Union[Statement, str, Tuple[str, Sequence[Value]]]


@dataclass
class ResultSet:
    columns: List[str]
    rows: List[List[Value]]

    def as_dicts(self) -> List[Dict[str, Value]]:
        return [dict(zip(self.columns, row)) for row in self.rows]


@dataclass
class QueryResult:
    success: bool
    result_set: Optional[ResultSet] = None
    error: Optional[str] = None


class SchemaValidator:
    @staticmethod
    def validate_against_schema(data: Any, schema_ref: str) -> None:
        """Validate data against a definition of the protocol schema"""
        schema_def = {
            "$ref": f"#/definitions/{schema_ref}",
            "definitions": cast(Dict[str, Any], SCHEMA["definitions"]),
        }
        _validate(data, schema_def)


def _encode_value(value: Value) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {"base64": base64.b64encode(bytes(value)).decode("ascii")}
    if value is None or isinstance(value, (int, float, str)):
        return value
    raise ValidationError(
        f"Unsupported parameter type: {type(value).__name__}",
        {"value": repr(value)[:100]},
    )


def _decode_value(value: Any) -> Value:
    if isinstance(value, dict):
        try:
            return base64.b64decode(value["base64"], validate=True)
        except binascii.Error as e:
            raise CodecError(f"Invalid base64 value: {e}") from e
    return value


def statements_to_body(statements: Iterable[StatementLike]) -> Tuple[str, int]:
    """
    Serialize statements into a request body

    Returns:
        Tuple[str, int]: JSON body and the number of statements
    """
    encoded = [Statement.coerce(stmt).to_json() for stmt in statements]
    payload = {"statements": encoded}
    try:
        SchemaValidator.validate_against_schema(payload, "BatchRequest")
    except JSValidationError as e:  # type: ignore[misc]
        raise ValidationError(f"Schema validation failed: {e.message}") from e
    return json.dumps(payload), len(encoded)


def body_to_query_results(body: str, statement_count: int) -> List[QueryResult]:
    """
    Decode a response body into one QueryResult per statement

    Raises:
        CodecError: If the body is not valid JSON, does not match the
            protocol schema, or holds the wrong number of results
    """
    try:
        response = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise CodecError(f"Response is not valid JSON: {e}") from e

    if not isinstance(response, list):
        raise CodecError(f"Response is not an array: {body[:100]}")
    if len(response) != statement_count:
        raise CodecError(
            f"Response array did not contain expected {statement_count} results"
        )
    try:
        SchemaValidator.validate_against_schema(response, "BatchResponse")
    except JSValidationError as e:  # type: ignore[misc]
        raise CodecError(f"Schema validation failed: {e.message}") from e
    except RecursionError as e:
        raise CodecError("Response is nested too deeply") from e

    results: List[QueryResult] = []
    for item in response:
        if "error" in item:
            results.append(QueryResult(success=False, error=item["error"]["message"]))
            continue
        result_set = item["results"]
        results.append(
            QueryResult(
                success=True,
                result_set=ResultSet(
                    columns=list(result_set["columns"]),
                    rows=[[_decode_value(v) for v in row] for row in result_set["rows"]],
                ),
            )
        )
    return results
