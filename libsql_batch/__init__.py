"""
libsql batch client

A Python client that sends batches of SQL statements to a libsql server over
HTTP and returns per-statement results.
"""

import logging

from .auth import (
    AuthCredential,
    BasicCredential,
    BearerCredential,
    build_connection,
    connect,
    connect_with_credentials,
    normalize_url,
)
from .batch_executor import BatchExecutor, SyncBatchExecutor
from .codec import QueryResult, ResultSet, Statement, Value
from .connection import Connection
from .dsn_parser import DSNParser, ParsedURL, connect_from_url
from .exceptions import (
    AuthEncodingError,
    BatchError,
    ConfigError,
    DecodeError,
    Error,
    HttpStatusError,
    SecretNotFoundError,
    TransportError,
    UrlError,
    ValidationError,
)
from .secret_provider import (
    EnvironSecretProvider,
    MappingSecretProvider,
    SecretProvider,
    connect_from_config,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__license__ = "Apache-2.0"

__all__ = [
    "Connection",
    "connect",
    "connect_with_credentials",
    "connect_from_url",
    "connect_from_config",
    "build_connection",
    "normalize_url",
    "AuthCredential",
    "BearerCredential",
    "BasicCredential",
    "DSNParser",
    "ParsedURL",
    "SecretProvider",
    "EnvironSecretProvider",
    "MappingSecretProvider",
    "BatchExecutor",
    "SyncBatchExecutor",
    "Statement",
    "QueryResult",
    "ResultSet",
    "Value",
    # Exceptions
    "Error",
    "BatchError",
    "UrlError",
    "AuthEncodingError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "ConfigError",
    "ValidationError",
    "SecretNotFoundError",
]
