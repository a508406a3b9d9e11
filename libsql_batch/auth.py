"""
Authorization strategies for libsql connections
Builds the Authorization header from a bearer token or a username/password pair
"""

import base64
from dataclasses import dataclass, field
from typing import Union

from .connection import Connection
from .exceptions import AuthEncodingError

DEFAULT_SCHEME = "https://"
_FORBIDDEN_HEADER_CHARS = ("\r", "\n", "\0")


@dataclass(frozen=True)
class BearerCredential:
    token: str = field(repr=False)

    def header_value(self) -> str:
        return f"Bearer {self.token}"


@dataclass(frozen=True)
class BasicCredential:
    username: str
    password: str = field(default="", repr=False)

    def header_value(self) -> str:
        userpass = f"{self.username}:{self.password}".encode("utf-8")
        return "Basic " + base64.b64encode(userpass).decode("ascii")


AuthCredential = Union[BearerCredential, BasicCredential]


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when the URL carries no scheme"""
    if "://" not in url:
        return DEFAULT_SCHEME + url
    return url


def _check_header_value(value: str) -> None:
    if any(char in value for char in _FORBIDDEN_HEADER_CHARS):
        raise AuthEncodingError("Authorization header contains control characters")
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as e:
        raise AuthEncodingError(
            "Authorization header is not latin-1 encodable", {"reason": e.reason}
        ) from e


def build_connection(url: str, credential: AuthCredential) -> Connection:
    """
    Build a connection from an endpoint URL and a credential

    Args:
        url: Endpoint URL, with or without a scheme
        credential: Bearer or Basic credential

    Returns:
        Connection: Immutable connection value

    Raises:
        AuthEncodingError: If the header value cannot be sent over HTTP
    """
    header = credential.header_value()
    _check_header_value(header)
    return Connection(base_url=normalize_url(url), auth_header=header)


def connect(url: str, token: str) -> Connection:
    """Establish a connection authenticated with a bearer token"""
    return build_connection(url, BearerCredential(token))


def connect_with_credentials(url: str, username: str, password: str) -> Connection:
    """Establish a connection authenticated with HTTP Basic credentials"""
    return build_connection(url, BasicCredential(username, password))
