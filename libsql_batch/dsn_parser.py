"""
URL parser for libsql connections
Parses endpoint URLs in the format:
scheme://[username[:password]@]host[:port][/path][?token=value]
"""

from typing import Dict, Optional, Union
from urllib.parse import ParseResult, SplitResult, parse_qs, unquote, urlsplit, urlunsplit

from .auth import connect, connect_with_credentials
from .connection import Connection
from .exceptions import UrlError

TOKEN_PARAM = "token"

URLLike = Union[str, SplitResult, ParseResult]


class ParsedURL:
    """Parsed URL components"""

    def __init__(
        self,
        url: str,
        scheme: str,
        host: str,
        cleaned_url: str,
        port: Optional[int] = None,
        username: str = "",
        password: str = "",
        token: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
    ):
        self.url = url
        self.scheme = scheme
        self.host = host
        self.cleaned_url = cleaned_url
        self.port = port
        self.username = username
        self.password = password
        self.token = token
        self.params = params or {}


class DSNParser:
    """Parser for libsql endpoint URLs"""

    @staticmethod
    def parse(url: URLLike) -> ParsedURL:
        """
        Parse an absolute endpoint URL

        Args:
            url: URL string or ``urllib.parse`` result

        Returns:
            ParsedURL: Parsed URL components

        Raises:
            UrlError: If the URL is not absolute or cannot be parsed
        """
        if isinstance(url, (SplitResult, ParseResult)):
            url = url.geturl()
        if not url or not isinstance(url, str):
            raise UrlError("URL must be a non-empty string")

        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as e:
            raise UrlError(f"Invalid URL: {e}", {"url": url}) from e

        if not parts.scheme or not parts.netloc:
            raise UrlError("URL must be absolute", {"url": url})

        host = parts.netloc.rpartition("@")[2]
        if not host or host.startswith(":"):
            raise UrlError(
                "Could not extract username from URL. Invalid URL?", {"url": url}
            )

        params: Dict[str, str] = {}
        if parts.query:
            for key, values in parse_qs(parts.query, keep_blank_values=True).items():
                if values:
                    params[key] = values[0]

        cleaned = urlunsplit(
            (parts.scheme, host, parts.path, parts.query, parts.fragment)
        )

        return ParsedURL(
            url=url,
            scheme=parts.scheme,
            host=host,
            cleaned_url=cleaned,
            port=port,
            username=unquote(parts.username) if parts.username else "",
            password=unquote(parts.password) if parts.password else "",
            token=params.get(TOKEN_PARAM),
            params=params,
        )


def connect_from_url(url: URLLike) -> Connection:
    """
    Establish a connection from an endpoint URL.

    A ``token`` query parameter selects bearer authentication and the URL is
    used as given. Otherwise the userinfo component supplies Basic
    credentials and is removed from the connection URL. Percent-encoded
    userinfo is decoded first, so ``user%40name`` is sent as ``user@name``.

    Raises:
        UrlError: If the URL is malformed
    """
    parsed = DSNParser.parse(url)
    if parsed.token is not None:
        return connect(parsed.url, parsed.token)
    return connect_with_credentials(parsed.cleaned_url, parsed.username, parsed.password)
