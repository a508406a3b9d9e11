"""Exception classes for the libsql batch client"""

from typing import Any, Dict, Optional


class Error(Exception):
    """Base class for all client exceptions"""

    code = "ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(Error):
    """Raised when a statement cannot be encoded"""

    code = "INVALID_QUERY"


class ConfigError(Error):
    """Raised when connection settings are missing from a secret provider"""

    code = "CONFIG_ERROR"


class SecretNotFoundError(Error, LookupError):
    """Raised by a secret provider when a key is absent"""

    code = "SECRET_NOT_FOUND"

    def __init__(self, key: str):
        super().__init__(f"Secret not found: {key}", {"key": key})
        self.key = key


class BatchError(Error):
    """Base class for failures surfaced by connection constructors and batch calls"""


class UrlError(BatchError):
    """Raised for malformed endpoint URLs"""

    code = "INVALID_URL"


class AuthEncodingError(BatchError):
    """Raised when an authorization header value cannot be sent over HTTP"""

    code = "AUTH_ENCODING_ERROR"


class TransportError(BatchError):
    """Network-level failure: DNS, refused connection, transport timeout"""

    code = "CONNECTION_ERROR"

    def __init__(self, message: str, url: str, cause: Optional[BaseException] = None):
        super().__init__(message, {"url": url})
        self.url = url
        self.cause = cause


class HttpStatusError(BatchError):
    """The endpoint answered with a status other than 200"""

    code = "HTTP_STATUS_ERROR"

    def __init__(self, status_code: int, url: str):
        super().__init__(
            f"Unexpected HTTP status {status_code} from {url}",
            {"status_code": status_code, "url": url},
        )
        self.status_code = status_code
        self.url = url


class DecodeError(BatchError):
    """A 200 response body could not be decoded into the expected results"""

    code = "DECODE_ERROR"

    def __init__(
        self,
        raw: str,
        cause: BaseException,
        request_excerpt: str = "",
    ):
        super().__init__(
            f"Error: {cause} ({request_excerpt})",
            {"request": request_excerpt},
        )
        self.raw = raw
        self.cause = cause
        self.request_excerpt = request_excerpt
