"""
Secret providers for libsql connections
Looks up the endpoint URL and credentials from a key-value source
"""

import logging
import os
from typing import Mapping, Optional, Protocol

from .auth import connect, connect_with_credentials
from .connection import Connection
from .exceptions import ConfigError, SecretNotFoundError

logger = logging.getLogger(__name__)

TOKEN_KEY = "LIBSQL_CLIENT_TOKEN"
URL_KEY = "LIBSQL_CLIENT_URL"
USER_KEY = "LIBSQL_CLIENT_USER"
PASS_KEY = "LIBSQL_CLIENT_PASS"


class SecretProvider(Protocol):
    def get(self, key: str) -> str:
        """Return the secret stored under ``key`` or raise SecretNotFoundError"""
        ...


class MappingSecretProvider:
    """Secret provider backed by a mapping"""

    def __init__(self, secrets: Mapping[str, str]):
        self.secrets = secrets

    def get(self, key: str) -> str:
        try:
            return self.secrets[key]
        except KeyError:
            raise SecretNotFoundError(key) from None


class EnvironSecretProvider(MappingSecretProvider):
    """Secret provider backed by the process environment"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        super().__init__(os.environ if environ is None else environ)


def connect_from_config(provider: Optional[SecretProvider] = None) -> Connection:
    """
    Establish a connection from secrets.

    Token authentication is tried first and needs:
    * ``LIBSQL_CLIENT_TOKEN``
    * ``LIBSQL_CLIENT_URL``

    If either is missing, Basic authentication is used and needs:
    * ``LIBSQL_CLIENT_URL``
    * ``LIBSQL_CLIENT_USER``
    * ``LIBSQL_CLIENT_PASS``

    Args:
        provider: Secret source, defaults to the process environment

    Raises:
        ConfigError: If neither set of secrets is available
    """
    if provider is None:
        provider = EnvironSecretProvider()

    try:
        token = provider.get(TOKEN_KEY)
        url = provider.get(URL_KEY)
    except SecretNotFoundError as e:
        logger.debug("Token secrets unavailable (%s), trying credentials", e.key)
    else:
        return connect(url, token)

    try:
        url = provider.get(URL_KEY)
        username = provider.get(USER_KEY)
        password = provider.get(PASS_KEY)
    except SecretNotFoundError as e:
        raise ConfigError(str(e), {"key": e.key}) from e
    return connect_with_credentials(url, username, password)
