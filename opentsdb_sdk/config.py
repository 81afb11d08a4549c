"""
Configuration settings for the OpenTSDB SDK.
"""
import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError

DEFAULT_BATCH_SIZE_LIMIT = 0
CONN_TIMEOUT_DEFAULT_MS = 5000
READ_TIMEOUT_DEFAULT_MS = 5000

# Metrics ingestion endpoint
PUT_PATH = '/api/put'
VERSION_PATH = '/api/version'

# Server configuration
SERVER_URL = os.getenv('OPENTSDB_URL', 'http://localhost:4242')
LOGIN = os.getenv('OPENTSDB_LOGIN', '')
PASSWORD = os.getenv('OPENTSDB_PASSWORD', '')

# HTTP client configuration
CONNECT_TIMEOUT_MS = int(os.getenv('OPENTSDB_CONNECT_TIMEOUT_MS', str(CONN_TIMEOUT_DEFAULT_MS)))
READ_TIMEOUT_MS = int(os.getenv('OPENTSDB_READ_TIMEOUT_MS', str(READ_TIMEOUT_DEFAULT_MS)))

# Batching configuration
BATCH_SIZE_LIMIT = int(os.getenv('OPENTSDB_BATCH_SIZE_LIMIT', str(DEFAULT_BATCH_SIZE_LIMIT)))

# Logging configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


@dataclass(frozen=True)
class ClientConfig:
    """Validated, read-only settings for one client instance."""
    base_url: str
    connect_timeout_ms: int = CONN_TIMEOUT_DEFAULT_MS
    read_timeout_ms: int = READ_TIMEOUT_DEFAULT_MS
    login: Optional[str] = None
    password: Optional[str] = None
    batch_size_limit: int = DEFAULT_BATCH_SIZE_LIMIT

    @property
    def has_credentials(self) -> bool:
        """Basic auth is only used when both login and password are non-empty."""
        return bool(self.login) and bool(self.password)


def validate_batch_size_limit(batch_size_limit: int) -> int:
    """
    Check a batch size limit.

    Args:
        batch_size_limit (int): Maximum number of metrics per request, 0 for no limit

    Returns:
        int: The validated limit

    Raises:
        ConfigurationError: If the limit is not a non-negative integer
    """
    if isinstance(batch_size_limit, bool) or not isinstance(batch_size_limit, int):
        raise ConfigurationError(f"Batch size limit must be an integer, got {batch_size_limit!r}")
    if batch_size_limit < 0:
        raise ConfigurationError(f"Batch size limit must be >= 0, got {batch_size_limit}")
    return batch_size_limit


def _validate_timeout(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive number of milliseconds, got {value!r}")
    return value


def _validate_base_url(base_url: str) -> str:
    if not base_url or not isinstance(base_url, str):
        raise ConfigurationError("A base URL is required")
    parsed = urlparse(base_url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigurationError(f"Invalid OpenTSDB base URL: {base_url!r}")
    return base_url.rstrip('/')


def build_config(
    base_url: Optional[str] = None,
    connect_timeout_ms: Optional[int] = None,
    read_timeout_ms: Optional[int] = None,
    login: Optional[str] = None,
    password: Optional[str] = None,
    batch_size_limit: Optional[int] = None
) -> ClientConfig:
    """
    Build a client configuration, falling back to the environment defaults.

    Args:
        base_url (str, optional): Base URL of the OpenTSDB server. Defaults to SERVER_URL.
        connect_timeout_ms (int, optional): Connect timeout. Defaults to CONNECT_TIMEOUT_MS.
        read_timeout_ms (int, optional): Read timeout. Defaults to READ_TIMEOUT_MS.
        login (str, optional): Basic auth login. Defaults to LOGIN.
        password (str, optional): Basic auth password. Defaults to PASSWORD.
        batch_size_limit (int, optional): Maximum metrics per request. Defaults to BATCH_SIZE_LIMIT.

    Returns:
        ClientConfig: The validated configuration

    Raises:
        ConfigurationError: If any setting is invalid
    """
    return ClientConfig(
        base_url=_validate_base_url(base_url if base_url is not None else SERVER_URL),
        connect_timeout_ms=_validate_timeout(
            'Connect timeout',
            connect_timeout_ms if connect_timeout_ms is not None else CONNECT_TIMEOUT_MS
        ),
        read_timeout_ms=_validate_timeout(
            'Read timeout',
            read_timeout_ms if read_timeout_ms is not None else READ_TIMEOUT_MS
        ),
        login=login if login is not None else LOGIN,
        password=password if password is not None else PASSWORD,
        batch_size_limit=validate_batch_size_limit(
            batch_size_limit if batch_size_limit is not None else BATCH_SIZE_LIMIT
        ),
    )
