"""
OpenTSDB SDK for submitting time-series metrics over HTTP.
"""
from .batching import partition
from .client import (
    BatchOutcome,
    OpenTsdbClient,
    ensure_default_client,
    health_check,
    send_metrics
)
from .config import ClientConfig, build_config
from .exceptions import ConfigurationError, CredentialEncodingError, OpenTsdbError
from .log import setup_logging
from .metric import OpenTsdbMetric
from .transport import BasicAuthenticator, HttpTransport

__all__ = [
    'BasicAuthenticator',
    'BatchOutcome',
    'ClientConfig',
    'ConfigurationError',
    'CredentialEncodingError',
    'HttpTransport',
    'OpenTsdbClient',
    'OpenTsdbError',
    'OpenTsdbMetric',
    'build_config',
    'ensure_default_client',
    'health_check',
    'partition',
    'send_metrics',
    'setup_logging',
]
