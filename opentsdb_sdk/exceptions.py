"""
Exceptions raised by the OpenTSDB SDK.
"""


class OpenTsdbError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(OpenTsdbError, ValueError):
    """Raised when a client cannot be built from the given settings."""


class CredentialEncodingError(ConfigurationError):
    """Raised when basic-auth credentials cannot be encoded as UTF-8."""
