"""
HTTP transport for talking to an OpenTSDB server.
"""
import base64
import logging
from typing import Any, Callable, Optional, Sequence

import requests

from . import config
from .exceptions import CredentialEncodingError

logger = logging.getLogger(__name__)

RequestHook = Callable[[requests.PreparedRequest], requests.PreparedRequest]


class BasicAuthenticator:
    """Request hook that adds an HTTP basic Authorization header."""

    def __init__(self, login: str, password: str):
        """
        Initialize the authenticator.

        The header value is computed here so that credentials which cannot be
        encoded fail when the client is built rather than on every request.

        Args:
            login (str): Basic auth login
            password (str): Basic auth password

        Raises:
            CredentialEncodingError: If the credentials cannot be encoded as UTF-8
        """
        self.login = login
        self.header_value = self._basic_authentication(login, password)

    @staticmethod
    def _basic_authentication(login: str, password: str) -> str:
        token = f"{login}:{password}"
        try:
            encoded = token.encode('utf-8')
        except UnicodeEncodeError as e:
            raise CredentialEncodingError("Cannot encode credentials with UTF-8") from e
        return "Basic " + base64.b64encode(encoded).decode('ascii')

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers['Authorization'] = self.header_value
        return request


class HttpTransport:
    """Sends JSON requests to a fixed OpenTSDB base URL over a shared session."""

    def __init__(
        self,
        base_url: str,
        connect_timeout_ms: int = config.CONN_TIMEOUT_DEFAULT_MS,
        read_timeout_ms: int = config.READ_TIMEOUT_DEFAULT_MS,
        request_hooks: Sequence[RequestHook] = (),
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the transport.

        Args:
            base_url (str): Base URL of the OpenTSDB server
            connect_timeout_ms (int): Connect timeout in milliseconds
            read_timeout_ms (int): Read timeout in milliseconds
            request_hooks (sequence, optional): Callables applied to every prepared request
            session (requests.Session, optional): Session to use. A new one is created by default.
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = (connect_timeout_ms / 1000.0, read_timeout_ms / 1000.0)
        self.request_hooks = tuple(request_hooks)
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, client_config: config.ClientConfig) -> 'HttpTransport':
        """
        Build a transport for a validated client configuration.

        Args:
            client_config (ClientConfig): The client configuration

        Returns:
            HttpTransport: The transport, with basic auth registered when credentials are set
        """
        hooks = []
        if client_config.has_credentials:
            hooks.append(BasicAuthenticator(client_config.login, client_config.password))
        return cls(
            client_config.base_url,
            connect_timeout_ms=client_config.connect_timeout_ms,
            read_timeout_ms=client_config.read_timeout_ms,
            request_hooks=hooks
        )

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        prepared = self.session.prepare_request(requests.Request(method, url, **kwargs))
        for hook in self.request_hooks:
            prepared = hook(prepared)

        response = self.session.send(prepared, timeout=self.timeout)
        response.raise_for_status()
        return response

    def post(self, path: str, payload: Any) -> requests.Response:
        """
        POST a JSON payload.

        Args:
            path (str): Path relative to the base URL
            payload: JSON serializable body

        Returns:
            requests.Response: The response

        Raises:
            requests.RequestException: If the request fails or returns an error status
            TypeError: If the payload cannot be serialized
        """
        return self._send('POST', path, json=payload)

    def get(self, path: str) -> requests.Response:
        return self._send('GET', path)

    def close(self) -> None:
        self.session.close()
