"""
OpenTSDB client for submitting metrics over the HTTP API.

Metrics are optionally split into batches (see ``set_batch_size_limit``) and
each batch is sent as one request. A failing batch is logged and skipped; it
never stops the remaining batches and never raises to the caller.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union

import requests

from . import config
from .batching import partition
from .metric import OpenTsdbMetric
from .transport import HttpTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchOutcome:
    """Result of sending one batch."""
    size: int
    success: bool
    error: Optional[BaseException] = None


OutcomeCallback = Callable[[List[BatchOutcome]], None]


class OpenTsdbClient:
    """Client for sending metrics to an OpenTSDB server."""

    def __init__(
        self,
        client_config: Optional[config.ClientConfig] = None,
        transport: Optional[HttpTransport] = None,
        on_outcomes: Optional[OutcomeCallback] = None
    ):
        """
        Initialize the client.

        Args:
            client_config (ClientConfig, optional): Client settings. Defaults to the environment config.
            transport (HttpTransport, optional): Transport to use. Built from the config by default.
            on_outcomes (callable, optional): Called with the list of BatchOutcome after each send

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = client_config or config.build_config()
        self.transport = transport or HttpTransport.from_config(self.config)
        self.on_outcomes = on_outcomes
        self._batch_size_limit = config.validate_batch_size_limit(self.config.batch_size_limit)

    @classmethod
    def for_service(
        cls,
        base_url: str,
        connect_timeout_ms: int = config.CONN_TIMEOUT_DEFAULT_MS,
        read_timeout_ms: int = config.READ_TIMEOUT_DEFAULT_MS,
        login: Optional[str] = None,
        password: Optional[str] = None,
        batch_size_limit: int = config.DEFAULT_BATCH_SIZE_LIMIT,
        on_outcomes: Optional[OutcomeCallback] = None
    ) -> 'OpenTsdbClient':
        """
        Create a client for the given OpenTSDB base URL.

        Settings not passed here use the documented defaults, not the environment.

        Args:
            base_url (str): Base URL of the OpenTSDB server
            connect_timeout_ms (int): Connect timeout in milliseconds
            read_timeout_ms (int): Read timeout in milliseconds
            login (str, optional): Basic auth login
            password (str, optional): Basic auth password
            batch_size_limit (int): Maximum metrics per request, 0 for no limit
            on_outcomes (callable, optional): Called with the list of BatchOutcome after each send

        Returns:
            OpenTsdbClient: The client

        Raises:
            ConfigurationError: If any setting is invalid
            CredentialEncodingError: If the credentials cannot be encoded
        """
        client_config = config.build_config(
            base_url=base_url,
            connect_timeout_ms=connect_timeout_ms,
            read_timeout_ms=read_timeout_ms,
            login=login or '',
            password=password or '',
            batch_size_limit=batch_size_limit
        )
        return cls(client_config, on_outcomes=on_outcomes)

    @classmethod
    def create(
        cls,
        transport: HttpTransport,
        batch_size_limit: int = config.DEFAULT_BATCH_SIZE_LIMIT,
        on_outcomes: Optional[OutcomeCallback] = None
    ) -> 'OpenTsdbClient':
        """
        Create a client around an existing transport.

        Args:
            transport (HttpTransport): The transport to send requests with
            batch_size_limit (int): Maximum metrics per request, 0 for no limit
            on_outcomes (callable, optional): Called with the list of BatchOutcome after each send

        Returns:
            OpenTsdbClient: The client
        """
        client_config = config.ClientConfig(
            base_url=transport.base_url,
            batch_size_limit=config.validate_batch_size_limit(batch_size_limit)
        )
        return cls(client_config, transport=transport, on_outcomes=on_outcomes)

    @property
    def batch_size_limit(self) -> int:
        return self._batch_size_limit

    def set_batch_size_limit(self, batch_size_limit: int) -> None:
        """
        Change the batch size limit for subsequent sends.

        OpenTSDB has been known to reject large batches; 5 to 10 metrics per
        request is a safe choice.

        Args:
            batch_size_limit (int): Maximum metrics per request, 0 for no limit

        Raises:
            ConfigurationError: If the limit is negative
        """
        self._batch_size_limit = config.validate_batch_size_limit(batch_size_limit)

    def send_metric(self, metric: OpenTsdbMetric) -> None:
        """
        Send a single metric.

        Args:
            metric (OpenTsdbMetric): The metric to send
        """
        self.send({metric})

    def send(self, metrics: Union[OpenTsdbMetric, Iterable[OpenTsdbMetric]]) -> None:
        """
        Send one metric or a collection of metrics.

        Equal metrics are only sent once. Nothing is returned and per-batch
        failures are only reported through logging and the ``on_outcomes``
        callback.

        Args:
            metrics: An OpenTsdbMetric or an iterable of them
        """
        if isinstance(metrics, OpenTsdbMetric):
            metrics = {metrics}
        else:
            metrics = set(metrics)

        if not metrics:
            return

        outcomes = []
        for batch in partition(metrics, self._batch_size_limit):
            if batch:
                outcomes.append(self._send_batch(batch))

        self._report(outcomes)

    def _send_batch(self, batch: List[OpenTsdbMetric]) -> BatchOutcome:
        try:
            self.transport.post(config.PUT_PATH, [metric.to_dict() for metric in batch])
        except Exception as e:
            logger.error("Send to OpenTSDB endpoint failed for batch of %d metrics: %s",
                         len(batch), str(e), exc_info=True)
            return BatchOutcome(size=len(batch), success=False, error=e)

        logger.debug("Sent batch of %d metrics", len(batch))
        return BatchOutcome(size=len(batch), success=True)

    def _report(self, outcomes: List[BatchOutcome]) -> None:
        failed = sum(1 for outcome in outcomes if not outcome.success)
        if failed:
            logger.warning("%d of %d batches failed to send", failed, len(outcomes))

        if self.on_outcomes is None:
            return
        try:
            self.on_outcomes(outcomes)
        except Exception:
            logger.exception("Outcome callback raised")

    def health_check(self) -> bool:
        """
        Check if the OpenTSDB server is accessible.

        Returns:
            bool: True if server is accessible, False otherwise
        """
        try:
            self.transport.get(config.VERSION_PATH)
            return True
        except requests.exceptions.RequestException as e:
            logger.warning("OpenTSDB health check failed: %s", str(e))
            return False

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> 'OpenTsdbClient':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


# Shared client for the module-level helpers, created on first use
default_client = None


def ensure_default_client() -> OpenTsdbClient:
    """
    Return the default client, building it from the environment config if needed.

    Returns:
        OpenTsdbClient: The default client
    """
    global default_client
    if default_client is None:
        default_client = OpenTsdbClient()
    return default_client


def send_metrics(metrics: Union[OpenTsdbMetric, Iterable[OpenTsdbMetric]]) -> None:
    """
    Send metrics using the default client.

    Args:
        metrics: An OpenTsdbMetric or an iterable of them
    """
    ensure_default_client().send(metrics)


def health_check() -> bool:
    """
    Check if the OpenTSDB server is accessible using the default client.

    Returns:
        bool: True if server is accessible, False otherwise
    """
    return ensure_default_client().health_check()
