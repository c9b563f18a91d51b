"""Cloud Logging backend handle for Cloud Functions."""
import threading
import time
from typing import Dict, Optional

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import logging as cloud_logging

import config
from logging_config import get_logger
from severity import Severity

logger = get_logger(__name__)


class FlushError(Exception):
    """Raised when buffered entries could not be sent to Cloud Logging."""


class LoggingBackend:
    """Buffers entries for one Cloud Logging logger and sends them in batches.

    ``cloud_logger`` is a ``google.cloud.logging.Logger`` (or anything with a
    compatible ``batch()``). Entries are appended to its current batch, which is
    committed once it holds ``batch_size`` entries or its oldest entry is
    ``max_latency`` seconds old, and on :meth:`flush`.
    """

    def __init__(
        self,
        cloud_logger,
        resource: Optional[cloud_logging.Resource] = None,
        batch_size: int = config.LOG_BATCH_SIZE,
        max_latency: float = config.LOG_MAX_LATENCY,
    ):
        self.cloud_logger = cloud_logger
        self.resource = resource
        self.batch_size = batch_size
        self.max_latency = max_latency
        self._lock = threading.Lock()
        self._batch = cloud_logger.batch()
        self._batch_started: Optional[float] = None

    @classmethod
    def connect(
        cls,
        project: Optional[str] = None,
        function_name: Optional[str] = None,
        region: Optional[str] = None,
    ) -> Optional["LoggingBackend"]:
        """Create a backend for the running function, or None if that is not possible.

        Missing configuration and client errors are reported as warnings; the
        caller falls back to console output.
        """
        required = (
            ("GCP_PROJECT", project),
            ("FUNCTION_NAME", function_name),
            ("FUNCTION_REGION", region),
        )
        for name, value in required:
            if not value:
                logger.warning(f"Failed to create logging client: {name} environment variable unset or missing")
                return None

        try:
            client = cloud_logging.Client(project=project)
        except Exception as e:
            logger.warning(f"Failed to create logging client: {e}")
            return None

        resource = cloud_logging.Resource(
            type=config.RESOURCE_TYPE,
            labels={"region": region, "function_name": function_name},
        )
        return cls(client.logger(config.LOG_NAME, resource=resource), resource=resource)

    @classmethod
    def from_env(cls) -> Optional["LoggingBackend"]:
        return cls.connect(config.GCP_PROJECT, config.FUNCTION_NAME, config.FUNCTION_REGION)

    def write(self, severity: Severity, payload: str, labels: Optional[Dict[str, str]] = None) -> None:
        """Buffer one entry; the batch is sent once it is full or old enough.

        Send failures here are logged as warnings, not raised.
        """
        entry = {"severity": severity.name}
        if labels:
            entry["labels"] = labels
        if self.resource is not None:
            entry["resource"] = self.resource
        with self._lock:
            self._batch.log_text(payload, **entry)
            if self._batch_started is None:
                self._batch_started = time.monotonic()
            full = len(self._batch.entries) >= self.batch_size
            stale = time.monotonic() - self._batch_started >= self.max_latency
            if not (full or stale):
                return
            batch = self._swap_batch()
        try:
            self._commit(batch)
        except FlushError as e:
            logger.warning(str(e))

    def flush(self) -> None:
        """Send every buffered entry. Blocks until Cloud Logging has answered."""
        with self._lock:
            batch = self._swap_batch()
        self._commit(batch)

    def _swap_batch(self):
        batch, self._batch = self._batch, self.cloud_logger.batch()
        self._batch_started = None
        return batch

    def _commit(self, batch) -> None:
        pending = len(batch.entries)
        if not pending:
            return
        try:
            batch.commit()
        except (api_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            raise FlushError(f"Failed to flush {pending} log entries: {e}") from e
