"""Severity-aware logging for Google Cloud Functions.

Entries are tagged with the function's execution id so every line written
during one invocation can be found together in Cloud Logging. Without a
configured backend (local runs, tests) the same calls print to the console.

Usage::

    import contextual_logger as log

    def hello_world(request):
        ctx = log.for_request(request)
        log.info(ctx).println("Hello logs")
        log.error(ctx).println("Hello logs")
        log.flush()
"""
import contextvars
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import config
import metadata
from cloud_backend import LoggingBackend
from logging_config import get_logger
from severity import Severity

logger = get_logger(__name__)

_execution_id: contextvars.ContextVar = contextvars.ContextVar("cloud_function_execution_id")


def for_request(request) -> contextvars.Context:
    """Create a logging context for an inbound HTTP request.

    ``request`` is a Flask request (or anything with a ``headers`` mapping).
    The returned context is a copy of the running one; the caller's context is
    never modified.
    """
    ctx = contextvars.copy_context()
    execution_id = request.headers.get(config.EXECUTION_ID_HEADER)
    if execution_id:
        ctx.run(_execution_id.set, execution_id)
    return ctx


def _sprint(operands) -> str:
    # A space goes between two operands only when neither is a string
    parts = []
    for i, operand in enumerate(operands):
        if i > 0 and not isinstance(operand, str) and not isinstance(operands[i - 1], str):
            parts.append(" ")
        parts.append(str(operand))
    return "".join(parts)


@dataclass(frozen=True)
class Logger:
    """A logger bound to one severity and one execution id."""
    severity: Severity
    execution_id: str = ""
    backend: Optional[LoggingBackend] = field(default=None, repr=False, compare=False)

    def _log(self, text: str) -> None:
        text = text.rstrip("\n")

        if self.backend is not None:
            labels = {config.EXECUTION_ID_LABEL: self.execution_id} if self.execution_id else None
            try:
                self.backend.write(self.severity, text, labels)
            except Exception as e:
                logger.warning(f"Failed to buffer log entry: {e}")
            return

        stream = sys.stderr if self.severity.is_error else sys.stdout
        print(text, file=stream)

    def print(self, *operands: Any) -> None:
        """Log operands in their default format, spaced only between non-strings."""
        self._log(_sprint(operands))

    def println(self, *operands: Any) -> None:
        """Log operands separated by spaces, newline appended."""
        self._log(" ".join(str(operand) for operand in operands) + "\n")

    def printf(self, format: str, *operands: Any) -> None:
        """Log according to a %-style format string.

        A format that does not match its operands still logs: the format is
        kept verbatim and the operands are appended after a ``%!`` marker.
        """
        if not operands:
            self._log(format)
            return
        try:
            text = format % operands
        except (TypeError, ValueError) as e:
            text = f"{format} %!({e}) {operands!r}"
        self._log(text)


class LoggerFactory:
    """Hands out Loggers that share one backend handle.

    Build it once at process start and pass it to request handlers. ``backend``
    may be None, in which case every Logger writes to the console.
    """

    def __init__(self, backend: Optional[LoggingBackend] = None):
        self.backend = backend

    @classmethod
    def from_env(cls) -> "LoggerFactory":
        return cls(LoggingBackend.from_env())

    def for_request(self, request) -> contextvars.Context:
        return for_request(request)

    def flush(self) -> None:
        """Send buffered entries, blocking until done. No-op without a backend.

        Raises cloud_backend.FlushError if Cloud Logging rejects the batch.
        """
        if self.backend is not None:
            self.backend.flush()

    def new_logger(self, ctx: Optional[contextvars.Context], severity: Severity) -> Logger:
        execution_id = ""
        if ctx is not None:
            meta = metadata.from_context(ctx)
            if meta is not None:
                execution_id = meta.event_id
            else:
                execution_id = ctx.get(_execution_id, "")
        return Logger(severity, execution_id, self.backend)

    def default(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger with no assigned severity level."""
        return self.new_logger(ctx, Severity.DEFAULT)

    def debug(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for debug or trace information."""
        return self.new_logger(ctx, Severity.DEBUG)

    def info(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for routine information, such as ongoing status or performance."""
        return self.new_logger(ctx, Severity.INFO)

    def notice(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for normal but significant events, such as start up or configuration."""
        return self.new_logger(ctx, Severity.NOTICE)

    def warning(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for events that might cause problems."""
        return self.new_logger(ctx, Severity.WARNING)

    def error(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for events that are likely to cause problems."""
        return self.new_logger(ctx, Severity.ERROR)

    def critical(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for events that cause more severe problems or brief outages."""
        return self.new_logger(ctx, Severity.CRITICAL)

    def alert(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for when a person must take an action immediately."""
        return self.new_logger(ctx, Severity.ALERT)

    def emergency(self, ctx: Optional[contextvars.Context] = None) -> Logger:
        """Logger for when one or more systems are unusable."""
        return self.new_logger(ctx, Severity.EMERGENCY)


# --- Process-wide factory ---
# Built from the environment on first use and never rebuilt.
_default_factory: Optional[LoggerFactory] = None
_default_factory_lock = threading.Lock()


def default_factory() -> LoggerFactory:
    global _default_factory
    with _default_factory_lock:
        if _default_factory is None:
            _default_factory = LoggerFactory.from_env()
    return _default_factory


def flush() -> None:
    default_factory().flush()


def default(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().default(ctx)


def debug(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().debug(ctx)


def info(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().info(ctx)


def notice(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().notice(ctx)


def warning(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().warning(ctx)


def error(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().error(ctx)


def critical(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().critical(ctx)


def alert(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().alert(ctx)


def emergency(ctx: Optional[contextvars.Context] = None) -> Logger:
    return default_factory().emergency(ctx)
