"""Logging configuration for the library's own diagnostics.

Entries written by ``contextual_logger`` go to Cloud Logging; this module only
covers local warnings (missing configuration, unreachable backend), which
always land on the error stream.
"""
import logging

_configured = False


def _configure_logging() -> None:
    """Configure standard logging once, leaving existing handlers alone."""
    global _configured
    if _configured:
        return

    # basicConfig's default stream is stderr
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    _configured = True


def get_logger(name: str = __name__) -> logging.Logger:
    """Return a logger for local diagnostics."""
    _configure_logging()
    return logging.getLogger(name)
