"""Invocation metadata for background (event-triggered) functions.

The Functions Framework hands event functions a ``context`` object describing
the triggering event. Its event id is the most reliable execution id there is,
so it is carried alongside the request context and preferred over the HTTP
header when both exist.
"""
import contextvars
from dataclasses import dataclass
from typing import Any, Optional

_metadata: contextvars.ContextVar = contextvars.ContextVar("cloud_function_metadata")


@dataclass(frozen=True)
class Metadata:
    event_id: str
    timestamp: Optional[str] = None
    event_type: Optional[str] = None
    resource: Any = None


def new_context(meta: Metadata, ctx: Optional[contextvars.Context] = None) -> contextvars.Context:
    """Return a copy of ``ctx`` (or of the running context) carrying ``meta``."""
    derived = ctx.copy() if ctx is not None else contextvars.copy_context()
    derived.run(_metadata.set, meta)
    return derived


def from_context(ctx: Optional[contextvars.Context]) -> Optional[Metadata]:
    if ctx is None:
        return None
    return ctx.get(_metadata)


def from_event_context(event_ctx) -> Metadata:
    """Build Metadata from a Functions Framework event ``context``."""
    return Metadata(
        event_id=getattr(event_ctx, "event_id", None) or "",
        timestamp=getattr(event_ctx, "timestamp", None),
        event_type=getattr(event_ctx, "event_type", None),
        resource=getattr(event_ctx, "resource", None),
    )
