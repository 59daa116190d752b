"""
Contextual logging for MDB_TYPED.

A correlation id and the current store context (database, collection,
document) live in context variables, so concurrent requests on the same
event loop keep separate values. ``get_logger`` returns an adapter that
stamps both onto every record it emits.

Usage:
    set_correlation_id(request_id)
    with store_context(collection_name="mesocycles"):
        logger.info("Loading active mesocycles")
"""

import contextlib
import contextvars
import logging
import uuid
from collections.abc import Iterator
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mdb_typed_correlation_id", default=None
)
_store_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "mdb_typed_store_context", default={}
)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation id to the current context, generating one when omitted."""
    value = correlation_id or uuid.uuid4().hex
    _correlation_id.set(value)
    return value


def clear_correlation_id() -> None:
    _correlation_id.set(None)


def set_store_context(db_name: str | None = None, **fields: Any) -> None:
    """
    Merge store fields (``db_name``, ``collection_name``, ``document_id``)
    into the current context. ``None`` values are not recorded.
    """
    merged = dict(_store_context.get())
    merged.update({k: v for k, v in {"db_name": db_name, **fields}.items() if v is not None})
    _store_context.set(merged)


def clear_store_context() -> None:
    _store_context.set({})


@contextlib.contextmanager
def store_context(**fields: Any) -> Iterator[None]:
    """Add store fields for the duration of a block, restoring the previous ones after."""
    token = _store_context.set({**_store_context.get(), **fields})
    try:
        yield
    finally:
        _store_context.reset(token)


def get_logging_context() -> dict[str, Any]:
    """Snapshot of the correlation id and store fields bound to the current context."""
    context = dict(_store_context.get())
    correlation_id = _correlation_id.get()
    if correlation_id is not None:
        context["correlation_id"] = correlation_id
    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """Adds the current logging context to each record; explicit ``extra`` wins on conflict."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**get_logging_context(), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    level: int = logging.INFO,
    success: bool = True,
    duration_ms: float | None = None,
    **fields: Any,
) -> None:
    """
    Emit one structured record for a store operation.

    Args:
        logger: Logger or adapter to write to
        operation: Qualified operation name, e.g. "mesocycles.find_all"
        level: Log level
        success: Whether the operation completed without raising
        duration_ms: Elapsed time, if measured
        **fields: Extra structured fields
    """
    extra = {**get_logging_context(), **fields, "operation": operation, "success": success}
    status = "completed" if success else "failed"
    message = f"{operation} {status}"
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
        message += f" in {duration_ms:.2f}ms"

    logger.log(level, message, extra=extra)
