from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

_EMPTY: Mapping[str, str] = MappingProxyType({})

# request metadata (request id, domain, ...) attached to redirect engine log records
_request_fields: ContextVar[Mapping[str, str]] = ContextVar("redirect_request_fields", default=_EMPTY)


def request_logger() -> "Logger":
    """Logger bound to the redirect request currently being evaluated."""
    return logger.bind(**_request_fields.get())


@contextmanager
def request_ctx_scope(**fields: Any) -> Iterator["Logger"]:
    """
    Attach request metadata to every engine log record emitted inside the
    block and yield a logger already bound to it. ``None`` values are skipped.
    """
    merged = dict(_request_fields.get())
    merged.update({key: str(value) for key, value in fields.items() if value is not None})
    token = _request_fields.set(MappingProxyType(merged))
    try:
        yield request_logger()
    finally:
        _request_fields.reset(token)
