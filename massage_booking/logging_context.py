"""Request-scoped correlation IDs in log output.

Every line written through the configured root handlers is tagged with the
ID of the request that produced it, so one booking attempt can be followed
from the slot listing through the conflict check to the final insert.
Lines logged outside any request carry ``-``.

Usage:
    from massage_booking.logging_context import configure_logging, request_scope

    configure_logging("INFO")
    with request_scope() as request_id:
        guard.can_book(provider_id, start, 60)
        # 2024-06-10 14:05:00 [massage_booking.scheduling.conflict_guard] [REQ-1f2e3d4c] INFO: ...
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST)


def new_request_id(prefix: str = "REQ") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def get_request_id() -> str:
    return _request_id.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Tag log lines emitted inside the block with ``request_id``.

    A fresh ID is generated when none is given. The previous ID is restored
    on exit, so scopes nest and never leak across threads or tasks.
    """
    request_id = request_id or new_request_id()
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps ``request_id`` on each record a handler receives."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def install_request_id_filter(handler: logging.Handler) -> None:
    if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
        handler.addFilter(RequestIdFilter())


def configure_logging(level: str) -> None:
    """Set up root logging with request IDs in the line format.

    The filter goes on the root handlers rather than on individual loggers,
    so every module's ``logging.getLogger(__name__)`` output is tagged.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    for handler in logging.getLogger().handlers:
        install_request_id_filter(handler)
