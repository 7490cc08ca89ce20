"""Logging setup that tags every record with the envelope's request ID."""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Request ID of the envelope being handled; "-" outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s - %(message)s"

# Client libraries that log every provider round trip at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class RequestIDFilter(logging.Filter):
    """Copy the request ID from the context into each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def generate_request_id() -> str:
    """Return a 12-character hex request ID."""
    return uuid.uuid4().hex[:12]


@contextmanager
def request_context(request_id: str | None = None) -> Iterator[str]:
    """Bind a request ID to the current context for the duration of the block.

    Log records emitted inside the block, including those from the task
    router and the provider client, carry the ID. The previous value is
    restored on exit.
    """
    rid = request_id or generate_request_id()
    token = request_id_var.set(rid)
    try:
        yield rid
    finally:
        request_id_var.reset(token)


def setup_logging(level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Calling this again replaces the previous handler, so building a second
    app in the same process does not duplicate output.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIDFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
