# slashnote/utils/logging.py
"""JSON log output correlated per note submission.

Provides:
- StructuredFormatter: one JSON object per log line, including `extra=` fields
- request_context: scopes a correlation id to one note submission
- configure_structured_logging: installs the formatter on the root logger
"""

import json
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Correlation id of the note submission being processed, "" outside one
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Attributes every LogRecord has; anything else was passed through `extra=`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_request_id() -> str:
    """Return the current correlation id, or "" when none is set."""
    return request_id_var.get()


@contextmanager
def request_context(request_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the duration of a block.

    The previous id is restored on exit, also when the block raises.

    Args:
        request_id: Id to bind. A new random hex id is generated if omitted.

    Yields:
        The bound id.

    Example:
        >>> with request_context() as request_id:
        ...     logger.info("interpreting note")  # carries request_id
    """
    request_id = request_id or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        request_id_var.reset(token)


class StructuredFormatter(logging.Formatter):
    """Formats records as single-line JSON.

    Every line has timestamp, level, logger and message. The correlation id
    is added when one is bound, then any `extra=` fields and the formatted
    exception, if present. Values JSON cannot encode are written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id

        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_structured_logging(level: int | str = logging.INFO) -> None:
    """Send all logging to stderr as JSON lines.

    Installs a StreamHandler with StructuredFormatter on the root logger.
    A handler installed by an earlier call is replaced, not duplicated.

    Args:
        level: Root logger level, as a number or a name such as "DEBUG".
    """
    for handler in list(logging.root.handlers):
        if isinstance(handler.formatter, StructuredFormatter):
            logging.root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(level)
