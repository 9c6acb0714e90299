"""Logging setup for microlend scripts and services."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from microlend.sinks.serialization import serialize_value

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
STANDARD_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Libraries whose DEBUG output drowns ours
QUIET_LOGGERS = ("faker",)


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route all log records to a single stream handler.

    Any handlers already on the root logger are replaced, so calling this
    twice does not duplicate output.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        "standard" for pipe-delimited text, "json" for one object per line.
    stream : TextIO | None
        Destination; stdout when omitted.

    Returns
    -------
    logging.Handler
        The installed handler.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=STANDARD_FORMAT, datefmt=STANDARD_DATEFMT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("microlend").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Fields passed as ``extra={"extra": {...}}`` are merged into the object;
    amounts and dates in them are written the same way the JSON sink
    writes them.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            log_data.update(serialize_value(extra))

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``microlend`` namespace.

    Names outside the package (e.g. ``scripts.portfolio_report``) are
    prefixed so ``setup_logging`` levels apply to them too.
    """
    if name != "microlend" and not name.startswith("microlend."):
        name = f"microlend.{name}"
    return logging.getLogger(name)
