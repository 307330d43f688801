"""Logging setup for the asset garage API.

One stdout handler on the root logger renders records either as JSON lines
(``LOG_FORMAT=json``) or as plain text. Both carry the id of the request
being served, which the request context middleware keeps in
``request_id_var``.
"""

import contextvars
import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Optional


request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

# Chatty at INFO; only their warnings are worth keeping.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "python_multipart")

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"

# Attributes every LogRecord has, plus the ones added by formatting and
# by _ContextFilter. Anything else on a record came in through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id"}

# User rows carry an opaque password; keep it and similar values out of logs.
_SECRET_VALUE = re.compile(r'(?i)((?:password|secret|token)["\']?\s*[=:]\s*["\']?)[^\s,\'"}]+')

_REDACTED = "***REDACTED***"


def redact(text: str) -> str:
    """Mask the value part of ``password=...`` style pairs in ``text``."""
    return _SECRET_VALUE.sub(lambda m: m.group(1) + _REDACTED, text)


class _ContextFilter(logging.Filter):
    """Stamp the current request id on each record and mask secrets.

    The message is rendered with its args before redaction, so values
    passed as ``%s`` arguments are masked too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Mismatched args: leave the record for the handler to report.
            return True
        record.msg = redact(message)
        record.args = ()
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra=`` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = request_id_var.get()
        if rid:
            entry["request_id"] = rid

        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in entry
        )
        if record.exc_info:
            entry["exc_info"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Replace the root handlers with the API's stdout handler.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to INFO.
        log_format: ``"json"`` or ``"text"``. Defaults to ``"json"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_ContextFilter())
    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured", extra={"level": level, "format": fmt})
