import json
import logging
import sys
from datetime import datetime, timezone

from catalog.core.config import APP_VERSION

# Catalog fields passed via ``extra=`` that log queries filter on directly.
CONTEXT_FIELDS = (
    "product_id",
    "attribute_count",
    "variant_count",
    "added_count",
    "normalized_fields",
    "currency",
)

# Stored product rows can carry whole encoded blobs; cap them in log lines.
MAX_EXTRA_LENGTH = 256

_MASKED_TERMS = ("password", "secret", "token", "authorization", "cookie")
_RECORD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


def _clean(key: str, value):
    if any(term in key.lower() for term in _MASKED_TERMS):
        return "********"
    if isinstance(value, dict):
        return {k: _clean(k, v) for k, v in value.items()}
    if isinstance(value, str) and len(value) > MAX_EXTRA_LENGTH:
        return f"{value[:MAX_EXTRA_LENGTH]}...({len(value)} chars)"
    return value


class JSONFormatter(logging.Formatter):
    """One JSON object per line; catalog context fields sit at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": "catalog-tools",
            "version": APP_VERSION,
            "message": record.getMessage(),
        }
        from catalog.api.middleware.request_id import request_id_var
        request_id = request_id_var.get("")
        if request_id:
            entry["request_id"] = request_id

        extra = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            if key in CONTEXT_FIELDS:
                entry[key] = value
            else:
                extra[key] = _clean(key, value)
        if extra:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    root.addHandler(handler)

    # Request lines come from RequestIdMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
