"""Structured Logging — JSON log lines and a per-request access log.

Invariants:
    - Every line carries timestamp, level, logger, message
    - Shop identifiers (user_id, post_id, shirt_id) and request fields (method,
      path, status_code, duration_ms, error_code) are emitted only when set
    - Thai text stays readable in the output (no \\u escapes)
    - setup_logging is idempotent: repeated lifespans do not duplicate lines

Design Decisions:
    - stdlib logging with a custom formatter, extras passed via `extra=`
    - Access log written by our middleware; uvicorn's own access logger is
      silenced so each request is logged once, in the same format
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

LOG_FIELDS = (
    "user_id", "post_id", "shirt_id",
    "method", "path", "status_code", "duration_ms", "error_code",
)

access_logger = logging.getLogger("app.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, getattr(record, key))
            for key in LOG_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the single root handler; called from the lifespan."""
    if fmt == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.set_name("shirtshop")

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == "shirtshop"]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("uvicorn.access").disabled = True


async def log_requests(request: Request, call_next):
    """HTTP middleware: one access line per request with status and timing."""
    started = time.perf_counter()
    response = await call_next(request)
    access_logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )
    return response
