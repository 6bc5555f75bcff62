"""Structured Logging — JSON formatter and setup for audit-grade observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Audit fields (event, transfer_id, wallet_id, old_state, ...) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging, no extra dependency
    - Callers pass audit fields through `extra=`; the formatter whitelists keys
      so arbitrary LogRecord attributes never leak into the output
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone

AUDIT_FIELDS: tuple[str, ...] = (
    "event", "transfer_id", "wallet_id", "user_id", "amount", "coin",
    "urgency", "requires_manual_review", "old_state", "new_state",
    "status", "notes", "version", "error_code", "path", "channel",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in AUDIT_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(event)s %(message)s",
            defaults={"event": "-"},
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
