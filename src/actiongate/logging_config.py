"""Logging setup for the API process."""

import logging
import sys

from actiongate.config import Settings

AUDIT_LOGGER = "actiongate.audit"

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class _ExtraFormatter(logging.Formatter):
    """Appends structured ``extra`` fields as key=value pairs."""

    _reserved = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in self._reserved}
        if extras:
            line += " " + " ".join(f"{k}={v!r}" for k, v in sorted(extras.items()))
        return line


def configure_logging(settings: Settings) -> None:
    """Configure root and audit loggers from settings. Safe to call repeatedly."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_ExtraFormatter(_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # Audit records are always kept, whatever the application level.
    logging.getLogger(AUDIT_LOGGER).setLevel(logging.INFO)
    logging.getLogger("psycopg").setLevel(logging.WARNING)
