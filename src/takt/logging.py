"""Package logger setup. Every record carries the id of the current invocation."""
from __future__ import annotations

import logging
import sys
import uuid

_RUN_ID = uuid.uuid4().hex[:8]
_FORMAT = "%(asctime)s [%(run_id)s] %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("takt")


def get_run_id() -> str:
    return _RUN_ID


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID
        return True


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the ``takt`` logger. Safe to call repeatedly."""
    logger.setLevel(level)
    for handler in logger.handlers:
        if getattr(handler, "_takt", False):
            handler.setLevel(level)
            return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(_RunIdFilter())
    handler.setLevel(level)
    handler._takt = True
    logger.addHandler(handler)
    return logger
