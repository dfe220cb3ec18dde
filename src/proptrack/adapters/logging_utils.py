import json
import logging
import sys
import time
from typing import Any, Dict, Optional

from .config import config

SERVICE = "proptrack"


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per line.

    Calculators pass their inputs as `extra={"context": {...}}`; those keys
    land at the top level next to the standard fields. Cents and rates are
    plain numbers, dates and other objects go through str().
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": time.time(),
            "service": SERVICE,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            # standard fields win over context keys
            payload = {**ctx, **payload}
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(level or config.LOG_LEVEL)
        logger.propagate = False
    return logger
