"""Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; this only wires handlers.
DEBUG → human-readable lines. Otherwise one JSON object per line.
"""

import json
import logging
import logging.config
from datetime import datetime, timezone

from config.settings import Settings

# LogRecord attributes that are not user-supplied `extra=` fields
_RESERVED = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(settings: Settings) -> None:
    use_json = settings.LOG_JSON and not settings.DEBUG
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if use_json else "plain",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": "DEBUG" if settings.DEBUG else settings.LOG_LEVEL.upper(),
            },
        }
    )
