"""Structured JSON logging for the Lambda handlers

`initialize_logging()` runs in each handler package's `__init__.py`, so it is
configured before `app.py` (and the engine) log anything. Every record becomes
one JSON line; values passed via `extra=` become top-level fields:

    {"timestamp": "2026-01-01T00:00:00.000Z", "level": "INFO",
     "logger": "myurls.services.short_link_service",
     "message": "Renewed short link.", "shortcode": "aZ3k9Q", "ttl": 90000}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from myurls.constants import ENV


# Attributes every LogRecord carries; anything else arrived through `extra=`
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

# Third-party loggers that are noisy at INFO/DEBUG inside Lambda
_QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord (plus its `extra` fields) as a single JSON object"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log: dict[str, Any] = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((k, v) for k, v in vars(record).items() if k not in _RESERVED)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        # DataStoreError, Enum members etc. are not JSON serializable
        return json.dumps(log, default=str)


def _logging_config(level: str) -> dict[str, Any]:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {'class': 'logging.StreamHandler', 'formatter': 'json', 'stream': 'ext://sys.stdout'},
        },
        'loggers': {name: {'level': 'WARNING'} for name in _QUIET_LOGGERS},
        'root': {'level': level, 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    logging.config.dictConfig(_logging_config(os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()))
