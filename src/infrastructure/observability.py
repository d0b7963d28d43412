"""Structured Logging — JSON formatter и настройка логирования.

Инварианты:
- Каждая запись содержит timestamp, level, logger и message
- Extra поля (request_handle, record_id, selector, error_code) выводятся,
  если присутствуют
- JSON формат для production, человекочитаемый для разработки
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("request_handle", "record_id", "selector", "error_code")


class JSONFormatter(logging.Formatter):
    """Форматирование логов в JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Настройка root logger. Возвращает установленный handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
