"""
Логирование сервиса ценников.

Сервисы передают контекст печати через extra
(logger.info(..., extra={"format_id": ..., "label_count": ...})):
в JSON он попадает отдельным объектом "job", в консоли дописывается в конец строки.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from pricelabel.config import get_settings

# Поля extra, которые имеют смысл для печати ценников. Остальные extra игнорируются
JOB_FIELDS = ("format_id", "label_count", "page_count", "symbology", "spool_file")


def job_context(record: logging.LogRecord) -> dict[str, Any]:
    """Контекст печати из extra записи лога (только заданные поля)."""
    return {name: getattr(record, name) for name in JOB_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    """
    JSON строка на запись, для сбора логов (Loki, ELK).

    {"timestamp": "...", "level": "INFO", "logger": "...", "message": "[EXPORT] ...",
     "job": {"format_id": "standard_30", "label_count": 3}}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        job = job_context(record)
        if job:
            log_data["job"] = job

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Строка для разработки: время | уровень | логгер | сообщение (format_id=... label_count=...)."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        job = job_context(record)
        if not job:
            return line
        context = " ".join(f"{k}={v}" for k, v in job.items())
        return f"{line} ({context})"


def setup_logging() -> None:
    """
    Настройка логирования при старте приложения.

    PRICELABEL_DEBUG=true — консольный формат и DEBUG,
    иначе JSON и уровень PRICELABEL_LOG_LEVEL.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ConsoleFormatter() if settings.debug else JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers[:] = [handler]

    # ImageWriter открывает шрифты и PNG через Pillow на каждый штрихкод
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
