"""
Очередь печати (spool) — граница с внешним принт-сервером.

Готовый HTML документ складывается файлом в каталог,
откуда его забирает принт-сервер магазина. Результат печати не отслеживается.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from threading import Lock

logger = logging.getLogger(__name__)


@dataclass
class PrintJob:
    """Полностью собранный документ для печати."""

    title: str
    document: str  # Полный HTML
    format_id: str
    label_count: int
    page_count: int


@dataclass
class SpooledJob:
    """Документ, переданный в очередь печати."""

    path: Path
    format_id: str
    label_count: int
    created_at: float


class PrintSpool:
    """
    Файловая очередь печати.

    Для локальной разработки и тестирования.
    В production каталог монтируется принт-серверу (CUPS и т.п.).
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self._lock = Lock()

    def submit(self, job: PrintJob) -> SpooledJob:
        """Положить документ в очередь печати."""
        created_at = time.time()
        filename = f"{int(created_at * 1000)}-{job.format_id}-{uuid.uuid4().hex[:8]}.html"

        with self._lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.directory / filename
            path.write_text(job.document, encoding="utf-8")

        logger.info(
            f"[SPOOL] {job.title}: {job.label_count} этикеток, {job.page_count} стр.",
            extra={
                "format_id": job.format_id,
                "label_count": job.label_count,
                "page_count": job.page_count,
                "spool_file": path.name,
            },
        )
        return SpooledJob(
            path=path,
            format_id=job.format_id,
            label_count=job.label_count,
            created_at=created_at,
        )

    def list_jobs(self) -> list[Path]:
        """Документы в очереди (старые первыми)."""
        if not self.directory.exists():
            return []
        return sorted(self.directory.glob("*.html"))
