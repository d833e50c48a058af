"""
FastAPI зависимости.

Очередь печати выносится в зависимость, чтобы тесты могли её подменить.
"""

from pricelabel.config import get_settings
from pricelabel.services.print_spool import PrintSpool


def get_print_spool() -> PrintSpool:
    """Очередь печати из настроек (PRICELABEL_PRINT_SPOOL_DIR)."""
    return PrintSpool(get_settings().print_spool_dir)
