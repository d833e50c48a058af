"""
Health check эндпоинты.

Проверка состояния сервиса и очереди печати.
"""

from fastapi import APIRouter

from pricelabel.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Базовая проверка состояния сервиса.

    Returns:
        Статус "ok" если сервис работает
    """
    return {"status": "ok"}


@router.get("/health/spool")
async def health_spool() -> dict[str, str]:
    """Каталог очереди печати, куда складываются документы."""
    return {"status": "ok", "spool_dir": get_settings().print_spool_dir}
