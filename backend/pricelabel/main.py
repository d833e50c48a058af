"""
Точка входа FastAPI приложения PriceLabel.

Генерация ценников: каталог форматов, предпросмотр и печать.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pricelabel.api.routes import health, labels
from pricelabel.config import get_settings
from pricelabel.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifecycle приложения.

    Настройка логирования при старте.
    """
    setup_logging()
    logger.info(f"[START] {settings.app_name} v{settings.app_version}")
    logger.info(f"[SPOOL] Очередь печати: {settings.print_spool_dir}")

    yield

    logger.info(f"[STOP] {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## PriceLabel API

Генерация ценников для магазина: термоэтикетки 78x25 и листы Avery.

### Возможности:

* **Каталог форматов** — thermal 78x25, 30/10/80 на лист, custom
* **Штрихкоды** — EAN-13 для 13 цифр, Code128 для остального
* **Предпросмотр** — HTML фрагмент одного ценника
* **Печать** — HTML документ с сеткой этикеток уходит в очередь печати
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Подключение роутеров
app.include_router(health.router, tags=["Health"])
app.include_router(labels.router, prefix="/api/v1", tags=["Labels"])


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Корневой эндпоинт — редирект на документацию."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
