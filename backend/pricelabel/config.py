"""
Конфигурация сервиса ценников PriceLabel.

Все настройки в одном месте (SSOT — Single Source of Truth).
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelSettings:
    """
    Настройки генерации ценников.

    Константы печати и значения по умолчанию для форматов этикеток.
    """

    # Разрешение печати (термопринтеры 203 DPI)
    DPI: int = 203

    # Значения по умолчанию для опций ценника
    DEFAULT_CURRENCY_SYMBOL: str = "R"
    DEFAULT_STORE_NAME: str = "CELLERHUT"
    DEFAULT_UNIT: str = "pcs"
    DEFAULT_PRODUCT_NAME: str = "Unknown Product"
    DEFAULT_DOCUMENT_TITLE: str = "Price Labels"

    # Префиксы синтезированных значений (когда у товара нет баркода / SKU)
    BARCODE_FALLBACK_PREFIX: str = "PRD"
    SKU_FALLBACK_PREFIX: str = "SKU"

    # Настройки ImageWriter (python-barcode), размеры в мм.
    # Бары выше и шрифт крупнее дефолтных, зона покоя уже.
    # Текст под штрихкодом рисует сам ценник, поэтому write_text выключен.
    BARCODE_WRITER_DEFAULTS: dict[str, Any] = {
        "module_width": 0.33,
        "module_height": 17.0,
        "quiet_zone": 2.0,
        "font_size": 12,
        "text_distance": 2.0,
        "write_text": False,
        "dpi": 203,
    }

    # Термоэтикетка: узкие бары, чтобы влезть в печатную область 58мм
    BARCODE_THERMAL_OPTIONS: dict[str, Any] = {
        "module_width": 0.2,
        "module_height": 8.0,
        "quiet_zone": 1.0,
        "font_size": 9,
        "text_distance": 0.0,
    }

    # Листовые форматы
    BARCODE_GRID_OPTIONS: dict[str, Any] = {
        "module_width": 0.25,
        "module_height": 10.0,
        "quiet_zone": 1.0,
        "font_size": 11,
        "text_distance": 0.0,
    }

    # Самый плотный формат каталога (80 на лист) — мелкий шрифт
    DENSE_FORMAT_ID: str = "shelf_80"

    # (текст, название, цена) для плотного и обычного формата
    DENSE_FONT_SIZES: tuple[str, str, str] = ("9px", "10px", "11px")
    REGULAR_FONT_SIZES: tuple[str, str, str] = ("11px", "14px", "16px")

    # Поля листа letter (padding body в документе печати)
    SHEET_MARGIN_VERTICAL_IN: float = 0.5
    SHEET_MARGIN_HORIZONTAL_IN: float = 0.1875


class Settings(BaseSettings):
    """
    Настройки приложения из переменных окружения.

    Загружаются из .env файла или переменных окружения (префикс PRICELABEL_).
    """

    model_config = SettingsConfigDict(
        env_prefix="PRICELABEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Приложение ===
    app_name: str = "PriceLabel API"
    app_version: str = "0.1.0"
    debug: bool = False

    # === CORS ===
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    # === Ценники ===
    default_currency_symbol: str = LabelSettings.DEFAULT_CURRENCY_SYMBOL
    default_store_name: str = LabelSettings.DEFAULT_STORE_NAME
    max_labels_per_export: int = 10000  # Максимум этикеток за одну печать

    # === Печать ===
    # Каталог, куда складываются готовые документы для принт-сервера
    print_spool_dir: str = Field(default="/tmp/pricelabel-spool")

    # === Логирование ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Получить настройки приложения (singleton).

    Использует кэширование для избежания повторного чтения .env
    """
    return Settings()


# Экспорт констант ценников для удобства
LABEL = LabelSettings()
