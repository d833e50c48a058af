"""
Генератор штрихкодов EAN-13 и Code128 для ценников.

Создаёт PNG изображения штрихкодов (data URI) для встраивания в HTML ценника.
"""

import base64
import logging
import re
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import Any

from barcode import get_barcode_class
from barcode.writer import ImageWriter
from PIL import Image

from pricelabel.config import LABEL
from pricelabel.models.label_types import LabelFormat, LayoutKind

logger = logging.getLogger(__name__)

_EAN13_PATTERN = re.compile(r"[0-9]{13}")


class Symbology(str, Enum):
    """Тип штрихкода (имя класса в python-barcode)."""

    CODE128 = "code128"
    EAN13 = "ean13"


@dataclass
class GeneratedBarcode:
    """Результат генерации штрихкода."""

    data_uri: str  # data:image/png;base64,...
    symbology: Symbology
    width_pixels: int
    height_pixels: int


def detect_symbology(value: str) -> Symbology:
    """
    Определение типа штрихкода по значению.

    Ровно 13 цифр — EAN-13, всё остальное — Code128.
    """
    if _EAN13_PATTERN.fullmatch(value):
        return Symbology.EAN13
    return Symbology.CODE128


def barcode_options_for(label_format: LabelFormat | None) -> dict[str, Any]:
    """Настройки штрихкода под раскладку ценника (термо или лист)."""
    if label_format is not None and label_format.layout_kind is LayoutKind.THERMAL:
        return dict(LABEL.BARCODE_THERMAL_OPTIONS)
    return dict(LABEL.BARCODE_GRID_OPTIONS)


class BarcodeGenerator:
    """
    Генератор штрихкодов для ценников.

    Поддерживает:
    - EAN-13 для 13-значных цифровых кодов
    - Code128 для всего остального (SKU, PRD-коды)
    """

    def __init__(self, dpi: int = LABEL.DPI):
        self.dpi = dpi

    def generate(self, value: str | None, options: dict[str, Any] | None = None) -> GeneratedBarcode | None:
        """
        Генерирует штрихкод.

        Args:
            value: Значение для кодирования
            options: Настройки ImageWriter поверх дефолтных (переопределяют их)

        Returns:
            GeneratedBarcode или None, если значение пустое или не кодируется
        """
        if not value:
            return None

        symbology = detect_symbology(value)
        writer_options = {**LABEL.BARCODE_WRITER_DEFAULTS, "dpi": self.dpi, **(options or {})}

        try:
            barcode_class = get_barcode_class(symbology.value)
            barcode = barcode_class(value, writer=ImageWriter(format="PNG"))

            # python-barcode молча исправляет неверную контрольную цифру EAN-13:
            # картинка закодировала бы другой номер, чем подпись под ней
            fullcode = barcode.get_fullcode()
            if fullcode != value:
                logger.warning(
                    f"[BARCODE] Неверная контрольная цифра {value!r}, ожидалось {fullcode!r}",
                    extra={"symbology": symbology.value},
                )
                return None

            buffer = BytesIO()
            barcode.write(buffer, options=writer_options)
            png_bytes = buffer.getvalue()

            with Image.open(BytesIO(png_bytes)) as img:
                width, height = img.size
        except Exception as e:
            # Невалидный символ для Code128, неверная длина и т.п.
            logger.warning(
                f"[BARCODE] Не удалось закодировать {value!r}: {e}", extra={"symbology": symbology.value}
            )
            return None

        encoded = base64.b64encode(png_bytes).decode("ascii")
        return GeneratedBarcode(
            data_uri=f"data:image/png;base64,{encoded}",
            symbology=symbology,
            width_pixels=width,
            height_pixels=height,
        )


def generate_barcode(value: str | None, options: dict[str, Any] | None = None) -> GeneratedBarcode | None:
    """Штрихкод с настройками по умолчанию (см. BarcodeGenerator.generate)."""
    return BarcodeGenerator().generate(value, options)
