# backend/pricelabel/models/label_types.py
"""
Типы данных для генерации ценников.

Каталог физических форматов этикеток, товар, опции ценника
и готовые к отрисовке данные.
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from pricelabel.config import LABEL


class LayoutKind(str, Enum):
    """Вариант раскладки ценника."""

    THERMAL = "thermal"  # Термоэтикетка, одна за раз
    GRID = "grid"  # Лист с сеткой этикеток


class PageSize(str, Enum):
    """Размер страницы печати."""

    LETTER = "letter"
    CUSTOM = "custom"  # Страница = размер этикетки


@dataclass(frozen=True)
class LabelFormat:
    """Физический формат этикетки (размеры + сетка + страница)."""

    id: str
    name: str
    label_width: str  # CSS длина: "78mm", "2.625in"
    label_height: str
    labels_per_row: int
    rows_per_page: int
    page_size: str = PageSize.LETTER.value
    description: str = ""
    is_thermal: bool = False
    # Только для термоэтикеток с "ушками" для ценникодержателя
    printable_width: str | None = None
    left_tab: str | None = None
    right_tab: str | None = None

    def __post_init__(self) -> None:
        if self.labels_per_row < 1:
            raise ValueError(f"labels_per_row must be >= 1, got {self.labels_per_row}")
        if self.rows_per_page < 1:
            raise ValueError(f"rows_per_page must be >= 1, got {self.rows_per_page}")
        if self.page_size not in {p.value for p in PageSize}:
            raise ValueError(f"Unknown page size: {self.page_size}")

    @property
    def layout_kind(self) -> LayoutKind:
        return LayoutKind.THERMAL if self.is_thermal else LayoutKind.GRID

    @property
    def labels_per_page(self) -> int:
        return self.labels_per_row * self.rows_per_page


# === Каталог форматов ===

THERMAL_78x25 = LabelFormat(
    id="thermal_78x25",
    name="Thermal Label (78x25mm)",
    label_width="78mm",
    label_height="25mm",
    labels_per_row=1,
    rows_per_page=1,
    page_size=PageSize.CUSTOM.value,
    description="Shelf edge label with arrow tabs",
    is_thermal=True,
    printable_width="58mm",  # 78мм минус два ушка по 10мм
    left_tab="10mm",
    right_tab="10mm",
)

STANDARD_30 = LabelFormat(
    id="standard_30",
    name="Standard (30 per sheet)",
    label_width="2.625in",
    label_height="1in",
    labels_per_row=3,
    rows_per_page=10,
    page_size=PageSize.LETTER.value,
    description="Avery 5160/8160 compatible",
)

LARGE_10 = LabelFormat(
    id="large_10",
    name="Large (10 per sheet)",
    label_width="4in",
    label_height="2in",
    labels_per_row=2,
    rows_per_page=5,
    page_size=PageSize.LETTER.value,
    description="Avery 5163 compatible",
)

SHELF_TAG_80 = LabelFormat(
    id="shelf_80",
    name="Shelf Tags (80 per sheet)",
    label_width="1.75in",
    label_height="0.5in",
    labels_per_row=4,
    rows_per_page=20,
    page_size=PageSize.LETTER.value,
    description="Avery 5167 compatible",
)

CUSTOM = LabelFormat(
    id="custom",
    name="Custom Size",
    label_width="3in",
    label_height="1.5in",
    labels_per_row=2,
    rows_per_page=6,
    page_size=PageSize.LETTER.value,
    description="User defined dimensions",
)

LABEL_FORMATS: dict[str, LabelFormat] = {
    "THERMAL_78x25": THERMAL_78x25,
    "STANDARD_30": STANDARD_30,
    "LARGE_10": LARGE_10,
    "SHELF_TAG_80": SHELF_TAG_80,
    "CUSTOM": CUSTOM,
}

_FORMATS_BY_ID: dict[str, LabelFormat] = {fmt.id: fmt for fmt in LABEL_FORMATS.values()}


def get_label_format(format_id: str) -> LabelFormat:
    """
    Формат из каталога по id.

    Raises:
        KeyError: Если формата с таким id нет
    """
    try:
        return _FORMATS_BY_ID[format_id]
    except KeyError:
        raise KeyError(f"Unknown label format: {format_id}") from None


def custom_label_format(
    label_width: str | None = None,
    label_height: str | None = None,
    labels_per_row: int | None = None,
    rows_per_page: int | None = None,
) -> LabelFormat:
    """
    Пользовательский формат: CUSTOM с переопределёнными размерами.

    Инварианты формата проверяются заново (ValueError).
    """
    overrides: dict[str, Any] = {
        "label_width": label_width,
        "label_height": label_height,
        "labels_per_row": labels_per_row,
        "rows_per_page": rows_per_page,
    }
    return dataclasses.replace(CUSTOM, **{k: v for k, v in overrides.items() if v is not None})


# === Входные данные ===


@dataclass(frozen=True)
class ProductRecord:
    """Товар из складского учёта (только чтение)."""

    id: int | str
    name: str | None
    price: Decimal | float | str | None
    cost_price: Decimal | float | str | None = None
    barcode: str | None = None
    sku: str | None = None
    unit: str | None = None
    description: str | None = None
    category_name: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProductRecord":
        """Создать из словаря в формате API склада (camelCase или snake_case)."""
        return cls(
            id=data["id"],
            name=data.get("name"),
            price=data.get("price"),
            cost_price=data.get("costPrice", data.get("cost_price")),
            barcode=data.get("barcode"),
            sku=data.get("sku"),
            unit=data.get("unit"),
            description=data.get("description"),
            category_name=data.get("categoryName", data.get("category_name")),
        )


@dataclass(frozen=True)
class LabelOptions:
    """
    Что показывать на ценнике.

    Флаги show_* включают поле; для срока годности, партии и акции
    нужно ещё и непустое значение.
    """

    show_barcode: bool = True
    show_cost_price: bool = False  # Закупочная цена вместо розничной
    show_description: bool = False
    show_category: bool = False
    show_unit: bool = True
    show_store_name: bool = False
    store_name: str | None = LABEL.DEFAULT_STORE_NAME
    show_expiry_date: bool = False
    expiry_date: str | date | None = None
    show_batch_number: bool = False
    batch_number: str | None = None
    show_promotion: bool = False
    promotion_text: str | None = None
    was_price: Decimal | float | str | None = None  # Старая (зачёркнутая) цена
    currency_symbol: str = LABEL.DEFAULT_CURRENCY_SYMBOL
    # Мержатся последними и могут переопределить любое поле
    custom_fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FormattedLabel:
    """Готовые к отрисовке данные одного ценника. Отсутствующее поле = None."""

    id: int | str
    name: str
    price: Decimal
    price_formatted: str
    was_price: str | None = None
    barcode: str | None = None
    barcode_image: str | None = None  # data:image/png;base64,...
    sku: str | None = None
    unit: str | None = None
    description: str | None = None
    category: str | None = None
    store_name: str | None = None
    expiry_date: str | None = None
    batch_number: str | None = None
    promotion_text: str | None = None
    # custom_fields, не совпавшие ни с одним полем
    extra: Mapping[str, Any] = field(default_factory=dict)
