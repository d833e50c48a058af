"""
Pydantic схемы для API.

Модели запросов и ответов. Принимают camelCase формат склада
(costPrice, categoryName, showBarcode, ...) и snake_case.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel

from pricelabel.models.label_types import LabelFormat, LabelOptions, ProductRecord, custom_label_format, get_label_format


class CamelModel(BaseModel):
    """База: алиасы в camelCase, заполнение и по имени поля."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Enums ===


class PreflightStatus(str, Enum):
    """Статус проверки листа."""

    OK = "ok"
    ERROR = "error"


# === Форматы ===


class LabelFormatSchema(CamelModel):
    """Формат этикетки из каталога."""

    id: str
    name: str
    label_width: str
    label_height: str
    labels_per_row: int
    rows_per_page: int
    page_size: str
    description: str
    is_thermal: bool

    @classmethod
    def from_format(cls, label_format: LabelFormat) -> "LabelFormatSchema":
        return cls(
            id=label_format.id,
            name=label_format.name,
            label_width=label_format.label_width,
            label_height=label_format.label_height,
            labels_per_row=label_format.labels_per_row,
            rows_per_page=label_format.rows_per_page,
            page_size=label_format.page_size,
            description=label_format.description,
            is_thermal=label_format.is_thermal,
        )


class FormatsResponse(BaseModel):
    """Каталог форматов."""

    formats: list[LabelFormatSchema]


class CustomFormatIn(CamelModel):
    """Размеры пользовательского формата (поверх CUSTOM)."""

    label_width: str | None = Field(default=None, description="CSS длина, например 3in")
    label_height: str | None = Field(default=None, description="CSS длина, например 1.5in")
    labels_per_row: int | None = Field(default=None, description="Этикеток в ряду")
    rows_per_page: int | None = Field(default=None, description="Рядов на листе")


class FormatSelection(CamelModel):
    """Выбор формата: id из каталога и/или размеры custom формата."""

    format_id: str = Field(default="standard_30", description="ID формата из каталога")
    custom: CustomFormatIn | None = Field(default=None, description="Только для format_id=custom")

    def resolve(self) -> LabelFormat:
        """
        Формат для печати.

        Raises:
            KeyError: Неизвестный format_id
            ValueError: Пользовательский формат нарушает инварианты
        """
        if self.format_id == "custom" and self.custom is not None:
            return custom_label_format(**self.custom.model_dump())
        return get_label_format(self.format_id)


# === Товары и опции ===


class ProductIn(CamelModel):
    """Товар (формат API склада)."""

    id: int | str
    name: str | None = None
    price: Decimal
    cost_price: Decimal | None = None
    barcode: str | None = None
    sku: str | None = None
    unit: str | None = None
    description: str | None = None
    category_name: str | None = None

    def to_record(self) -> ProductRecord:
        return ProductRecord(**self.model_dump())


class LabelOptionsIn(CamelModel):
    """Опции ценника. Незаданные поля — значения по умолчанию LabelOptions."""

    show_barcode: bool = True
    show_cost_price: bool = False
    show_description: bool = False
    show_category: bool = False
    show_unit: bool = True
    show_store_name: bool = False
    store_name: str | None = None
    show_expiry_date: bool = False
    expiry_date: date | str | None = None
    show_batch_number: bool = False
    batch_number: str | None = None
    show_promotion: bool = False
    promotion_text: str | None = None
    was_price: Decimal | None = None
    currency_symbol: str | None = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    def to_options(self, default_currency_symbol: str, default_store_name: str) -> LabelOptions:
        data = self.model_dump()
        data["currency_symbol"] = self.currency_symbol or default_currency_symbol
        data["store_name"] = self.store_name or default_store_name
        return LabelOptions(**data)


# === Запросы ===


class PreviewRequest(FormatSelection):
    """Предпросмотр одного ценника."""

    product: ProductIn
    label_options: LabelOptionsIn = Field(default_factory=LabelOptionsIn)


class ExportRequest(FormatSelection):
    """Печать ценников."""

    products: list[ProductIn] = Field(default_factory=list)
    quantities: dict[str, PositiveInt] = Field(
        default_factory=dict, description="ID товара → количество ценников (по умолчанию 1)"
    )
    label_options: LabelOptionsIn = Field(default_factory=LabelOptionsIn)
    title: str = Field(default="Price Labels", description="Заголовок документа")


# === Ответы ===


class ExportResponse(CamelModel):
    """Результат печати."""

    success: bool
    label_count: int | None = None
    page_count: int | None = None
    error: str | None = None
    hint: str | None = None


class PreflightErrorSchema(CamelModel):
    field_id: str
    message: str
    suggestion: str | None = None


class PreflightResponse(CamelModel):
    """Результат проверки листа."""

    status: PreflightStatus
    format: LabelFormatSchema
    errors: list[PreflightErrorSchema]
    used_width_pt: float
    used_height_pt: float
    available_width_pt: float
    available_height_pt: float
