"""
Подготовка данных ценника.

Товар + опции → плоская запись FormattedLabel, готовая к отрисовке:
цены отформатированы, штрихкод сгенерирован, выключенные поля = None.
"""

import dataclasses
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic.alias_generators import to_snake

from pricelabel.config import LABEL
from pricelabel.models.label_types import FormattedLabel, LabelFormat, LabelOptions, ProductRecord
from pricelabel.services.barcode_generator import BarcodeGenerator, barcode_options_for

_CENTS = Decimal("0.01")

_FORMATTED_FIELDS = {f.name for f in dataclasses.fields(FormattedLabel)} - {"extra"}


class LabelDataError(ValueError):
    """Данные товара не позволяют собрать ценник."""


def _present(value: Any) -> bool:
    """Значение задано: не None и не пустая строка (0 — задано)."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _text_or_none(value: Any) -> str | None:
    if not _present(value):
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def to_decimal(value: Any) -> Decimal:
    """
    Цена в Decimal с точностью до копеек (округление half-up).

    Raises:
        LabelDataError: Если значение не число
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidOperation
        # Больше 28 значащих цифр: quantize тоже бросает InvalidOperation
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as e:
        raise LabelDataError(f"Invalid price: {value!r}") from e


def format_price(value: Any, currency_symbol: str = LABEL.DEFAULT_CURRENCY_SYMBOL) -> str:
    """Цена для ценника: символ валюты + ровно два знака после точки."""
    return f"{currency_symbol}{to_decimal(value)}"


def resolve_barcode_value(product: ProductRecord) -> str:
    """Значение штрихкода: barcode → sku → "PRD" + id."""
    for candidate in (product.barcode, product.sku):
        if _present(candidate):
            return str(candidate).strip()
    return f"{LABEL.BARCODE_FALLBACK_PREFIX}{product.id}"


def resolve_sku(product: ProductRecord) -> str:
    """SKU товара или синтезированный "SKU" + id."""
    if _present(product.sku):
        return str(product.sku).strip()
    return f"{LABEL.SKU_FALLBACK_PREFIX}{product.id}"


def format_label_data(
    product: ProductRecord,
    options: LabelOptions | None = None,
    label_format: LabelFormat | None = None,
    barcode_generator: BarcodeGenerator | None = None,
) -> FormattedLabel:
    """
    Собирает данные одного ценника.

    Args:
        product: Товар
        options: Что показывать (по умолчанию LabelOptions())
        label_format: Формат этикетки — влияет только на настройки штрихкода
        barcode_generator: Генератор штрихкодов (для подмены в тестах)

    Returns:
        FormattedLabel

    Raises:
        LabelDataError: Нет цены (или закупочной цены при show_cost_price)
    """
    if options is None:
        options = LabelOptions()
    if barcode_generator is None:
        barcode_generator = BarcodeGenerator()

    # === Цена ===
    raw_price = product.cost_price if options.show_cost_price else product.price
    if not _present(raw_price):
        kind = "cost price" if options.show_cost_price else "price"
        raise LabelDataError(f"Product {product.id} has no {kind}")
    price = to_decimal(raw_price)
    price_formatted = f"{options.currency_symbol}{price}"

    was_price = None
    if _present(options.was_price):
        was_price = format_price(options.was_price, options.currency_symbol)

    # === Штрихкод ===
    barcode_value = None
    barcode_image = None
    if options.show_barcode:
        barcode_value = resolve_barcode_value(product)
        generated = barcode_generator.generate(barcode_value, barcode_options_for(label_format))
        barcode_image = generated.data_uri if generated else None

    name = product.name.strip() if _present(product.name) else LABEL.DEFAULT_PRODUCT_NAME

    label = FormattedLabel(
        id=product.id,
        name=name,
        price=price,
        price_formatted=price_formatted,
        was_price=was_price,
        barcode=barcode_value,
        barcode_image=barcode_image,
        sku=resolve_sku(product),
        unit=(_text_or_none(product.unit) or LABEL.DEFAULT_UNIT) if options.show_unit else None,
        description=_text_or_none(product.description) if options.show_description else None,
        category=_text_or_none(product.category_name) if options.show_category else None,
        store_name=_text_or_none(options.store_name) if options.show_store_name else None,
        expiry_date=_text_or_none(options.expiry_date) if options.show_expiry_date else None,
        batch_number=_text_or_none(options.batch_number) if options.show_batch_number else None,
        promotion_text=_text_or_none(options.promotion_text) if options.show_promotion else None,
    )

    if not options.custom_fields:
        return label

    # custom_fields мержатся последними и могут переопределить что угодно.
    # Ключи приходят и в camelCase (priceFormatted), и в snake_case
    known: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in options.custom_fields.items():
        field_name = to_snake(key)
        if field_name in _FORMATTED_FIELDS:
            known[field_name] = value
        else:
            extra[key] = value
    return dataclasses.replace(label, **known, extra=extra)
