"""
Отрисовка одного ценника в HTML.

Два шаблона, выбор один раз по LabelFormat.layout_kind:
- THERMAL: термоэтикетка 78x25 с ушками (шапка, цена справа, штрихкод, нижняя строка)
- GRID: ячейка листа (всё по центру, два размера шрифта по формату)

Поле со значением None не рисуется вообще (без пустых блоков).
"""

from collections.abc import Callable
from html import escape

from pricelabel.config import LABEL
from pricelabel.models.label_types import FormattedLabel, LabelFormat, LayoutKind

EMPTY_CELL_HTML = '<div class="label empty-label"></div>'


def _text(value: object) -> str:
    return escape(str(value))


def font_sizes_for(label_format: LabelFormat) -> tuple[str, str, str]:
    """(текст, название, цена) — мелкий ряд только для формата 80 на лист."""
    if label_format.id == LABEL.DENSE_FORMAT_ID:
        return LABEL.DENSE_FONT_SIZES
    return LABEL.REGULAR_FONT_SIZES


def _render_thermal(label: FormattedLabel, label_format: LabelFormat) -> str:
    """
    Термоэтикетка:

    ┌──────────────────────────────┐
    │         STORE NAME     [SALE]│
    │ Product name          R29.99 │
    │ pcs                   R24.99 │
    │      ║║║║║║║║║║║║║║║        │
    │        6001234567890         │
    │ SKU: X    EXP: ..   LOT: ..  │
    └──────────────────────────────┘
    """
    parts = ['<div class="label thermal-label">', '<div class="thermal-content">']

    if label.store_name is not None:
        parts.append(f'<div class="store-header">{_text(label.store_name)}</div>')
    if label.promotion_text is not None:
        parts.append(f'<div class="promotion-badge">{_text(label.promotion_text)}</div>')

    parts.append('<div class="main-section">')
    parts.append('<div class="product-info">')
    parts.append(f'<div class="product-name">{_text(label.name)}</div>')
    if label.unit is not None:
        parts.append(f'<div class="unit-info">{_text(label.unit)}</div>')
    parts.append("</div>")
    parts.append('<div class="price-info">')
    if label.was_price is not None:
        parts.append(f'<div class="was-price">{_text(label.was_price)}</div>')
    parts.append(f'<div class="current-price">{_text(label.price_formatted)}</div>')
    parts.append("</div>")
    parts.append("</div>")

    if label.barcode_image is not None:
        parts.append('<div class="barcode-section">')
        parts.append(f'<img src="{escape(label.barcode_image)}" alt="barcode" class="barcode-image" />')
        if label.barcode is not None:
            parts.append(f'<div class="barcode-text">{_text(label.barcode)}</div>')
        parts.append("</div>")

    # Нижняя строка: ячейки одинаковой ширины (flex: 1)
    parts.append('<div class="bottom-info">')
    if label.sku is not None:
        parts.append(f'<span class="sku">SKU: {_text(label.sku)}</span>')
    if label.expiry_date is not None:
        parts.append(f'<span class="expiry">EXP: {_text(label.expiry_date)}</span>')
    if label.batch_number is not None:
        parts.append(f'<span class="batch">LOT: {_text(label.batch_number)}</span>')
    parts.append("</div>")

    parts.append("</div>")
    parts.append("</div>")
    return "\n".join(parts)


def _render_grid(label: FormattedLabel, label_format: LabelFormat) -> str:
    """Ячейка листа: магазин, название в одну строку, штрихкод, цена, SKU, категория."""
    font_size, name_size, price_size = font_sizes_for(label_format)

    parts = ['<div class="label">', '<div class="label-content">']

    if label.store_name is not None:
        parts.append(
            f'<div class="store-name" style="font-size: {font_size};">{_text(label.store_name)}</div>'
        )
    parts.append(f'<div class="product-name" style="font-size: {name_size};">{_text(label.name)}</div>')

    if label.barcode_image is not None:
        parts.append('<div class="barcode-container">')
        parts.append(f'<img src="{escape(label.barcode_image)}" alt="barcode" class="barcode-image" />')
        parts.append("</div>")

    parts.append('<div class="price-section">')
    if label.was_price is not None:
        parts.append(
            f'<div class="was-price" style="font-size: {font_size}; text-decoration: line-through;">'
            f"{_text(label.was_price)}</div>"
        )
    parts.append(f'<div class="price" style="font-size: {price_size};">{_text(label.price_formatted)}</div>')
    if label.unit is not None:
        parts.append(f'<div class="unit" style="font-size: {font_size};">{_text(label.unit)}</div>')
    parts.append("</div>")

    if label.sku is not None:
        parts.append(f'<div class="sku" style="font-size: {font_size};">SKU: {_text(label.sku)}</div>')
    if label.category is not None:
        parts.append(f'<div class="category" style="font-size: {font_size};">{_text(label.category)}</div>')

    parts.append("</div>")
    parts.append("</div>")
    return "\n".join(parts)


_RENDERERS: dict[LayoutKind, Callable[[FormattedLabel, LabelFormat], str]] = {
    LayoutKind.THERMAL: _render_thermal,
    LayoutKind.GRID: _render_grid,
}


def render_label(label: FormattedLabel, label_format: LabelFormat) -> str:
    """HTML фрагмент одного ценника для заданного формата."""
    return _RENDERERS[label_format.layout_kind](label, label_format)


def render_empty_cell() -> str:
    """Пустая ячейка для добивки последнего ряда листа."""
    return EMPTY_CELL_HTML
