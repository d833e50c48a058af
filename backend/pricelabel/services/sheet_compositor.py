"""
Раскладка ценников по листу.

Последовательность ценников → ряды по labels_per_row → страницы по rows_per_page.
Последний ряд добивается пустыми ячейками, чтобы сетка листа была ровной.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from pricelabel.models.label_types import FormattedLabel, LabelFormat, ProductRecord
from pricelabel.services.label_renderer import render_empty_cell, render_label

# None в ряду — явная пустая ячейка
Cell = FormattedLabel | None


@dataclass(frozen=True)
class ComposedSheet:
    """Ценники, разложенные по рядам. Каждый ряд ровно labels_per_row ячеек."""

    rows: tuple[tuple[Cell, ...], ...]
    labels_per_row: int
    rows_per_page: int

    @property
    def label_count(self) -> int:
        return sum(1 for row in self.rows for cell in row if cell is not None)

    @property
    def pages(self) -> list[tuple[tuple[Cell, ...], ...]]:
        step = self.rows_per_page
        return [self.rows[i : i + step] for i in range(0, len(self.rows), step)]

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.rows) / self.rows_per_page)


def quantity_for(product: ProductRecord, quantities: Mapping) -> int:
    """
    Сколько ценников напечатать для товара (по умолчанию 1).

    Ключом может быть id товара или его строковое представление (JSON).

    Raises:
        ValueError: Количество не целое положительное число
    """
    quantity = quantities.get(product.id)
    if quantity is None:
        quantity = quantities.get(str(product.id))
    if quantity is None:
        return 1
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValueError(f"Quantity for product {product.id} must be an integer >= 1, got {quantity!r}")
    return quantity


def expand_quantities(
    products: Iterable[ProductRecord],
    quantities: Mapping | None = None,
) -> list[ProductRecord]:
    """
    Разворачивает список товаров по количеству.

    [A, B] + {A: 2} → [A, A, B]: порядок входа, повторы подряд.
    """
    quantities = quantities or {}
    expanded: list[ProductRecord] = []
    for product in products:
        expanded.extend([product] * quantity_for(product, quantities))
    return expanded


def compose_sheet(labels: Sequence[FormattedLabel], label_format: LabelFormat) -> ComposedSheet:
    """
    Раскладывает ценники по рядам формата.

    Порядок сохраняется, последний неполный ряд добивается None.
    """
    per_row = label_format.labels_per_row
    rows: list[tuple[Cell, ...]] = []
    current: list[Cell] = []

    for label in labels:
        current.append(label)
        if len(current) == per_row:
            rows.append(tuple(current))
            current = []

    if current:
        current.extend([None] * (per_row - len(current)))
        rows.append(tuple(current))

    return ComposedSheet(
        rows=tuple(rows),
        labels_per_row=per_row,
        rows_per_page=label_format.rows_per_page,
    )


def render_sheet(sheet: ComposedSheet, label_format: LabelFormat) -> str:
    """HTML листа: страницы → ряды → ячейки."""
    parts = ['<div class="label-sheet">']
    for page in sheet.pages:
        parts.append('<div class="label-page">')
        for row in page:
            parts.append('<div class="label-row">')
            for cell in row:
                parts.append(render_empty_cell() if cell is None else render_label(cell, label_format))
            parts.append("</div>")
        parts.append("</div>")
    parts.append("</div>")
    return "\n".join(parts)
