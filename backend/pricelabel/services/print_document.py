# backend/pricelabel/services/print_document.py
"""
Сборка документа для печати и предпросмотр ценника.

Пайплайн: товары → expand_quantities → format_label_data → compose_sheet
→ render_sheet → build_document → dispatch (внешний принт-сервер).

Сборка документа чистая (без окружения); отправка на печать —
отдельный колбэк dispatch, fire-and-forget.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from html import escape
from typing import Any

from pricelabel.config import LABEL, get_settings
from pricelabel.models.label_types import (
    STANDARD_30,
    FormattedLabel,
    LabelFormat,
    LabelOptions,
    LayoutKind,
    PageSize,
    ProductRecord,
)
from pricelabel.services.barcode_generator import BarcodeGenerator
from pricelabel.services.error_messages import NO_PRODUCTS, internal_error, too_many_labels_error
from pricelabel.services.label_formatter import format_label_data
from pricelabel.services.label_renderer import render_label
from pricelabel.services.layout_preflight import check_sheet_layout
from pricelabel.services.print_spool import PrintJob
from pricelabel.services.sheet_compositor import (
    ComposedSheet,
    compose_sheet,
    expand_quantities,
    quantity_for,
    render_sheet,
)

logger = logging.getLogger(__name__)

Dispatch = Callable[[PrintJob], Any]


class EmptyProductListError(ValueError):
    """Нет товаров для печати."""


class TooManyLabelsError(ValueError):
    """Превышен лимит этикеток за одну печать."""

    def __init__(self, label_count: int, limit: int):
        super().__init__(too_many_labels_error(label_count, limit).message)
        self.label_count = label_count
        self.limit = limit


@dataclass(frozen=True)
class ExportOptions:
    """Параметры печати ценников."""

    label_format: LabelFormat = STANDARD_30
    quantities: Mapping[Any, int] = field(default_factory=dict)  # product id → количество
    label_options: LabelOptions = field(default_factory=LabelOptions)
    title: str = LABEL.DEFAULT_DOCUMENT_TITLE


@dataclass
class ExportResult:
    """Итог печати: успех + количество этикеток или текст ошибки."""

    success: bool
    label_count: int | None = None
    page_count: int | None = None
    error: str | None = None
    hint: str | None = None


# === Стили ===

_BASE_STYLES = """
* {
  box-sizing: border-box;
  margin: 0;
  padding: 0;
}
.label-sheet {
  width: 100%%;
  margin: 0 auto;
}
.label-page {
  page-break-after: always;
}
.label-page:last-child {
  page-break-after: auto;
}
.label-row {
  display: flex;
  justify-content: %(row_justify)s;
  margin-bottom: 0;
}
.label {
  width: %(label_width)s;
  height: %(label_height)s;
  padding: %(label_padding)s;
  border: %(label_border)s;
  overflow: hidden;
  position: relative;
  display: flex;
  align-items: center;
  justify-content: center;
}
.empty-label {
  border: none;
}
"""

# Термоэтикетка 78x25: печатная область 58мм между ушками по 10мм.
# Асимметричный padding — выравнивание под Honeywell PC42D.
_THERMAL_STYLES = """
.thermal-label {
  width: 78mm;
  height: 25mm;
  padding: 2mm 7mm 2mm 13mm;
  background: white;
  position: relative;
}
.thermal-content {
  width: 58mm;
  height: 21mm;
  margin: 0 0 0 3mm;
  display: flex;
  flex-direction: column;
  justify-content: space-between;
  overflow: hidden;
}
.store-header {
  font-size: 8px;
  font-weight: bold;
  text-align: center;
  border-bottom: 1px solid #000;
  padding-bottom: 1mm;
  margin-bottom: 1mm;
}
.promotion-badge {
  position: absolute;
  top: 2mm;
  right: 12mm;
  background: #000;
  color: white;
  padding: 0.5mm 1.5mm;
  font-size: 6px;
  font-weight: bold;
  border-radius: 1px;
}
.main-section {
  display: flex;
  justify-content: space-between;
  align-items: center;
  flex-grow: 1;
  max-width: 58mm;
}
.product-info {
  flex: 1;
  text-align: left;
}
.thermal-label .product-name {
  font-size: 10px;
  font-weight: bold;
  line-height: 1.1;
  margin-bottom: 0.5mm;
  max-width: 35mm;
  word-wrap: break-word;
  white-space: normal;
  overflow: hidden;
  text-overflow: ellipsis;
}
.unit-info {
  font-size: 8px;
  color: #333;
}
.price-info {
  text-align: right;
  padding-left: 2mm;
}
.was-price {
  font-size: 8px;
  text-decoration: line-through;
  color: #666;
}
.current-price {
  font-size: 14px;
  font-weight: bold;
  color: #000;
}
.barcode-section {
  text-align: center;
  margin: 1mm 0;
  padding: 0.5mm 0;
}
.thermal-label .barcode-image {
  height: 30px;
  width: auto;
  max-width: 50mm;
  display: inline-block;
}
.barcode-text {
  font-size: 9px;
  margin-top: 1px;
  font-family: monospace;
  letter-spacing: 0.3px;
}
.bottom-info {
  display: flex;
  justify-content: space-between;
  font-size: 8px;
  color: #333;
  border-top: 0.5px solid #ddd;
  padding: 1mm 1mm 0 1mm;
}
.bottom-info span {
  flex: 1;
}
"""

_GRID_STYLES = """
.label-content {
  width: 100%%;
  text-align: center;
}
.product-name {
  font-weight: bold;
  margin-bottom: 2px;
  line-height: 1.2;
  overflow: hidden;
  text-overflow: ellipsis;
  white-space: nowrap;
}
.barcode-container {
  margin: 3px 0;
  height: %(barcode_box_height)s;
  display: flex;
  justify-content: center;
  align-items: center;
}
.barcode-image {
  max-width: 95%%;
  height: %(barcode_height)s;
  width: auto;
}
.price-section {
  display: flex;
  justify-content: center;
  align-items: baseline;
  gap: 5px;
  margin: 2px 0;
}
.price {
  font-weight: bold;
  color: #000;
}
.unit {
  color: #666;
}
.sku {
  color: #666;
  margin-top: 2px;
}
.category {
  color: #999;
  font-style: italic;
  margin-top: 1px;
}
"""

_PRINT_STYLES = """
@media print {
  body {
    padding: 0;
    -webkit-print-color-adjust: exact;
    print-color-adjust: exact;
  }
  .label {
    border: none;
    page-break-inside: avoid;
  }
  .label-row {
    page-break-inside: avoid;
  }
}
"""

_THERMAL_PRINT_STYLES = """
@media print {
  .thermal-label {
    margin: 0;
    padding: 2mm 7mm 2mm 13mm !important;
    width: 78mm !important;
    height: 25mm !important;
  }
  .thermal-label .barcode-image {
    filter: contrast(1.2);
  }
  .promotion-badge {
    background: #000 !important;
    print-color-adjust: exact;
  }
}
"""


def page_size_css(label_format: LabelFormat) -> str:
    """Значение @page size: "letter" или ровно размер этикетки для custom."""
    if label_format.page_size == PageSize.CUSTOM.value:
        return f"{label_format.label_width} {label_format.label_height}"
    return label_format.page_size


def build_stylesheet(label_format: LabelFormat) -> str:
    """CSS документа печати для формата."""
    thermal = label_format.layout_kind is LayoutKind.THERMAL
    dense = label_format.id == LABEL.DENSE_FORMAT_ID

    if thermal:
        body_padding = "0"
    else:
        body_padding = f"{LABEL.SHEET_MARGIN_VERTICAL_IN}in {LABEL.SHEET_MARGIN_HORIZONTAL_IN}in"

    page = f"@page {{\n  size: {page_size_css(label_format)};\n  margin: 0;\n}}\n"
    body = f"body {{\n  font-family: Arial, sans-serif;\n  margin: 0;\n  padding: {body_padding};\n}}\n"
    base = _BASE_STYLES % {
        "row_justify": "center" if thermal else "space-between",
        "label_width": label_format.label_width,
        "label_height": label_format.label_height,
        "label_padding": "2mm" if thermal else "0.0625in",
        "label_border": "none" if thermal else "1px dotted #ccc",
    }

    parts = [page, body, base]
    if thermal:
        parts.append(_THERMAL_STYLES)
        parts.append(_PRINT_STYLES)
        parts.append(_THERMAL_PRINT_STYLES)
    else:
        parts.append(
            _GRID_STYLES
            % {
                "barcode_box_height": "30px" if dense else "40px",
                "barcode_height": "28px" if dense else "38px",
            }
        )
        parts.append(_PRINT_STYLES)
    return "".join(parts)


def build_document(
    sheet: ComposedSheet,
    label_format: LabelFormat,
    title: str = LABEL.DEFAULT_DOCUMENT_TITLE,
) -> str:
    """
    Полный HTML документ для печати.

    Args:
        sheet: Разложенные ценники
        label_format: Формат этикетки (стили, размер страницы)
        title: Заголовок документа

    Returns:
        HTML строка (<!DOCTYPE html> ... </html>)
    """
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>\n{build_stylesheet(label_format)}</style>\n"
        "</head>\n"
        "<body>\n"
        f"{render_sheet(sheet, label_format)}\n"
        "</body>\n"
        "</html>\n"
    )


# === Предпросмотр ===

# Штриховка ушек термоэтикетки (непечатная зона)
_THERMAL_TAB_INDICATORS = (
    '<div style="position: absolute; left: 0; top: 0; width: 10mm; height: 100%; '
    "background: repeating-linear-gradient(45deg, #f0f0f0, #f0f0f0 2px, #fff 2px, #fff 4px); "
    'opacity: 0.7; pointer-events: none;"></div>\n'
    '<div style="position: absolute; right: 0; top: 0; width: 10mm; height: 100%; '
    "background: repeating-linear-gradient(-45deg, #f0f0f0, #f0f0f0 2px, #fff 2px, #fff 4px); "
    'opacity: 0.7; pointer-events: none;"></div>\n'
    '<div style="position: absolute; left: 0; top: 50%; transform: translateY(-50%); width: 0; height: 0; '
    "border-style: solid; border-width: 5mm 10mm 5mm 0; "
    'border-color: transparent #e0e0e0 transparent transparent; opacity: 0.3;"></div>\n'
    '<div style="position: absolute; right: 0; top: 50%; transform: translateY(-50%); width: 0; height: 0; '
    "border-style: solid; border-width: 5mm 0 5mm 10mm; "
    'border-color: transparent transparent transparent #e0e0e0; opacity: 0.3;"></div>\n'
)


def _preview_styles(label_format: LabelFormat) -> str:
    """Стили термоэтикетки, ограниченные контейнером предпросмотра."""
    if label_format.layout_kind is not LayoutKind.THERMAL:
        return ""
    scoped = []
    for line in _THERMAL_STYLES.strip().splitlines():
        if line.startswith("."):
            line = f".preview-container {line}"
        scoped.append(line)
    return "<style>\n" + "\n".join(scoped) + "\n</style>\n"


def render_preview(label: FormattedLabel, label_format: LabelFormat) -> str:
    """Фрагмент предпросмотра уже подготовленного ценника."""
    thermal = label_format.layout_kind is LayoutKind.THERMAL
    frame_style = (
        f"width: {label_format.label_width}; height: {label_format.label_height}; "
        "background: white; border: 1px solid #ddd; "
        f"{'padding: 0;' if thermal else 'padding: 10px;'} "
        "box-shadow: 0 2px 4px rgba(0,0,0,0.1); position: relative; overflow: hidden;"
    )
    return (
        f"{_preview_styles(label_format)}"
        '<div class="preview-container" style="display: flex; justify-content: center; '
        'padding: 20px; background: #f5f5f5;">\n'
        f'<div style="{frame_style}">\n'
        f"{_THERMAL_TAB_INDICATORS if thermal else ''}"
        f"{render_label(label, label_format)}\n"
        "</div>\n"
        "</div>\n"
    )


def generate_label_preview(
    product: ProductRecord,
    options: LabelOptions | None = None,
    label_format: LabelFormat = STANDARD_30,
) -> str:
    """HTML фрагмент для встроенного предпросмотра одного ценника."""
    label = format_label_data(product, options, label_format)
    return render_preview(label, label_format)


# === Печать ===


def build_print_job(
    products: Sequence[ProductRecord] | None,
    export_options: ExportOptions | None = None,
) -> PrintJob:
    """
    Собрать документ для печати (чистая функция).

    Каждый товар форматируется один раз и повторяется quantity раз подряд.

    Raises:
        EmptyProductListError: Нет товаров
        TooManyLabelsError: Больше settings.max_labels_per_export этикеток
        ValueError: Некорректное количество или данные товара
    """
    if not products:
        raise EmptyProductListError(NO_PRODUCTS.message)
    if export_options is None:
        export_options = ExportOptions()

    label_format = export_options.label_format
    limit = get_settings().max_labels_per_export

    expanded = expand_quantities(products, export_options.quantities)
    if len(expanded) > limit:
        raise TooManyLabelsError(len(expanded), limit)

    preflight = check_sheet_layout(label_format)
    if not preflight.success:
        for error in preflight.errors:
            logger.warning(f"[PREFLIGHT] {label_format.id}: {error.message}")

    # Штрихкод и форматирование — один раз на товар, не на каждую копию
    barcode_generator = BarcodeGenerator()
    labels: list[FormattedLabel] = []
    for product in products:
        label = format_label_data(product, export_options.label_options, label_format, barcode_generator)
        labels.extend([label] * quantity_for(product, export_options.quantities))

    sheet = compose_sheet(labels, label_format)
    document = build_document(sheet, label_format, export_options.title)

    return PrintJob(
        title=export_options.title,
        document=document,
        format_id=label_format.id,
        label_count=sheet.label_count,
        page_count=sheet.page_count,
    )


def export_price_labels(
    products: Sequence[ProductRecord] | None,
    export_options: ExportOptions | None = None,
    dispatch: Dispatch | None = None,
) -> ExportResult:
    """
    Напечатать ценники.

    Собирает документ и передаёт его в dispatch (принт-сервер), не дожидаясь печати.
    Никогда не бросает исключение — ошибка возвращается в ExportResult.

    Args:
        products: Товары
        export_options: Формат, количества, опции ценника, заголовок
        dispatch: Куда отдать готовый PrintJob (None — только собрать)

    Returns:
        ExportResult(success, label_count, page_count) или ExportResult(success=False, error)
    """
    if not products:
        return ExportResult(success=False, error=NO_PRODUCTS.message, hint=NO_PRODUCTS.hint)

    try:
        job = build_print_job(products, export_options)
        if dispatch is not None:
            dispatch(job)
    except TooManyLabelsError as e:
        friendly = too_many_labels_error(e.label_count, e.limit)
        logger.warning(f"[EXPORT] {friendly.details}")
        return ExportResult(success=False, error=friendly.message, hint=friendly.hint)
    except Exception as e:
        logger.exception("[EXPORT] Ошибка сборки ценников")
        friendly = internal_error(e)
        return ExportResult(success=False, error=friendly.message, hint=friendly.hint)

    logger.info(
        f"[EXPORT] {job.format_id}: {job.label_count} этикеток, {job.page_count} стр.",
        extra={"format_id": job.format_id, "label_count": job.label_count, "page_count": job.page_count},
    )
    return ExportResult(success=True, label_count=job.label_count, page_count=job.page_count)


def export_single_label(
    product: ProductRecord,
    export_options: ExportOptions | None = None,
    dispatch: Dispatch | None = None,
) -> ExportResult:
    """Напечатать один ценник товара (количество всегда 1)."""
    export_options = export_options or ExportOptions()
    single = ExportOptions(
        label_format=export_options.label_format,
        quantities={product.id: 1},
        label_options=export_options.label_options,
        title=export_options.title,
    )
    return export_price_labels([product], single, dispatch)
