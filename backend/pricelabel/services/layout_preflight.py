# backend/pricelabel/services/layout_preflight.py
"""
Pre-flight проверка формата листа ПЕРЕД печатью.

Проверяет, что сетка этикеток (labels_per_row × ширина, rows_per_page × высота)
помещается на лист letter с учётом полей документа.
Печать не блокирует — только предупреждает.
"""

import re
from dataclasses import dataclass, field

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import cm, inch, mm

from pricelabel.config import LABEL
from pricelabel.models.label_types import LabelFormat, PageSize

# Точки (pt) на единицу CSS длины
_UNITS = {
    "mm": mm,
    "cm": cm,
    "in": inch,
    "pt": 1.0,
    "px": 0.75,  # CSS: 96px = 1in = 72pt
}

_LENGTH_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(mm|cm|in|pt|px)\s*$")

# Допуск на округление (pt)
_TOLERANCE_PT = 0.01


def parse_length(value: str) -> float:
    """
    CSS длина в пунктах ReportLab ("2.625in" → 189.0).

    Raises:
        ValueError: Если единица не поддерживается
    """
    match = _LENGTH_PATTERN.match(value)
    if not match:
        raise ValueError(f"Unsupported length: {value!r}")
    number, unit = match.groups()
    return float(number) * _UNITS[unit]


@dataclass
class PreflightError:
    """Ошибка preflight проверки."""

    field_id: str  # labels_per_row / rows_per_page / label_width ...
    message: str
    suggestion: str | None = None


@dataclass
class SheetPreflightResult:
    """Результат preflight проверки листа."""

    success: bool
    errors: list[PreflightError] = field(default_factory=list)
    used_width_pt: float = 0.0
    used_height_pt: float = 0.0
    available_width_pt: float = 0.0
    available_height_pt: float = 0.0


def check_sheet_layout(label_format: LabelFormat) -> SheetPreflightResult:
    """
    Проверить, помещается ли сетка формата на страницу.

    Для page_size="custom" страница равна этикетке — всегда помещается.
    """
    errors: list[PreflightError] = []

    try:
        width = parse_length(label_format.label_width)
        height = parse_length(label_format.label_height)
    except ValueError as e:
        errors.append(
            PreflightError(
                field_id="label_width",
                message=str(e),
                suggestion="Use mm, cm, in, pt or px, for example 2.625in",
            )
        )
        return SheetPreflightResult(success=False, errors=errors)

    if label_format.page_size == PageSize.CUSTOM.value:
        return SheetPreflightResult(
            success=True,
            used_width_pt=width,
            used_height_pt=height,
            available_width_pt=width,
            available_height_pt=height,
        )

    page_width, page_height = letter
    available_width = page_width - 2 * LABEL.SHEET_MARGIN_HORIZONTAL_IN * inch
    available_height = page_height - 2 * LABEL.SHEET_MARGIN_VERTICAL_IN * inch

    used_width = width * label_format.labels_per_row
    used_height = height * label_format.rows_per_page

    if used_width > available_width + _TOLERANCE_PT:
        max_per_row = int((available_width + _TOLERANCE_PT) // width)
        errors.append(
            PreflightError(
                field_id="labels_per_row",
                message=(
                    f"A row of {label_format.labels_per_row} labels {label_format.label_width} wide "
                    f"does not fit the sheet ({used_width / inch:.3f}in > {available_width / inch:.3f}in)"
                ),
                suggestion=f"Use at most {max_per_row} labels per row",
            )
        )

    if used_height > available_height + _TOLERANCE_PT:
        max_rows = int((available_height + _TOLERANCE_PT) // height)
        errors.append(
            PreflightError(
                field_id="rows_per_page",
                message=(
                    f"{label_format.rows_per_page} rows {label_format.label_height} high "
                    f"do not fit the sheet ({used_height / inch:.3f}in > {available_height / inch:.3f}in)"
                ),
                suggestion=f"Use at most {max_rows} rows per page",
            )
        )

    return SheetPreflightResult(
        success=not errors,
        errors=errors,
        used_width_pt=used_width,
        used_height_pt=used_height,
        available_width_pt=available_width,
        available_height_pt=available_height,
    )
