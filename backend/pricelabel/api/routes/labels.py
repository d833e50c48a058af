"""
API эндпоинты для ценников.

Каталог форматов, preflight листа, предпросмотр, документ и печать.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from pricelabel.api.dependencies import get_print_spool
from pricelabel.config import get_settings
from pricelabel.models.label_types import LABEL_FORMATS, LabelFormat, LabelOptions
from pricelabel.models.schemas import (
    ExportRequest,
    ExportResponse,
    FormatSelection,
    FormatsResponse,
    LabelFormatSchema,
    LabelOptionsIn,
    PreflightErrorSchema,
    PreflightResponse,
    PreflightStatus,
    PreviewRequest,
)
from pricelabel.services.error_messages import NO_PRODUCTS, invalid_format_error, unknown_format_error
from pricelabel.services.label_formatter import LabelDataError
from pricelabel.services.layout_preflight import check_sheet_layout
from pricelabel.services.print_document import (
    ExportOptions,
    build_print_job,
    export_price_labels,
    generate_label_preview,
)
from pricelabel.services.print_spool import PrintJob, PrintSpool

router = APIRouter(prefix="/labels")


def _resolve_format(selection: FormatSelection) -> LabelFormat:
    """Формат из запроса или HTTP 404/422."""
    try:
        return selection.resolve()
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=unknown_format_error(selection.format_id).to_dict(),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=invalid_format_error(str(e)).to_dict(),
        )


def _label_options(options: LabelOptionsIn) -> LabelOptions:
    settings = get_settings()
    return options.to_options(settings.default_currency_symbol, settings.default_store_name)


def _export_options(request: ExportRequest) -> ExportOptions:
    return ExportOptions(
        label_format=_resolve_format(request),
        quantities=dict(request.quantities),
        label_options=_label_options(request.label_options),
        title=request.title,
    )


@router.get("/formats", response_model=FormatsResponse)
async def list_formats() -> FormatsResponse:
    """Каталог форматов этикеток."""
    return FormatsResponse(
        formats=[LabelFormatSchema.from_format(fmt) for fmt in LABEL_FORMATS.values()]
    )


@router.post("/preflight", response_model=PreflightResponse)
async def preflight_format(selection: FormatSelection) -> PreflightResponse:
    """
    Проверить, помещается ли сетка формата на лист.

    Не блокирует печать — только предупреждает.
    """
    label_format = _resolve_format(selection)
    result = check_sheet_layout(label_format)
    return PreflightResponse(
        status=PreflightStatus.OK if result.success else PreflightStatus.ERROR,
        format=LabelFormatSchema.from_format(label_format),
        errors=[
            PreflightErrorSchema(field_id=e.field_id, message=e.message, suggestion=e.suggestion)
            for e in result.errors
        ],
        used_width_pt=result.used_width_pt,
        used_height_pt=result.used_height_pt,
        available_width_pt=result.available_width_pt,
        available_height_pt=result.available_height_pt,
    )


@router.post("/preview", response_class=HTMLResponse)
async def preview_label(request: PreviewRequest) -> HTMLResponse:
    """HTML фрагмент предпросмотра одного ценника."""
    label_format = _resolve_format(request)
    try:
        fragment = generate_label_preview(
            request.product.to_record(),
            _label_options(request.label_options),
            label_format,
        )
    except LabelDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTMLResponse(content=fragment)


@router.post("/document", response_class=HTMLResponse)
async def build_labels_document(request: ExportRequest) -> HTMLResponse:
    """Полный HTML документ с ценниками (без отправки на печать)."""
    if not request.products:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_PRODUCTS.to_dict())

    export_options = _export_options(request)
    try:
        job = build_print_job([p.to_record() for p in request.products], export_options)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTMLResponse(content=job.document)


@router.post("/export", response_model=ExportResponse)
async def export_labels(
    request: ExportRequest,
    background_tasks: BackgroundTasks,
    spool: PrintSpool = Depends(get_print_spool),
) -> ExportResponse:
    """
    Напечатать ценники.

    Документ собирается сразу, а в очередь печати уходит фоновой задачей
    (результат печати не отслеживается). Ошибка сборки — success=false.
    """

    def dispatch(job: PrintJob) -> None:
        background_tasks.add_task(spool.submit, job)

    result = export_price_labels(
        [p.to_record() for p in request.products],
        _export_options(request),
        dispatch=dispatch,
    )
    return ExportResponse(
        success=result.success,
        label_count=result.label_count,
        page_count=result.page_count,
        error=result.error,
        hint=result.hint,
    )
