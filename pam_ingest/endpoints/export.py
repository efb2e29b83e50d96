"""CSV downloads. Declined exports answer 409 with the reason."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..core.export.exporter import ExportResult
from ..core.pipeline.decoder import TelemetryDecoder
from ..dependencies import get_decoder

router = APIRouter(tags=["export"])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _csv_response(result: ExportResult) -> Response:
    if result.declined:
        raise HTTPException(status_code=409, detail=result.message)
    return Response(
        content=result.content.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.get("/export/raw")
def export_raw(decoder: TelemetryDecoder = Depends(get_decoder)):
    return _csv_response(decoder.export_raw())


@router.get("/export/series")
def export_series(decoder: TelemetryDecoder = Depends(get_decoder)):
    return _csv_response(decoder.export_series())
