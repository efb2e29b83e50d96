"""Endpoints del schema activo."""

from fastapi import APIRouter, Depends, HTTPException

from ..auth import require_api_key
from ..core.domain.schema import Schema
from ..core.pipeline.decoder import TelemetryDecoder
from ..dependencies import get_decoder
from ..schemas import CustomSchemaIn, SchemaOut

router = APIRouter(tags=["schema"])


def _to_out(schema: Schema | None) -> SchemaOut:
    if schema is None:
        return SchemaOut()
    return SchemaOut(fields=list(schema.fields), source=schema.source.value, is_set=True)


@router.get("/schema", response_model=SchemaOut)
def get_schema(decoder: TelemetryDecoder = Depends(get_decoder)):
    return _to_out(decoder.current_schema())


@router.post(
    "/schema/default",
    response_model=SchemaOut,
    dependencies=[Depends(require_api_key)],
)
def assume_default_schema(decoder: TelemetryDecoder = Depends(get_decoder)):
    """Fuerza el schema default; limpia snapshot y series."""
    return _to_out(decoder.assume_default_schema())


@router.post(
    "/schema/custom",
    response_model=SchemaOut,
    dependencies=[Depends(require_api_key)],
)
def set_custom_schema(
    payload: CustomSchemaIn,
    decoder: TelemetryDecoder = Depends(get_decoder),
):
    """Header pegado por el usuario; limpia snapshot y series."""
    schema = decoder.set_custom_schema(payload.header)
    if schema is None:
        raise HTTPException(status_code=400, detail="Header has no fields")
    return _to_out(schema)
