"""Endpoints de lectura: snapshot, series, sensores, raw log e ingesta manual."""

from collections import Counter

from fastapi import APIRouter, Depends, HTTPException

from ..auth import require_api_key
from ..core.pipeline.decoder import TelemetryDecoder
from ..dependencies import get_decoder
from ..schemas import (
    IngestLinesIn,
    IngestResultOut,
    RawLogOut,
    SensorOut,
    SeriesOut,
    SeriesPointOut,
    SnapshotOut,
)

router = APIRouter(tags=["readings"])


@router.get("/snapshot", response_model=SnapshotOut)
def get_snapshot(decoder: TelemetryDecoder = Depends(get_decoder)):
    return SnapshotOut(values=decoder.snapshot())


@router.get("/summary")
def get_summary(decoder: TelemetryDecoder = Depends(get_decoder)):
    """Device id, hora del dispositivo, posición y último valor por sensor."""
    return decoder.summary()


@router.get("/sensors", response_model=list[SensorOut])
def get_sensors(decoder: TelemetryDecoder = Depends(get_decoder)):
    return [SensorOut(**s.to_dict()) for s in decoder.present_sensors()]


@router.get("/series/{sensor_key}", response_model=SeriesOut)
def get_series(sensor_key: str, decoder: TelemetryDecoder = Depends(get_decoder)):
    sensor = next((s for s in decoder.present_sensors() if s.key == sensor_key), None)
    if sensor is None:
        raise HTTPException(status_code=404, detail=f"Sensor '{sensor_key}' not present")

    return SeriesOut(
        key=sensor.key,
        label=sensor.label,
        unit=sensor.unit,
        points=[SeriesPointOut(**p.to_dict()) for p in decoder.series(sensor.key)],
    )


@router.get("/raw-log", response_model=RawLogOut)
def get_raw_log(decoder: TelemetryDecoder = Depends(get_decoder)):
    return RawLogOut(lines=decoder.raw_log(), max_lines=decoder.raw_log_capacity)


@router.delete("/raw-log", dependencies=[Depends(require_api_key)])
def clear_raw_log(decoder: TelemetryDecoder = Depends(get_decoder)):
    decoder.clear_raw_log()
    return {"cleared": True}


@router.post(
    "/ingest",
    response_model=IngestResultOut,
    dependencies=[Depends(require_api_key)],
)
def ingest_lines(payload: IngestLinesIn, decoder: TelemetryDecoder = Depends(get_decoder)):
    """Ingesta manual de líneas ya enmarcadas (pruebas, replays)."""
    outcomes = Counter(decoder.ingest(line).value for line in payload.lines)
    return IngestResultOut(received=len(payload.lines), outcomes=dict(outcomes))
