"""Fixtures compartidas."""

from datetime import datetime

import pytest

from pam_ingest.common.config import Settings
from pam_ingest.core.pipeline.decoder import TelemetryDecoder

FIXED_NOW_MS = 1_700_000_000_000

# 14 campos, sin header: DeviceId ... Date, Time
DEFAULT_ROW = "1234,5.1,7.2,9.3,120,415,45.5,21.5,1013.2,40.1,-105.2,88,2025-09-22,14:07:03"
DEFAULT_ROW_TS = int(datetime(2025, 9, 22, 14, 7, 3).timestamp() * 1000)


def make_settings(**overrides) -> Settings:
    values = dict(
        delimiter=",",
        series_max_points=600,
        raw_log_max_lines=2000,
        serial_port="",
        baud_rate=115200,
        read_chunk_size=4096,
        auto_newline="cr",
        api_key="",
        http_host="127.0.0.1",
        http_port=8001,
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW_MS


@pytest.fixture
def decoder(clock) -> TelemetryDecoder:
    return TelemetryDecoder(clock=clock)


@pytest.fixture
def pm_decoder(decoder) -> TelemetryDecoder:
    """Decoder con el header de tres columnas ya detectado."""
    decoder.ingest("DeviceId,PM1(UGM3),PM2.5(UGM3)")
    return decoder
