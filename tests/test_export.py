"""Tests de export CSV.

Ejecutar:
    pytest tests/test_export.py -v
"""

import re

import pytest

from pam_ingest.core.domain.sensor import SensorDescriptor, SeriesPoint
from pam_ingest.core.export.exporter import (
    BOM,
    export_raw,
    export_series,
    format_timestamp,
    format_value,
)

PM1 = SensorDescriptor(key="PM1", label="PM1", unit="µg/m³", field="PM1(UGM3)")
TEMP = SensorDescriptor(key="TEMP", label="Temperature", unit="°C", field="TEMP(C)")


@pytest.fixture
def series():
    return {
        "PM1": [SeriesPoint(1000, 1.0), SeriesPoint(3000, 2.5)],
        "TEMP": [SeriesPoint(2000, 20.0), SeriesPoint(3000, None)],
    }


# =============================================================================
# RAW LOG
# =============================================================================

class TestExportRaw:
    def test_bom_crlf_and_quoting(self):
        result = export_raw(["PAM ready", "b,c", 'say "hi"'])
        assert not result.declined
        assert result.content == (
            BOM + "line\r\n"
            "PAM ready\r\n"
            '"b,c"\r\n'
            '"say ""hi"""\r\n'
        )
        assert result.rows == 3
        assert result.filename.startswith("pam_raw_")
        assert result.filename.endswith(".csv")

    def test_empty_is_declined(self):
        result = export_raw([])
        assert result.declined
        assert result.content is None
        assert result.message

    def test_same_log_exports_identically(self):
        lines = ["a", "b,c"]
        assert export_raw(lines).content == export_raw(lines).content


# =============================================================================
# SERIES
# =============================================================================

class TestExportSeries:
    def test_wide_table_over_union_of_timestamps(self, series):
        result = export_series([PM1, TEMP], series)
        assert not result.declined
        assert result.rows == 3
        assert result.content.startswith(BOM)

        rows = result.content[len(BOM):].split("\r\n")
        assert rows[0] == "Timestamp,PM1 (µg/m³),Temperature (°C)"
        assert rows[1] == f"{format_timestamp(1000)},1,"
        assert rows[2] == f"{format_timestamp(2000)},,20"
        assert rows[3] == f"{format_timestamp(3000)},2.5,"
        assert rows[4] == ""

    def test_columns_follow_sensor_order(self, series):
        result = export_series([TEMP, PM1], series)
        header = result.content[len(BOM):].split("\r\n")[0]
        assert header == "Timestamp,Temperature (°C),PM1 (µg/m³)"

    def test_timestamps_sorted_even_if_arrival_is_not(self):
        result = export_series([PM1], {"PM1": [SeriesPoint(5000, 5.0), SeriesPoint(1000, 1.0)]})
        rows = result.content[len(BOM):].split("\r\n")
        assert rows[1].startswith(format_timestamp(1000))
        assert rows[2].startswith(format_timestamp(5000))

    def test_duplicate_timestamp_last_wins(self):
        result = export_series([PM1], {"PM1": [SeriesPoint(1000, 1.0), SeriesPoint(1000, 9.0)]})
        rows = result.content[len(BOM):].split("\r\n")
        assert result.rows == 1
        assert rows[1] == f"{format_timestamp(1000)},9"

    def test_no_sensors_declined(self, series):
        assert export_series([], series).declined

    def test_no_points_declined(self):
        result = export_series([PM1, TEMP], {"PM1": [], "TEMP": []})
        assert result.declined
        assert "No sensor data" in result.message

    def test_same_series_exports_identically(self, series):
        first = export_series([PM1, TEMP], series).content
        assert export_series([PM1, TEMP], series).content == first


class TestFormatting:
    def test_timestamp_is_local_iso_with_millis_and_offset(self):
        assert re.fullmatch(
            r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}[+-]\d\d:\d\d",
            format_timestamp(1_700_000_000_123),
        )
        assert format_timestamp(1_700_000_000_123).startswith("2023-11-1")

    @pytest.mark.parametrize("value,expected", [
        (600.0, "600"),
        (12.3, "12.3"),
        (-0.5, "-0.5"),
        (None, None),
    ])
    def test_value(self, value, expected):
        assert format_value(value) == expected
