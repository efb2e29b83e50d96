"""Export layer - tablas CSV."""

from .exporter import BOM, ExportResult, export_raw, export_series, format_timestamp, format_value

__all__ = ["BOM", "ExportResult", "export_raw", "export_series", "format_timestamp", "format_value"]
