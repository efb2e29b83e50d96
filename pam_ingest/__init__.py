"""PAM serial telemetry ingest.

Decodes the CSV-over-serial stream of the PAM air-quality monitor into
latest-value snapshots and bounded per-sensor series.
"""

from .core.pipeline.decoder import IngestOutcome, TelemetryDecoder

__version__ = "0.1.0"

__all__ = ["IngestOutcome", "TelemetryDecoder", "__version__"]
