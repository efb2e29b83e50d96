"""Pipeline layer - decoder de la sesión."""

from .decoder import IngestOutcome, TelemetryDecoder

__all__ = ["IngestOutcome", "TelemetryDecoder"]
