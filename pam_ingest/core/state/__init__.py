"""State layer - series acotadas y raw log."""

from .raw_log import DEFAULT_MAX_LINES, RawLog
from .series_store import DEFAULT_MAX_POINTS, SeriesStore

__all__ = ["DEFAULT_MAX_LINES", "RawLog", "DEFAULT_MAX_POINTS", "SeriesStore"]
