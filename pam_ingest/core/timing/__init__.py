"""Timing layer - resolución de timestamps."""

from .timestamp_resolver import Clock, now_ms, parse_device_timestamp, resolve_timestamp

__all__ = ["Clock", "now_ms", "parse_device_timestamp", "resolve_timestamp"]
