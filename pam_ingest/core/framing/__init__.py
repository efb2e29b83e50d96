"""Framing layer - bytes → texto → líneas."""

from .line_framer import ChunkTextDecoder, LineFramer

__all__ = ["ChunkTextDecoder", "LineFramer"]
