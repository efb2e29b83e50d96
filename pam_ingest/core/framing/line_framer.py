"""Line framing for the serial text stream.

The device terminates lines with CR, LF or CRLF (firmware revisions differ,
and some mix them). Chunks arrive with arbitrary boundaries, so a line or a
CRLF pair may be split across two reads.
"""

from __future__ import annotations

import codecs
import re
from typing import List

_TERMINATOR = re.compile(r"\r\n|\r|\n")


class LineFramer:
    """Turns text chunks into complete lines.

    The trailing incomplete fragment is buffered and prepended to the next
    chunk. A CR at the very end of a chunk is treated as a terminator right
    away; if the following chunk starts with LF it is the second half of that
    CRLF pair and is dropped.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._skip_lf = False

    def feed(self, chunk: str) -> List[str]:
        """Consume one chunk and return the lines it completed."""
        if not chunk:
            return []

        if self._skip_lf:
            self._skip_lf = False
            if chunk[0] == "\n":
                chunk = chunk[1:]

        data = self._buffer + chunk
        lines = _TERMINATOR.split(data)
        self._buffer = lines.pop()
        self._skip_lf = data.endswith("\r")
        return lines

    def flush(self) -> List[str]:
        """Emit the buffered remainder once, at end of stream."""
        remainder, self._buffer = self._buffer, ""
        self._skip_lf = False
        return [remainder] if remainder else []

    @property
    def pending(self) -> str:
        return self._buffer


class ChunkTextDecoder:
    """Incremental UTF-8 decoding of raw byte chunks.

    A multi-byte character split across two reads is held back until it is
    complete. Invalid sequences become U+FFFD instead of raising.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def decode(self, chunk: bytes) -> str:
        return self._decoder.decode(chunk)

    def finish(self) -> str:
        return self._decoder.decode(b"", final=True)
