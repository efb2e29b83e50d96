"""Tests del framing de líneas.

Ejecutar:
    pytest tests/test_line_framer.py -v
"""

from typing import List

import pytest

from pam_ingest.core.framing.line_framer import ChunkTextDecoder, LineFramer

STREAM = "DeviceId,PM1(UGM3)\r\nD1,1.5\rD1,2.5\nD1,3.5\r\n\r\nPAM> \rD1,4.5"


def frame(chunks: List[str]) -> List[str]:
    framer = LineFramer()
    lines: List[str] = []
    for chunk in chunks:
        lines.extend(framer.feed(chunk))
    lines.extend(framer.flush())
    return lines


def all_lf(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


# =============================================================================
# TERMINADORES
# =============================================================================

class TestTerminators:
    """LF, CR y CRLF son intercambiables."""

    def test_mixed_terminators_frame_like_all_lf(self):
        assert frame([STREAM]) == frame([all_lf(STREAM)])

    def test_single_chunk_lines(self):
        assert frame(["a\nb\r\nc\rd"]) == ["a", "b", "c", "d"]

    def test_empty_lines_between_terminators(self):
        assert frame(["a\n\nb\n"]) == ["a", "", "b"]

    def test_crlf_split_across_chunks_is_one_terminator(self):
        assert frame(["a\r", "\nb\r", "\n"]) == ["a", "b"]

    def test_cr_at_chunk_end_emits_line_immediately(self):
        framer = LineFramer()
        assert framer.feed("D1,1\r") == ["D1,1"]
        assert framer.feed("D1,2\r") == ["D1,2"]


# =============================================================================
# INVARIANZA AL CHUNKING
# =============================================================================

class TestChunkInvariance:
    """El resultado no depende de cómo se partió el stream."""

    def test_every_two_way_split(self):
        expected = frame([STREAM])
        for i in range(len(STREAM) + 1):
            assert frame([STREAM[:i], STREAM[i:]]) == expected, f"split at {i}"

    def test_char_by_char(self):
        assert frame(list(STREAM)) == frame([STREAM])

    @pytest.mark.parametrize("size", [2, 3, 5, 7])
    def test_fixed_size_chunks(self, size):
        chunks = [STREAM[i:i + size] for i in range(0, len(STREAM), size)]
        assert frame(chunks) == frame([STREAM])

    def test_long_line_without_limit(self):
        line = "x" * 100_000
        chunks = [line[i:i + 999] for i in range(0, len(line), 999)] + ["\n"]
        assert frame(chunks) == [line]


# =============================================================================
# FLUSH
# =============================================================================

class TestFlush:
    def test_partial_line_buffered_until_flush(self):
        framer = LineFramer()
        assert framer.feed("D1,1") == []
        assert framer.pending == "D1,1"
        assert framer.flush() == ["D1,1"]

    def test_flush_emits_once(self):
        framer = LineFramer()
        framer.feed("tail")
        assert framer.flush() == ["tail"]
        assert framer.flush() == []

    def test_flush_skips_empty_remainder(self):
        framer = LineFramer()
        framer.feed("a\n")
        assert framer.flush() == []


class TestChunkTextDecoder:
    def test_multibyte_char_split_across_chunks(self):
        data = "TEMP(°C)".encode("utf-8")
        decoder = ChunkTextDecoder()
        text = "".join(decoder.decode(data[i:i + 1]) for i in range(len(data)))
        assert text + decoder.finish() == "TEMP(°C)"

    def test_invalid_bytes_replaced(self):
        decoder = ChunkTextDecoder()
        assert decoder.decode(b"a\xffb") == "a�b"
