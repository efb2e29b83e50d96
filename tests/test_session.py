"""Tests de sesión (read loop) y comandos.

Ejecutar:
    pytest tests/test_session.py -v
"""

from unittest.mock import MagicMock, call, patch

import pytest

from pam_ingest.core.domain.schema import SchemaSource
from pam_ingest.transports.base import TransportError
from pam_ingest.transports.commands import QUICK_COMMANDS, CommandSender, NewlineMode
from pam_ingest.transports.replay import ReplayTransport
from pam_ingest.transports.serial_port import SerialTransport
from pam_ingest.transports.session import SerialSession, run_session

from tests.conftest import DEFAULT_ROW, FIXED_NOW_MS

CAPTURE = (
    "PAM v2 booting...\r\n"
    "DeviceId,PM1(UGM3),TEMP(°C)\r\n"
    "D1,1.5,20.5\r"
    "D1,2.5,21.0\n"
    "\r\n"
    "D1,3.5,N/A"
)


# =============================================================================
# READ LOOP
# =============================================================================

class TestSerialSession:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("chunk_size", [None, 1, 3, 7])
    async def test_replay_decodes_same_for_any_chunking(self, decoder, chunk_size):
        transport = ReplayTransport.from_text(CAPTURE, chunk_size=chunk_size)
        session = await run_session(transport, decoder)

        assert session is not None
        assert not session.is_running
        assert decoder.current_schema().fields == ("DeviceId", "PM1(UGM3)", "TEMP(°C)")
        assert [p.value for p in decoder.series("PM1")] == [1.5, 2.5, 3.5]
        assert [p.value for p in decoder.series("TEMP")] == [20.5, 21.0, None]
        assert decoder.snapshot() == {"DeviceId": "D1", "PM1(UGM3)": 3.5, "TEMP(°C)": None}
        assert decoder.raw_log()[0] == "PAM v2 booting..."
        assert len(decoder.raw_log()) == 5

    @pytest.mark.asyncio
    async def test_unit_with_multibyte_suffix(self, decoder):
        await run_session(ReplayTransport.from_text(CAPTURE, chunk_size=1), decoder)
        temp = next(s for s in decoder.present_sensors() if s.key == "TEMP")
        assert temp.unit == "°C"

    @pytest.mark.asyncio
    async def test_read_error_is_noted_and_tail_flushed(self, decoder):
        transport = MagicMock()
        transport.transport_name = "mock"
        transport.read_chunk.side_effect = [
            b"DeviceId,PM1(UGM3)\nD1,1",
            TransportError("mock", "device unplugged"),
        ]

        session = SerialSession(transport, decoder)
        await session.run()

        assert "⚠️ Read error: mock: device unplugged" in decoder.raw_log()
        assert [p.value for p in decoder.series("PM1")] == [1.0]
        assert not session.is_running

    @pytest.mark.asyncio
    async def test_run_session_transport_not_started(self, decoder):
        transport = MagicMock()
        transport.start.return_value = False
        assert await run_session(transport, decoder) is None
        transport.read_chunk.assert_not_called()

    def test_feed_without_loop(self, decoder):
        session = SerialSession(ReplayTransport([]), decoder)
        assert session.feed(DEFAULT_ROW.encode() + b"\r") == 1
        assert session.feed("partial") == 0
        assert session.stats["pending"] == "partial"
        assert decoder.current_schema().source is SchemaSource.DEFAULT

    def test_stop_stops_transport(self, decoder):
        transport = ReplayTransport.from_text("a\n")
        transport.start()
        session = SerialSession(transport, decoder)
        session.stop()
        assert not transport.is_open
        assert transport.read_chunk() == b""


class TestSerialTransport:
    def test_stop_cancels_pending_read_before_close(self):
        with patch("pam_ingest.transports.serial_port.serial.Serial") as serial_cls:
            port = serial_cls.return_value
            transport = SerialTransport("/dev/ttyUSB0")
            assert transport.start()
            transport.stop()

        assert port.method_calls == [call.cancel_read(), call.close()]
        assert not transport.is_open
        assert transport.read_chunk() == b""


class TestReplayTransport:
    def test_from_file(self, tmp_path):
        path = tmp_path / "capture.txt"
        path.write_bytes(CAPTURE.encode("utf-8"))
        transport = ReplayTransport.from_file(str(path), chunk_size=10)
        transport.start()
        data = b""
        while chunk := transport.read_chunk():
            data += chunk
        assert data.decode("utf-8") == CAPTURE

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(TransportError):
            ReplayTransport.from_file(str(tmp_path / "missing.txt"))


# =============================================================================
# COMANDOS
# =============================================================================

class TestCommandSender:
    @pytest.fixture
    def transport(self):
        transport = ReplayTransport([])
        transport.start()
        return transport

    def test_send_appends_newline_and_notes(self, transport, decoder):
        sender = CommandSender(transport, decoder)
        assert sender.send("m")
        assert transport.sent == [b"m\r"]
        assert decoder.raw_log() == ['→ "m\\r"']
        assert sender.stats["sent"] == 1

    @pytest.mark.parametrize("mode,payload", [
        (NewlineMode.NONE, b"k"),
        (NewlineMode.LF, b"k\n"),
        (NewlineMode.CRLF, b"k\r\n"),
    ])
    def test_newline_modes(self, transport, decoder, mode, payload):
        CommandSender(transport, decoder, newline=mode).send("k")
        assert transport.sent == [payload]

    def test_not_connected(self, decoder):
        sender = CommandSender(None, decoder)
        assert not sender.is_connected
        assert not sender.send("m")
        assert decoder.raw_log() == []

    def test_closed_transport(self, decoder):
        sender = CommandSender(ReplayTransport([]), decoder)
        assert not sender.send("m")

    def test_write_error_noted_not_raised(self, decoder):
        transport = MagicMock()
        transport.is_open = True
        transport.write.side_effect = TransportError("serial", "write timeout")

        sender = CommandSender(transport, decoder)
        assert not sender.send("x")
        assert decoder.raw_log() == ["⚠️ Write error: serial: write timeout"]
        assert sender.stats["failed"] == 1

    def test_newline_parse(self):
        assert NewlineMode.parse(" CRLF ") is NewlineMode.CRLF
        with pytest.raises(ValueError):
            NewlineMode.parse("bogus")

    def test_quick_commands(self):
        commands = {c.command: c for c in QUICK_COMMANDS}
        assert set(commands) == {"m", "?", "k", "x", "d", "g", "u", "p", "q"}
        assert commands["u"].confirm == "Restart ESP now?"
        assert commands["m"].confirm is None


def test_fixed_clock_used_for_rows_without_device_time(decoder):
    session = SerialSession(ReplayTransport([]), decoder)
    session.feed("A,PM1\n1,2\n")
    assert decoder.series("PM1")[0].timestamp == FIXED_NOW_MS
