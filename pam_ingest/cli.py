"""CLI entry point: read a PAM stream (serial port or capture file).

Ejemplos:
    pam-ingest --port /dev/ttyUSB0 --serve
    pam-ingest --replay capture.txt --export-series series.csv
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import uvicorn

from .common.config import get_settings
from .core.export.exporter import ExportResult
from .core.pipeline.decoder import TelemetryDecoder
from .main import create_app
from .transports.base import TelemetryTransport, TransportError
from .transports.commands import CommandSender, NewlineMode
from .transports.replay import ReplayTransport
from .transports.serial_port import SerialTransport
from .transports.session import SerialSession

logger = logging.getLogger(__name__)


def _build_parser(settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="PAM serial telemetry ingest")
    source = p.add_mutually_exclusive_group()
    source.add_argument("--port", default=settings.serial_port or None, help="serial port, e.g. /dev/ttyUSB0")
    source.add_argument("--replay", metavar="FILE", help="replay a captured stream from a file")
    p.add_argument("--baud", type=int, default=settings.baud_rate)
    p.add_argument("--chunk-size", type=int, default=settings.read_chunk_size)
    p.add_argument("--replay-delay", type=float, default=0.0, help="seconds between replayed chunks")
    p.add_argument("--newline", default=settings.auto_newline, choices=[m.value for m in NewlineMode])

    header = p.add_mutually_exclusive_group()
    header.add_argument("--assume-default", action="store_true", help="start with the built-in 14-field header")
    header.add_argument("--header", help="start with a custom comma-separated header")

    p.add_argument("--serve", action="store_true", help="serve the HTTP API while reading")
    p.add_argument("--host", default=settings.http_host)
    p.add_argument("--http-port", type=int, default=settings.http_port)
    p.add_argument("--export-raw", metavar="PATH", help="write the raw log CSV when the stream ends")
    p.add_argument("--export-series", metavar="PATH", help="write the series CSV when the stream ends")
    p.add_argument("--log-level", default=settings.log_level)
    return p


def _open_transport(args) -> Optional[TelemetryTransport]:
    if args.replay:
        return ReplayTransport.from_file(args.replay, chunk_size=args.chunk_size, delay_seconds=args.replay_delay)
    if args.port:
        return SerialTransport(args.port, baud_rate=args.baud, chunk_size=args.chunk_size)
    return None


def _write_export(result: ExportResult, path: str) -> None:
    if result.declined:
        logger.warning("Export to %s skipped: %s", path, result.message)
        return
    # content already carries BOM and CRLF rows
    Path(path).write_text(result.content, encoding="utf-8", newline="")
    logger.info("Wrote %d rows to %s", result.rows, path)


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = _build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    decoder = TelemetryDecoder.from_settings(settings)
    if args.header:
        if decoder.set_custom_schema(args.header) is None:
            logger.error("Custom header has no fields: %r", args.header)
            return 2
    elif args.assume_default:
        decoder.assume_default_schema()

    try:
        transport = _open_transport(args)
        if transport is not None:
            transport.start()
    except TransportError as e:
        logger.error("Cannot open transport: %s", e)
        return 1

    if transport is None and not args.serve:
        logger.error("No input: pass --port, --replay or --serve")
        return 2

    session = SerialSession(transport, decoder) if transport else None
    commands = CommandSender(transport, decoder, NewlineMode.parse(args.newline))

    logger.info("PAM ingest started")
    logger.info(
        "Config: source=%s delimiter=%r max_points=%d raw_log=%d",
        transport.transport_name if transport else "http-only",
        settings.delimiter, settings.series_max_points, settings.raw_log_max_lines,
    )

    try:
        if args.serve:
            app = create_app(decoder=decoder, session=session, commands=commands, settings=settings)
            uvicorn.run(app, host=args.host, port=args.http_port, log_level=str(args.log_level).lower())
        else:
            asyncio.run(session.run())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        if transport is not None:
            transport.stop()

    logger.info("Stream ended. %s", decoder.stats)
    if args.export_raw:
        _write_export(decoder.export_raw(), args.export_raw)
    if args.export_series:
        _write_export(decoder.export_series(), args.export_series)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
