from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _default_env_file() -> str:
    repo_root = Path(__file__).resolve().parents[2]
    return str(repo_root / ".env")


@dataclass(frozen=True)
class Settings:
    delimiter: str
    series_max_points: int
    raw_log_max_lines: int

    serial_port: str
    baud_rate: int
    read_chunk_size: int
    auto_newline: str

    api_key: str
    http_host: str
    http_port: int
    log_level: str


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("PAM_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    delimiter = os.getenv("PAM_DELIMITER", ",") or ","
    series_max_points = int(os.getenv("PAM_SERIES_MAX_POINTS", "600"))
    raw_log_max_lines = int(os.getenv("PAM_RAW_LOG_MAX_LINES", "2000"))

    # Linux: /dev/ttyUSB0 (CP210x), Windows: COM3. Empty = no serial port.
    serial_port = os.getenv("PAM_SERIAL_PORT", "")
    baud_rate = int(os.getenv("PAM_BAUD_RATE", "115200"))
    read_chunk_size = int(os.getenv("PAM_READ_CHUNK_SIZE", "4096"))
    # none | cr | lf | crlf
    auto_newline = os.getenv("PAM_AUTO_NEWLINE", "cr").strip().lower()

    # If PAM_API_KEY is not set, mutating endpoints are open (dev mode).
    api_key = os.getenv("PAM_API_KEY", "")
    http_host = os.getenv("PAM_HTTP_HOST", "127.0.0.1")
    http_port = int(os.getenv("PAM_HTTP_PORT", "8001"))
    log_level = os.getenv("PAM_LOG_LEVEL", "INFO").upper()

    return Settings(
        delimiter=delimiter,
        series_max_points=series_max_points,
        raw_log_max_lines=raw_log_max_lines,
        serial_port=serial_port,
        baud_rate=baud_rate,
        read_chunk_size=read_chunk_size,
        auto_newline=auto_newline,
        api_key=api_key,
        http_host=http_host,
        http_port=http_port,
        log_level=log_level,
    )
