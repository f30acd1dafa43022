"""Configuration module — frozen dataclass loaded from environment variables."""

import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SINK_TYPES = ("eventlog", "logging")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


def _parse_sink_type(value: str) -> str:
    sink_type = value.strip().lower()
    if sink_type not in SINK_TYPES:
        raise ValueError(f"SINK_TYPE must be one of {', '.join(SINK_TYPES)}, got {value!r}")
    return sink_type


@dataclass(frozen=True)
class Config:
    host: str = "0.0.0.0"
    port: int = 514
    # RFC 3164 4.1: the total length of the packet MUST be 1024 bytes or less.
    buffer_size: int = 1024
    socket_timeout_sec: float = 1.0
    sink_dir: str = "./eventlog"
    log_name: str = "syslogd"
    source_name: str = "syslogd"
    log_level: str = "INFO"
    sink_type: str = "eventlog"
    dashboard_enabled: bool = False
    dashboard_port: int = 8080
    max_failures: int = 100


def load_config() -> Config:
    """Build Config from environment variables with sensible defaults."""
    return Config(
        host=os.environ.get("SYSLOG_HOST", Config.host),
        port=int(os.environ.get("SYSLOG_PORT", Config.port)),
        buffer_size=int(os.environ.get("BUFFER_SIZE", Config.buffer_size)),
        socket_timeout_sec=float(
            os.environ.get("SOCKET_TIMEOUT_SEC", Config.socket_timeout_sec)
        ),
        sink_dir=os.environ.get("SINK_DIR", Config.sink_dir),
        log_name=os.environ.get("LOG_NAME", Config.log_name),
        source_name=os.environ.get("SOURCE_NAME", Config.source_name),
        log_level=_parse_log_level(os.environ.get("LOG_LEVEL", Config.log_level)),
        sink_type=_parse_sink_type(os.environ.get("SINK_TYPE", Config.sink_type)),
        dashboard_enabled=_parse_bool(os.environ.get("DASHBOARD_ENABLED", "false")),
        dashboard_port=int(os.environ.get("DASHBOARD_PORT", Config.dashboard_port)),
        max_failures=int(os.environ.get("MAX_FAILURES", Config.max_failures)),
    )
