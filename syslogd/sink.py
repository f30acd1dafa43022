"""Log sinks — where rewritten syslog records end up.

The receiver only depends on the LogSink protocol. EventLogSink is the local
structured store: a source registry plus one JSON-lines file per log.
"""

import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Protocol

from syslogd.classify import SinkClass

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "sources.json"


class SinkUnavailable(RuntimeError):
    """Raised when the sink cannot accept a write."""


class LogSink(Protocol):
    def ensure_source(self, name: str) -> bool: ...

    def write(self, source: str, text: str, sink_class: SinkClass) -> None: ...


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class EventLogSink:
    """File-backed event log with named sources registered under a log."""

    def __init__(self, log_dir: str, log_name: str):
        self._log_dir = log_dir
        self._log_name = log_name
        self._lock = threading.Lock()

    @property
    def log_name(self) -> str:
        return self._log_name

    @property
    def log_path(self) -> str:
        return self._path_for(self._log_name)

    @property
    def _registry_path(self) -> str:
        return os.path.join(self._log_dir, REGISTRY_FILENAME)

    def _path_for(self, log_name: str) -> str:
        return os.path.join(self._log_dir, f"{log_name}.jsonl")

    def _load_registry(self) -> dict[str, str]:
        try:
            with open(self._registry_path, "r", encoding="utf-8") as f:
                registry = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            registry = None

        if not isinstance(registry, dict):
            logger.warning("Source registry %s is corrupt, starting empty", self._registry_path)
            return {}
        return registry

    def _save_registry(self, registry: dict[str, str]):
        tmp_path = self._registry_path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(registry, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self._registry_path)

    def _append(self, log_name: str, source: str, text: str, sink_class: SinkClass):
        entry = {
            "timestamp": _timestamp(),
            "log": log_name,
            "source": source,
            "type": sink_class.value,
            "message": text,
        }
        with open(self._path_for(log_name), "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_for_source(self, name: str) -> str | None:
        with self._lock:
            return self._load_registry().get(name)

    def register_source(self, name: str, log_name: str):
        """Register a source under an arbitrary log, replacing any existing entry."""
        try:
            with self._lock:
                os.makedirs(self._log_dir, exist_ok=True)
                registry = self._load_registry()
                registry[name] = log_name
                self._save_registry(registry)
        except OSError as exc:
            raise SinkUnavailable(f"cannot register source {name!r}: {exc}") from exc

    def ensure_source(self, name: str) -> bool:
        """Make sure ``name`` is registered under this sink's log.

        A source found under a different log is deleted and recreated.
        """
        try:
            with self._lock:
                os.makedirs(self._log_dir, exist_ok=True)
                registry = self._load_registry()
                current = registry.get(name)
                if current == self._log_name:
                    return True

                if current is not None:
                    logger.warning(
                        "Source %r registered under log %r, re-registering under %r",
                        name, current, self._log_name,
                    )
                    del registry[name]

                registry[name] = self._log_name
                self._save_registry(registry)
                self._append(
                    self._log_name, name,
                    f"Event Log Created '{self._log_name}'/'{name}'",
                    SinkClass.INFORMATION,
                )
                logger.info("Created source %r in log %r", name, self._log_name)
                return name in self._load_registry()
        except OSError as exc:
            raise SinkUnavailable(f"cannot access {self._log_dir}: {exc}") from exc

    def write(self, source: str, text: str, sink_class: SinkClass):
        try:
            with self._lock:
                log_name = self._load_registry().get(source)
                if log_name is None:
                    raise SinkUnavailable(f"source {source!r} is not registered")
                self._append(log_name, source, text, sink_class)
        except OSError as exc:
            raise SinkUnavailable(f"cannot write to {self._log_dir}: {exc}") from exc

    def read_entries(self, log_name: str | None = None) -> list[dict]:
        """Return all entries of a log, oldest first."""
        path = self._path_for(log_name or self._log_name)
        if not os.path.exists(path):
            return []
        with self._lock, open(path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]


class MemorySink:
    """In-process sink that keeps entries in a list."""

    def __init__(self, available: bool = True):
        self.available = available
        self.sources: set[str] = set()
        self.entries: list[tuple[str, str, SinkClass]] = []
        self.ensure_calls = 0

    def ensure_source(self, name: str) -> bool:
        self.ensure_calls += 1
        if not self.available:
            raise SinkUnavailable("memory sink is offline")
        self.sources.add(name)
        return True

    def write(self, source: str, text: str, sink_class: SinkClass):
        if not self.available:
            raise SinkUnavailable("memory sink is offline")
        if source not in self.sources:
            raise SinkUnavailable(f"source {source!r} is not registered")
        self.entries.append((source, text, sink_class))


class LoggingSink:
    """Sink that forwards records to a stdlib logger, one child logger per source."""

    def __init__(self, logger_name: str = "syslogd.events"):
        self._logger_name = logger_name
        self._sources: set[str] = set()

    def ensure_source(self, name: str) -> bool:
        self._sources.add(name)
        return True

    def write(self, source: str, text: str, sink_class: SinkClass):
        if source not in self._sources:
            raise SinkUnavailable(f"source {source!r} is not registered")
        logging.getLogger(f"{self._logger_name}.{source}").log(sink_class.log_level, text)


def create_sink(config) -> LogSink:
    """Build the sink selected by ``config.sink_type``."""
    if config.sink_type == "logging":
        return LoggingSink()
    return EventLogSink(config.sink_dir, config.log_name)
