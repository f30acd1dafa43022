"""Syslog receiver — pulls UDP datagrams and forwards them to a log sink."""

import logging
import socket
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from syslogd.classify import SinkClass, severity_to_sink_class
from syslogd.config import Config
from syslogd.failure_tracker import FailureTracker
from syslogd.metrics import Metrics
from syslogd.pri import Severity, find_first_pri, rewrite
from syslogd.sink import LogSink, SinkUnavailable

logger = logging.getLogger(__name__)


class TransportFault(Exception):
    """Raised when the UDP socket cannot be bound."""


class ReceiverState(Enum):
    LISTENING = "listening"
    STOPPED = "stopped"


@dataclass(frozen=True)
class RenderedRecord:
    sender: str
    text: str
    severity: Severity
    sink_class: SinkClass


def format_endpoint(addr) -> str:
    host, port = addr[0], addr[1]
    return f"{host}:{port}"


class SyslogReceiver:
    def __init__(self, config: Config, sink: LogSink, shutdown_event: threading.Event):
        self._config = config
        self._sink = sink
        self._shutdown = shutdown_event
        self._sock = None
        self._buffer = bytearray(config.buffer_size)
        self._state = ReceiverState.LISTENING
        self.server_address = None
        self.metrics = Metrics()
        self.failure_tracker = FailureTracker(config.max_failures)

    @property
    def state(self) -> ReceiverState:
        return self._state

    def bind(self):
        """Open the UDP socket. Raises TransportFault if the address is unusable."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.settimeout(self._config.socket_timeout_sec)
            sock.bind((self._config.host, self._config.port))
        except OSError as exc:
            sock.close()
            raise TransportFault(
                f"cannot bind UDP {self._config.host}:{self._config.port}: {exc}"
            ) from exc

        self._sock = sock
        self.server_address = sock.getsockname()
        logger.info(
            "Syslog receiver listening on %s:%d (buffer=%d bytes)",
            self.server_address[0], self.server_address[1], self._config.buffer_size,
        )

    def start(self):
        self.bind()
        self.serve()

    def serve(self):
        """Receive and forward datagrams until the shutdown event is set."""
        if self._sock is None:
            raise TransportFault("socket is not bound")

        logger.info("Worker running at: %s", datetime.now(timezone.utc).isoformat())

        while not self._shutdown.is_set():
            sender = None
            try:
                received = self._receive()
                if received is None:
                    continue
                nbytes, addr = received
                sender = format_endpoint(addr)
                self.metrics.record_received()
                self.handle_datagram(bytes(self._buffer[:nbytes]), addr)
            except Exception as exc:
                self.metrics.record_failed()
                self.failure_tracker.add(
                    sender or "unknown", str(exc), datetime.now(timezone.utc).isoformat()
                )
                logger.warning("Failed to forward datagram from %s: %s", sender or "unknown", exc)
                self.report_failure(exc)

        self._state = ReceiverState.STOPPED
        logger.info("Syslog receiver stopped")

    def _receive(self):
        """Wait for one datagram; None on timeout or when shutdown was requested meanwhile."""
        sock = self._sock
        if sock is None:
            return None
        try:
            nbytes, addr = sock.recvfrom_into(self._buffer)
        except socket.timeout:
            return None
        except OSError:
            if self._shutdown.is_set():
                return None
            raise

        if self._shutdown.is_set():
            logger.debug("Discarding datagram from %s received during shutdown", addr)
            return None
        return nbytes, addr

    def handle_datagram(self, data: bytes, addr) -> RenderedRecord:
        """Rewrite one datagram and write it to the sink."""
        # Oversized datagrams are already cut to the buffer size by recvfrom_into.
        message = data.decode("latin-1")
        pri = find_first_pri(message)
        sink_class = severity_to_sink_class(pri.severity)

        sender = format_endpoint(addr)
        record = RenderedRecord(
            sender=sender,
            text=f"{sender} : {rewrite(message)}",
            severity=pri.severity,
            sink_class=sink_class,
        )

        source = self._config.source_name
        if self._sink.ensure_source(source):
            self._sink.write(source, record.text, sink_class)
            self.metrics.record_forwarded(sink_class.value, pri.facility.name)
        else:
            raise SinkUnavailable(f"source {source!r} could not be registered")

        logger.debug("Forwarded %s from %s", pri, sender)
        return record

    def report_failure(self, exc: Exception):
        """Best-effort write of a failure description to the sink."""
        source = self._config.source_name
        try:
            if self._sink.ensure_source(source):
                self._sink.write(source, str(exc), SinkClass.ERROR)
        except Exception as sink_exc:
            # The sink is the only place failures are reported to.
            logger.debug("Sink unavailable, dropping failure report: %s", sink_exc)

    def stop(self):
        self._shutdown.set()
        if self._sock:
            self._sock.close()
            self._sock = None
        logger.info("Syslog receiver stats: %s", self.metrics.snapshot())
