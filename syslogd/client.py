"""Syslog client — sends RFC 3164 datagrams over UDP, for testing the bridge."""

import logging
import socket

from syslogd.pri import Facility, PriValue, Severity

logger = logging.getLogger(__name__)


def format_message(facility: Facility, severity: Severity, message: str) -> bytes:
    """Build ``<PRI>message`` as ASCII bytes."""
    pri = PriValue(facility, severity)
    return f"<{pri.code}>{message}".encode("ascii", errors="replace")


class SyslogClient:
    def __init__(self, server_host: str, server_port: int = 514):
        self._server_host = server_host
        self._server_port = server_port
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sent = 0

    def send_raw(self, data: bytes):
        self._sock.sendto(data, (self._server_host, self._server_port))
        self.sent += 1

    def send(self, facility: Facility, severity: Severity, message: str):
        """Send a single syslog message."""
        self.send_raw(format_message(facility, severity, message))
        logger.debug("Sent %s.%s to %s:%d", facility.name, severity.name,
                     self._server_host, self._server_port)

    def close(self):
        self._sock.close()
