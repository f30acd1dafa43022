"""Severity to sink class translation.

The sink only knows three entry types, so the eight syslog severities are
folded onto them.
"""

import logging
from enum import Enum

from syslogd.pri import Severity


class SinkClass(Enum):
    ERROR = "Error"
    WARNING = "Warning"
    INFORMATION = "Information"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    SinkClass.ERROR: logging.ERROR,
    SinkClass.WARNING: logging.WARNING,
    SinkClass.INFORMATION: logging.INFO,
}

_SEVERITY_TO_CLASS = {
    Severity.emergency: SinkClass.ERROR,
    Severity.alert: SinkClass.ERROR,
    Severity.critical: SinkClass.ERROR,
    Severity.error: SinkClass.ERROR,
    Severity.warning: SinkClass.WARNING,
    Severity.notice: SinkClass.INFORMATION,
    Severity.info: SinkClass.INFORMATION,
    Severity.debug: SinkClass.INFORMATION,
}


def severity_to_sink_class(severity) -> SinkClass:
    """Map a syslog severity to a sink class; unknown values count as errors."""
    return _SEVERITY_TO_CLASS.get(severity, SinkClass.ERROR)
