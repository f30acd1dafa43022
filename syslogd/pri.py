"""PRI codec — decodes and rewrites RFC 3164 <N> priority headers.

The PRI part of a syslog message is a decimal number in angle brackets that
packs facility (upper 5 bits) and severity (lower 3 bits) into one value:

    <34>Oct 11 22:14:15 mymachine su: 'su root' failed
     ^^ 34 >> 3 = 4 (security), 34 & 7 = 2 (critical)

Tags are matched anywhere in the message, not only at the start, so every
embedded header is made readable.
"""

import re
from dataclasses import dataclass
from enum import IntEnum

# ASCII digits only; \d would also accept other Unicode digits.
_PRI_RE = re.compile(r"<([0-9]{1,3})>")


class InvalidPriValue(ValueError):
    """Raised when a PRI value is missing, non-numeric or out of range."""


class Facility(IntEnum):
    kernel = 0
    user = 1
    mail = 2
    system = 3
    security = 4
    internal = 5
    printer = 6
    news = 7
    uucp = 8
    cron = 9
    security2 = 10
    ftp = 11
    ntp = 12
    audit = 13
    alert = 14
    clock2 = 15
    local0 = 16
    local1 = 17
    local2 = 18
    local3 = 19
    local4 = 20
    local5 = 21
    local6 = 22
    local7 = 23


class Severity(IntEnum):
    emergency = 0
    alert = 1
    critical = 2
    error = 3
    warning = 4
    notice = 5
    info = 6
    debug = 7


@dataclass(frozen=True)
class PriValue:
    facility: Facility
    severity: Severity

    @classmethod
    def from_code(cls, code: int) -> "PriValue":
        """Split a numeric PRI into facility and severity."""
        if code < 0:
            raise InvalidPriValue(f"PRI value must be non-negative: {code}")
        facility_code = code >> 3
        severity_code = code & 0x7
        try:
            facility = Facility(facility_code)
        except ValueError:
            raise InvalidPriValue(
                f"PRI value {code} has unknown facility {facility_code}"
            ) from None
        try:
            severity = Severity(severity_code)
        except ValueError:
            raise InvalidPriValue(
                f"PRI value {code} has unknown severity {severity_code}"
            ) from None
        return cls(facility, severity)

    @classmethod
    def parse(cls, text: str | None) -> "PriValue":
        """Parse a decimal PRI string such as ``"13"``."""
        if not text or not text.isascii() or not text.isdigit():
            raise InvalidPriValue(f"PRI value is not a decimal number: {text!r}")
        return cls.from_code(int(text))

    @property
    def code(self) -> int:
        return (self.facility << 3) | self.severity

    def __str__(self) -> str:
        return f"{self.facility.name}.{self.severity.name}"


def parse_pri(text: str | None) -> PriValue:
    return PriValue.parse(text)


def render(pri: PriValue) -> str:
    """Format as ``facility.severity``, e.g. ``local0.notice``."""
    return str(pri)


def find_first_pri(message: str) -> PriValue:
    """Parse the first PRI tag in the message; the record is classified by it."""
    match = _PRI_RE.search(message)
    if match is None:
        raise InvalidPriValue("message has no PRI header")
    return PriValue.parse(match.group(1))


def rewrite(message: str) -> str:
    """Replace every PRI tag with ``facility.severity `` (note the trailing space).

    A tag that fails to parse fails the whole rewrite.
    """
    return _PRI_RE.sub(lambda m: render(PriValue.parse(m.group(1))) + " ", message)
