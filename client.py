"""CLI entry point for the syslog test client."""

import argparse
import logging
import sys
import time

from syslogd.client import SyslogClient
from syslogd.pri import Facility, Severity

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    parser = argparse.ArgumentParser(description="Syslog UDP test client")
    parser.add_argument("--server", default="localhost", help="Server host")
    parser.add_argument("--port", type=int, default=514, help="Server port")
    parser.add_argument("--facility", choices=[f.name for f in Facility], default="user")
    parser.add_argument("--severity", choices=[s.name for s in Severity], default="notice")
    parser.add_argument("--count", type=int, default=1, help="Number of messages to send")
    parser.add_argument("--interval", type=float, default=0.1, help="Seconds between messages")
    parser.add_argument("--message", default="test message from syslog client")
    args = parser.parse_args()

    client = SyslogClient(args.server, args.port)
    try:
        for i in range(args.count):
            client.send(Facility[args.facility], Severity[args.severity], args.message)
            if args.interval > 0 and i < args.count - 1:
                time.sleep(args.interval)
        logger.info("Sent %d messages to %s:%d", client.sent, args.server, args.port)
    finally:
        client.close()


if __name__ == "__main__":
    main()
