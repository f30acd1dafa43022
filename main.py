"""Entry point for the syslog to event log bridge."""

import logging
import signal
import sys
import threading

from syslogd.config import load_config
from syslogd.dashboard import create_dashboard_app, run_dashboard
from syslogd.receiver import SyslogReceiver, TransportFault
from syslogd.sink import create_sink

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    logging.getLogger().setLevel(config.log_level)

    if config.port < 1024:
        print("Please run as administrator", file=sys.stderr)

    shutdown_event = threading.Event()

    def signal_handler(signum, frame):
        logger.info("Received signal %d, shutting down...", signum)
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    receiver = SyslogReceiver(config, create_sink(config), shutdown_event)
    try:
        receiver.bind()
    except TransportFault as exc:
        logger.error("%s", exc)
        return 1

    if config.dashboard_enabled:
        app = create_dashboard_app(receiver)
        dash_thread = threading.Thread(
            target=run_dashboard, args=(app, config.dashboard_port), daemon=True,
        )
        dash_thread.start()
        logger.info("Dashboard running on port %d", config.dashboard_port)

    try:
        receiver.serve()
    finally:
        receiver.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
