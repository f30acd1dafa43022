"""Flask monitoring endpoints for the syslog receiver."""

from flask import Flask, jsonify

from syslogd.receiver import SyslogReceiver


def create_dashboard_app(receiver: SyslogReceiver) -> Flask:
    app = Flask(__name__)

    @app.route("/stats")
    def stats():
        snap = receiver.metrics.snapshot()
        snap["recent_failures"] = receiver.failure_tracker.get_recent(10)
        return jsonify(snap)

    @app.route("/state")
    def state():
        address = receiver.server_address
        return jsonify(
            state=receiver.state.value,
            listening_on=f"{address[0]}:{address[1]}" if address else None,
        )

    @app.route("/health")
    def health():
        return jsonify(status="ok")

    return app


def run_dashboard(app: Flask, port: int):
    """Run the Flask app (intended for use in a daemon thread)."""
    app.run(host="0.0.0.0", port=port, use_reloader=False)
