"""Flask web application serving fleet health as JSON."""

import logging
import os
from datetime import datetime, timezone

from flask import Flask, jsonify, request

from fleet_health import ConfigError, HealthStatus, SnapshotError, load_config, load_snapshot
from fleet_health.loader import parse_timestamp

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["FLEET_SNAPSHOT"] = os.environ.get("FLEET_SNAPSHOT", "snapshots/fleet.yaml")
app.config["FLEET_HEALTH_CONFIG"] = os.environ.get("FLEET_HEALTH_CONFIG")


def _evaluation_time():
    """Evaluation time from ?asOf=, or None to use the snapshot's own."""
    as_of = request.args.get("asOf")
    if not as_of:
        return None
    return parse_timestamp(as_of)


@app.route("/api/health")
def liveness():
    """Liveness check for the service itself."""
    return jsonify({"status": "ok", "time": datetime.now(timezone.utc).isoformat()})


@app.route("/api/alerts")
def alerts():
    """Fleet health: summary plus one verdict per active vehicle."""
    try:
        now = _evaluation_time()
    except ValueError:
        return jsonify({"error": "Invalid asOf value"}), 400

    try:
        config = load_config(app.config["FLEET_HEALTH_CONFIG"])
        snapshot = load_snapshot(app.config["FLEET_SNAPSHOT"])
    except (ConfigError, SnapshotError) as e:
        logger.error("Fleet history unavailable: %s", e)
        return jsonify({"error": "Fleet history unavailable"}), 503

    result = snapshot.evaluate(config, now)

    status_filter = request.args.get("status")
    vehicles = result.vehicles
    if status_filter:
        labels = {s.label: s for s in HealthStatus}
        if status_filter not in labels:
            return jsonify({"error": f"Unknown status '{status_filter}'"}), 400
        vehicles = [v for v in vehicles if v.status == labels[status_filter]]

    return jsonify(
        {
            "summary": result.summary.to_dict(),
            "vehicles": [v.to_dict() for v in vehicles],
        }
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
