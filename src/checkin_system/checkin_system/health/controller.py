from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "/api")

    @app.route(prefix, methods=["GET"], endpoint="api_index")
    def api_index():
        return jsonify({
            "success": True,
            "message": "Welcome to the event check-in API",
            "availableEndpoints": [f"{prefix}/checkin", f"{prefix}/admin", f"{prefix}/health"],
        })

    @app.route(f"{prefix}/health", methods=["GET"], endpoint="health")
    def health():
        """Liveness: always answers, reports the database state alongside."""
        db_ok = container.conn.ping()
        return jsonify({
            "status": "ok",
            "message": "Check-in backend is running",
            "timestamp": now_local().isoformat(),
            "database": {"status": "connected" if db_ok else "disconnected"},
        }), 200

    @app.route(f"{prefix}/health/ready", methods=["GET"], endpoint="health_ready")
    def health_ready():
        if container.conn.ping():
            return jsonify({"success": True, "status": "ready"}), 200
        return jsonify({"success": False, "status": "unavailable", "message": "Database connection failed"}), 503
