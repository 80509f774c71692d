from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..container import Container
from ..core.exceptions import DomainError
from .service import public_team_view, status_view


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "/api")

    @app.route(f"{prefix}/checkin", methods=["POST"], endpoint="checkin")
    def checkin():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            team = container.checkin_service.check_in(data.get("teamId"))
        except DomainError as e:
            return error_response(e)

        return jsonify({
            "success": True,
            "message": "Team checked in successfully!",
            "team": public_team_view(team),
        }), 200

    @app.route(f"{prefix}/checkin/status/<team_id>", methods=["GET"], endpoint="checkin_status")
    def checkin_status(team_id: str):
        try:
            team = container.checkin_service.get_status(team_id)
        except DomainError as e:
            return error_response(e)

        body = {"success": True}
        body.update(status_view(team))
        return jsonify(body), 200
