from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..checkin.service import public_team_view
from ..common.responses import error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "/api")

    @app.route(f"{prefix}/admin/stats", methods=["GET"], endpoint="admin_stats")
    def admin_stats():
        try:
            stats = container.dashboard_service.stats()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "stats": stats.to_dict()}), 200

    @app.route(f"{prefix}/admin/all-teams", methods=["GET"], endpoint="admin_all_teams")
    def admin_all_teams():
        try:
            teams = container.dashboard_service.list_teams_ui(search=request.args.get("search"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "count": len(teams), "teams": teams}), 200

    @app.route(f"{prefix}/admin/manual-checkin", methods=["POST"], endpoint="admin_manual_checkin")
    def admin_manual_checkin():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            team = container.checkin_service.manual_check_in(data.get("teamId"))
        except DomainError as e:
            return error_response(e)

        return jsonify({
            "success": True,
            "message": f"Team {team.team_id} checked in manually.",
            "team": public_team_view(team),
        }), 200

    @app.route(f"{prefix}/admin/undo-checkin/<team_id>", methods=["DELETE"], endpoint="admin_undo_checkin")
    def admin_undo_checkin(team_id: str):
        try:
            team = container.checkin_service.undo_check_in(team_id)
        except DomainError as e:
            return error_response(e)

        return jsonify({
            "success": True,
            "message": f"Check-in undone for team {team.team_id}.",
            "team": public_team_view(team),
        }), 200

    @app.route(f"{prefix}/admin/export", methods=["GET"], endpoint="admin_export")
    def admin_export():
        try:
            export = container.export_service.export()
        except DomainError as e:
            return error_response(e)

        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )
