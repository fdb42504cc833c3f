from __future__ import annotations

from flask import Flask, request

from ..common.web import api_view, ok, to_json
from ..container import Container
from ..core.exceptions import ValidationError
from .model import HistoryEntry


def history_entry_json(entry: HistoryEntry) -> dict:
    data = to_json(entry.session)
    data["client_name"] = entry.client_name
    data["client_address"] = entry.client_address
    return data


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/checkin/clients", methods=["GET"], endpoint="checkin_clients")
    @api_view()
    def checkin_clients(identity):
        return ok(service.list_assigned_clients(identity.user_id))

    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @api_view()
    def checkin(identity):
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        result = service.check_in(
            identity.user_id,
            payload.get("client_id"),
            payload.get("latitude"),
            payload.get("longitude"),
            payload.get("notes"),
        )
        return ok(
            {
                "id": result.session.session_id,
                "session": result.session,
                "distance_from_client": result.distance_km,
                "warning": result.warning,
            },
            201,
        )

    @app.route("/api/checkin/checkout", methods=["PUT"], endpoint="checkout")
    @api_view()
    def checkout(identity):
        return ok(service.check_out(identity.user_id))

    @app.route("/api/checkin/history", methods=["GET"], endpoint="checkin_history")
    @api_view()
    def checkin_history(identity):
        entries = service.get_history(
            identity.user_id,
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
        )
        return ok([history_entry_json(e) for e in entries])

    @app.route("/api/checkin/active", methods=["GET"], endpoint="checkin_active")
    @api_view()
    def checkin_active(identity):
        entry = service.get_active_session(identity.user_id)
        return ok(history_entry_json(entry) if entry is not None else None)
