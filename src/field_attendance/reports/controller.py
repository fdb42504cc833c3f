from __future__ import annotations

from flask import Flask, request

from ..attendance.controller import history_entry_json
from ..common.web import api_view, ok, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    @app.route("/api/reports/daily-summary", methods=["GET"], endpoint="daily_summary")
    @api_view(manager_only=True)
    def daily_summary(identity):
        summary = service.daily_summary(
            identity.user_id,
            request.args.get("date"),
            request.args.get("employee_id"),
        )
        return ok(summary)

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @api_view(manager_only=True)
    def dashboard_stats(identity):
        return ok(service.manager_dashboard(identity.user_id))

    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="dashboard_employee")
    @api_view()
    def dashboard_employee(identity):
        dashboard = service.employee_dashboard(identity.user_id)
        data = to_json(dashboard)
        data["today_checkins"] = [history_entry_json(e) for e in dashboard.today_checkins]
        return ok(data)
