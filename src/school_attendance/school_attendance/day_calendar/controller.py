from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.web import current_role, current_user_id, domain_errors, json_ok, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.day_calendar_service

    def _month_year():
        today = now_local().date()
        return request.args.get("month") or today.month, request.args.get("year") or today.year

    @app.route("/api/attendance/marked-days", methods=["GET"], endpoint="marked_days")
    @login_required
    @domain_errors
    def marked_days():
        month, year = _month_year()
        return json_ok(data=service.marked_days_map(month=month, year=year))

    @app.route("/api/attendance/day-management", methods=["GET"], endpoint="day_management_list")
    @login_required
    @domain_errors
    def day_management_list():
        month, year = _month_year()
        overrides = service.list_for_month(current_role=current_role(), month=month, year=year)
        return json_ok(data=[o.to_dict() for o in overrides])

    @app.route("/api/attendance/day-management", methods=["POST"], endpoint="day_management_add")
    @login_required
    @domain_errors
    def day_management_add():
        body = request.get_json(silent=True) or {}
        override = service.add(
            current_role=current_role(),
            current_user_id=current_user_id(),
            override_date=body.get("date"),
            day_type=body.get("dayType"),
            holiday_type=body.get("holidayType"),
            description=body.get("description"),
        )
        return json_ok(message="Day marked successfully", data=override.to_dict())

    @app.route("/api/attendance/day-management/<day>", methods=["PUT"], endpoint="day_management_update")
    @login_required
    @domain_errors
    def day_management_update(day: str):
        body = request.get_json(silent=True) or {}
        override = service.update(
            current_role=current_role(),
            override_date=day,
            day_type=body.get("dayType"),
            holiday_type=body.get("holidayType"),
            description=body.get("description"),
        )
        return json_ok(message="Day management record updated successfully", data=override.to_dict())

    @app.route("/api/attendance/day-management/<day>", methods=["DELETE"], endpoint="day_management_remove")
    @login_required
    @domain_errors
    def day_management_remove(day: str):
        service.remove(current_role=current_role(), override_date=day)
        return json_ok(message="Day management record removed successfully")
