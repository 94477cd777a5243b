from __future__ import annotations

import io

from flask import Flask, request, send_file, session

from ..common.validators import require_month, require_year
from ..common.web import current_role, current_user_id, domain_errors, json_error, json_ok, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.badge import render_badge_png


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_get")
    @login_required
    @domain_errors
    def attendance_get():
        summary = service.get_attendance(
            current_user_id(),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return json_ok(data=summary.to_dict())

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    @domain_errors
    def attendance_stats():
        return json_ok(data=service.get_attendance_stats(current_user_id()).to_dict())

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    @domain_errors
    def attendance_mark():
        body = request.get_json(silent=True) or {}
        summary = service.mark_attendance(
            current_user_id(),
            work_date=body.get("date"),
            status=body.get("status"),
            check_in_time=body.get("checkInTime"),
            check_out_time=body.get("checkOutTime"),
            remarks=body.get("remarks"),
        )
        return json_ok(message="Attendance marked and summary updated successfully", data=summary.to_dict())

    def _scan_response(result):
        return json_ok(message=result.message, action=result.action, data=result.summary.to_dict())

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    @domain_errors
    def attendance_scan():
        """Scan on behalf of a barcode, or of the signed-in user when none is sent."""
        body = request.get_json(silent=True) or {}
        if not body.get("barcode") and "user_id" in session:
            return _scan_response(service.scan_mark_attendance_for_user(current_user_id()))
        return _scan_response(service.scan_mark_attendance(barcode=body.get("barcode")))

    @app.route("/api/scanner/scan", methods=["POST"], endpoint="scanner_scan")
    @domain_errors
    def scanner_scan():
        """Public endpoint for the barcode scanner relay (no session)."""
        body = request.get_json(silent=True) or {}
        return _scan_response(service.scan_mark_attendance(barcode=body.get("barcode")))

    @app.route("/api/attendance/mark-all-users", methods=["POST"], endpoint="attendance_mark_all")
    @login_required
    @domain_errors
    def attendance_mark_all():
        body = request.get_json(silent=True) or {}
        result = service.mark_attendance_for_all_users(
            current_role=current_role(),
            work_date=body.get("date"),
            entries=body.get("attendanceData"),
        )
        return json_ok(message=f"Attendance marked for {len(result.successful)} users", data=result.to_dict())

    @app.route("/api/attendance/<int:user_id>/recompute", methods=["POST"], endpoint="attendance_recompute")
    @login_required
    @domain_errors
    def attendance_recompute(user_id: int):
        if current_role() != Role.MANAGEMENT:
            raise AuthorizationError("Access denied. Only management can recompute summaries.")
        body = request.get_json(silent=True) or {}
        month = require_month(body.get("month", request.args.get("month")))
        year = require_year(body.get("year", request.args.get("year")))
        summary = service.recompute_summary(user_id, month, year)
        return json_ok(data=summary.to_dict())

    @app.route("/api/attendance/badge/<int:user_id>.png", methods=["GET"], endpoint="attendance_badge")
    @login_required
    @domain_errors
    def attendance_badge(user_id: int):
        if user_id != current_user_id() and current_role() != Role.MANAGEMENT:
            raise AuthorizationError("Access denied")
        user = container.users_repo.get_by_id(user_id)
        if not user:
            return json_error("User not found", 404)
        return send_file(io.BytesIO(render_badge_png(user)), mimetype="image/png")
