from __future__ import annotations

import logging
from datetime import date
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.enums import RecordType
from ..core.exceptions import NotFoundError, SequenceOrderError, SupersededRequestError, ValidationError
from ..container import Container
from ..holidays.catalogue import default_fixed_holidays, pool_choices

logger = logging.getLogger(__name__)


def _date_range() -> tuple[date, date]:
    """start/end query params; defaults to the current month up to today."""
    today = date.today()
    start_s = request.args.get("start")
    end_s = request.args.get("end")
    start = parse_iso_date(start_s) if start_s else today.replace(day=1)
    end = parse_iso_date(end_s) if end_s else today
    return start, end


def _request_key(report: str):
    client = request.args.get("client_id") or request.headers.get("X-Client-Id")
    return (client, report) if client else None


def register(app: Flask, container: Container) -> None:
    service = container.payroll_report_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except (ValidationError, SequenceOrderError) as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"success": False, "message": str(e)}), 404
            except SupersededRequestError as e:
                return jsonify({"success": False, "message": str(e)}), 409
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return jsonify({"success": False, "message": "Lỗi hệ thống khi tạo báo cáo"}), 500

        return wrapper

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="api_report_monthly")
    @json_errors
    def api_report_monthly():
        start, end = _date_range()
        rows = service.build_monthly_report(
            start=start,
            end=end,
            user_id=request.args.get("user_id"),
            role=request.args.get("role"),
            status=request.args.get("status"),
            request_key=_request_key("monthly"),
        )
        return jsonify({"success": True, "start": start.isoformat(), "end": end.isoformat(),
                        "data": [r.to_dict() for r in rows]}), 200

    @app.route("/api/reports/basic", methods=["GET"], endpoint="api_report_basic")
    @json_errors
    def api_report_basic():
        start, end = _date_range()
        try:
            record_type = RecordType((request.args.get("record_type") or "all").lower())
        except ValueError:
            raise ValidationError("Loại bản ghi không hợp lệ")
        rows = service.build_basic_report(
            start=start,
            end=end,
            user_id=request.args.get("user_id"),
            role=request.args.get("role"),
            status=request.args.get("status"),
            record_type=record_type,
            request_key=_request_key("basic"),
        )
        return jsonify({"success": True, "data": rows}), 200

    @app.route("/api/reports/log", methods=["GET"], endpoint="api_report_log")
    @json_errors
    def api_report_log():
        start, end = _date_range()
        rows = service.build_attendance_log(
            start=start,
            end=end,
            user_id=request.args.get("user_id"),
            role=request.args.get("role"),
        )
        return jsonify({"success": True, "data": rows}), 200

    @app.route("/api/employees/<user_id>/attendance", methods=["GET"], endpoint="api_employee_attendance")
    @json_errors
    def api_employee_attendance(user_id: str):
        start, end = _date_range()
        view = service.build_employee_view(
            user_id=user_id,
            start=start,
            end=end,
            request_key=_request_key(f"employee:{user_id}"),
        )
        return jsonify({"success": True, "data": view.to_dict()}), 200

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @json_errors
    def api_dashboard():
        start, end = _date_range()
        return jsonify({"success": True, "data": service.build_dashboard(start=start, end=end).to_dict()}), 200

    @app.route("/api/holidays/catalogue", methods=["GET"], endpoint="api_holiday_catalogue")
    @json_errors
    def api_holiday_catalogue():
        fixed = [{"name": h.name, "date": h.date} for h in default_fixed_holidays()]
        return jsonify({"success": True, "data": {"fixed": fixed, "pool": pool_choices()}}), 200
