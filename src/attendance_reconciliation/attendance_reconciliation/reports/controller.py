from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_date_range, require_year
from ..core.exceptions import MalformedTimeValue, NotFoundError, ValidationError
from ..container import Container
from .query import ReportQuery

logger = logging.getLogger(__name__)


def _date_arg(name: str, *, required: bool = True) -> Optional[date]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        if required:
            raise ValidationError(f"Parameter {name} wajib diisi")
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"Parameter {name} harus berformat YYYY-MM-DD")


def _int_arg(name: str, *, default: Optional[int] = None) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        if default is None:
            raise ValidationError(f"Parameter {name} wajib diisi")
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parameter {name} harus berupa angka")


def _year_arg(*, default: int) -> int:
    return require_year(_int_arg("year", default=default))


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return jsonify({"success": True, "data": view(*args, **kwargs)}), 200
            except MalformedTimeValue as e:
                logger.warning("Malformed clock value in %s: %s", request.path, e)
                return jsonify({
                    "success": False,
                    "message": str(e),
                    "record_id": e.record_id,
                    "field": e.field,
                }), 422
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"success": False, "message": str(e)}), 404
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return jsonify({"success": False, "message": "Terjadi kesalahan sistem"}), 500

        return wrapper

    @app.route("/api/employees/<employee_id>/period", methods=["GET"], endpoint="api_employee_period")
    @json_errors
    def employee_period(employee_id: str):
        query = ReportQuery(employee_id=employee_id, start=_date_arg("start"), end=_date_arg("end"))
        report = reports.build_period_report(query)
        return {"rows": report.rows, "summary": report.summary}

    @app.route("/api/employees/<employee_id>/month", methods=["GET"], endpoint="api_employee_month")
    @json_errors
    def employee_month(employee_id: str):
        today = now_local().date()
        report = reports.build_month_report(
            employee_id,
            _year_arg(default=today.year),
            _int_arg("month", default=today.month),
        )
        return {"rows": report.rows, "summary": report.summary}

    @app.route("/api/employees/<employee_id>/leave-balance", methods=["GET"], endpoint="api_leave_balance")
    @json_errors
    def leave_balance(employee_id: str):
        return reports.leave_balance(employee_id, _year_arg(default=now_local().year))

    @app.route("/api/overtime/top", methods=["GET"], endpoint="api_overtime_top")
    @json_errors
    def overtime_top():
        start = _date_arg("start", required=False)
        end = _date_arg("end", required=False)
        if start and end:
            require_date_range(start, end)
        n = _int_arg("n") if request.args.get("n") else None
        return reports.top_overtime(start=start, end=end, n=n)

    @app.route("/api/overtime/recap", methods=["GET"], endpoint="api_overtime_recap")
    @json_errors
    def overtime_recap():
        today = now_local().date()
        return reports.overtime_recap(
            _year_arg(default=today.year),
            _int_arg("month", default=today.month),
        )

    @app.route("/api/leave-quotas", methods=["GET"], endpoint="api_leave_quotas")
    @json_errors
    def leave_quotas():
        return reports.leave_quota_table(
            _year_arg(default=now_local().year),
            manager_id=request.args.get("manager_id") or None,
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @json_errors
    def dashboard():
        today = _date_arg("today", required=False) or now_local().date()
        return reports.dashboard(today=today)
