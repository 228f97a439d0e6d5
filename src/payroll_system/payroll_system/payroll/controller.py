from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.validators import require_positive_int
from ..core.exceptions import DomainError, PayslipError, ValidationError
from ..container import Container


STATUS_BY_CODE = {
    "VALIDATION_ERROR": 400,
    "INVALID_PERIOD": 400,
    "INVALID_OVERTIME_RATE": 400,
    "EMPLOYEE_NOT_FOUND": 404,
    "PAYSLIP_NOT_FOUND": 404,
    "EMPLOYEE_INACTIVE": 409,
    "PERSISTENCE_FAILURE": 503,
}


def _error_response(error: DomainError):
    body = {"success": False, "code": error.code, "message": str(error)}
    if isinstance(error, PayslipError):
        body["context"] = error.context()
    return jsonify(body), STATUS_BY_CODE.get(error.code, 400)


def _date_field(value, field_name: str):
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date (YYYY-MM-DD)")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payslips", methods=["POST"], endpoint="api_generate_payslip")
    def generate_payslip():
        payload = request.get_json(silent=True)
        try:
            if payload is None:
                payload = {}
            if not isinstance(payload, dict):
                raise ValidationError("Request body must be a JSON object")
            employee_id = require_positive_int(payload.get("employee_id"), "employee_id")
            start = _date_field(payload.get("pay_period_start"), "pay_period_start")
            end = _date_field(payload.get("pay_period_end"), "pay_period_end")
            payslip = container.payslip_service.generate(
                employee_id,
                start,
                end,
                overtime_rate=payload.get("overtime_rate"),
            )
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "data": payslip.as_dict()}), 201

    @app.route("/api/payslips/<int:payslip_id>", methods=["GET"], endpoint="api_get_payslip")
    def get_payslip(payslip_id: int):
        try:
            payslip = container.payslip_service.get_payslip(payslip_id)
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "data": payslip.as_dict()})

    @app.route("/api/payslips", methods=["GET"], endpoint="api_list_payslips")
    def list_payslips():
        try:
            raw_employee = (request.args.get("employee_id") or "").strip()
            employee_id = require_positive_int(raw_employee, "employee_id") if raw_employee else None
            try:
                start = parse_optional_date(request.args.get("start_date"))
                end = parse_optional_date(request.args.get("end_date"))
            except ValueError:
                raise ValidationError("Dates must use YYYY-MM-DD")
            payslips = container.payslip_service.list_payslips(
                employee_id=employee_id,
                start_date=start,
                end_date=end,
            )
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "data": [p.as_dict() for p in payslips]})
