"""Report filing and review endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import NotFound

from storage import get_storage
from storage.records import ReportRecord
from utils.request_validation import report_payload, status_update_payload

reports_bp = Blueprint("reports", __name__)


def _serialize_reports(reports: list[ReportRecord]):
    return jsonify([report.to_dict() for report in reports])


@reports_bp.route("", methods=["POST"])
def create_report():
    """File a new pending report on behalf of ``user_id``."""

    report_data = report_payload(request)
    storage = get_storage()

    if storage.get_user(report_data["user_id"]) is None:
        raise NotFound("User not found")

    report = storage.create_report(report_data)
    current_app.logger.info(
        "Report %s (%s) filed by %s", report.id, report.category, report.user_id
    )
    return jsonify(report.to_dict()), HTTPStatus.CREATED


@reports_bp.route("", methods=["GET"])
def list_reports():
    """City-wide view used by administrators."""

    return _serialize_reports(get_storage().list_all_reports())


@reports_bp.route("/user/<user_id>", methods=["GET"])
def list_user_reports(user_id: str):
    return _serialize_reports(get_storage().list_reports_by_user(user_id))


@reports_bp.route("/zone/<path:zone>", methods=["GET"])
def list_zone_reports(zone: str):
    """Reports filed by citizens assigned to ``zone``."""

    return _serialize_reports(get_storage().list_reports_by_zone(zone))


@reports_bp.route("/<report_id>/verify", methods=["PATCH"])
def verify_report(report_id: str):
    """Approve or reject a report.

    Reviewing an already reviewed report overwrites its status again, and a
    repeated ``verified`` credits the owner a second time.
    """

    status, verified_by = status_update_payload(request)
    storage = get_storage()

    if verified_by is not None and storage.get_user(verified_by) is None:
        raise NotFound("User not found")

    previous = storage.get_report(report_id)
    report = storage.set_report_status(report_id, status, verified_by)
    if report is None:
        raise NotFound("Report not found")

    if previous is not None and previous.status != "pending":
        current_app.logger.warning(
            "Report %s re-reviewed: %s -> %s", report.id, previous.status, report.status
        )
    current_app.logger.info(
        "Report %s marked %s by %s (%d points)",
        report.id,
        report.status,
        report.verified_by,
        report.points,
    )
    return jsonify(report.to_dict())
