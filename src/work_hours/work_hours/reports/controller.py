from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import capability_required, current_actor, json_error
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import Capability
from .export import report_filename, report_to_csv_bytes, report_to_dict


def register(app: Flask, container: Container) -> None:
    def _build_report(*, require_range: bool):
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        if require_range and (not start_s or not end_s):
            return None

        today = now_local().date()
        start = parse_iso_date(start_s) if start_s else today - timedelta(days=DEFAULT_REPORT_DAYS)
        end = parse_iso_date(end_s) if end_s else today

        return container.report_service.build(
            current_actor(),
            start=start,
            end=end,
            user_filter=request.args.get("user") or None,
        )

    @app.route("/reports", endpoint="report")
    @capability_required(Capability.VIEW_REPORTS)
    def report():
        data = _build_report(require_range=False)
        return jsonify(report_to_dict(data))

    @app.route("/reports.csv", endpoint="report_csv")
    @capability_required(Capability.VIEW_REPORTS)
    def report_csv():
        data = _build_report(require_range=True)
        if data is None:
            return json_error("Missing start/end parameters", 400)
        return app.response_class(
            report_to_csv_bytes(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={report_filename(data, 'csv')}"},
        )

    @app.route("/reports.json", endpoint="report_json")
    @capability_required(Capability.VIEW_REPORTS)
    def report_json():
        data = _build_report(require_range=True)
        if data is None:
            return json_error("Missing start/end parameters", 400)
        response = jsonify(report_to_dict(data))
        response.headers["Content-Disposition"] = f"attachment; filename={report_filename(data, 'json')}"
        return response
