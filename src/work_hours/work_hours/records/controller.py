from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date, parse_time_of_day
from ..common.web import capability_required, current_actor, login_required, request_payload
from ..container import Container
from ..core.enums import Capability
from ..reports.export import record_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/records", endpoint="list_records")
    @login_required
    def list_records():
        records = container.record_service.list_visible(current_actor())
        return jsonify({"records": [record_to_dict(r) for r in records]})

    @app.route("/records", methods=["POST"], endpoint="add_record")
    @capability_required(Capability.REGISTER_WORK)
    def add_record():
        payload = request_payload()
        work_date = parse_iso_date(payload["date"]) if payload.get("date") else None
        record = container.record_service.register(
            current_actor(),
            location=payload.get("location", ""),
            start_time=parse_time_of_day(payload.get("start_time")),
            end_time=parse_time_of_day(payload.get("end_time")),
            work_date=work_date,
        )
        return jsonify({"success": True, "record": record_to_dict(record)}), 201

    @app.route("/records/<record_id>", methods=["PUT"], endpoint="edit_record")
    @capability_required(Capability.EDIT_RECORDS)
    def edit_record(record_id: str):
        payload = request_payload()
        changes = {}
        if "location" in payload:
            changes["location"] = payload["location"]
        if payload.get("date"):
            changes["work_date"] = parse_iso_date(payload["date"])
        if "start_time" in payload:
            changes["start_time"] = parse_time_of_day(payload["start_time"])
        if "end_time" in payload:
            changes["end_time"] = parse_time_of_day(payload["end_time"])

        record = container.record_service.update(current_actor(), record_id, **changes)
        return jsonify({"success": True, "record": record_to_dict(record)})

    @app.route("/records/<record_id>", methods=["DELETE"], endpoint="delete_record")
    @capability_required(Capability.EDIT_RECORDS)
    def delete_record(record_id: str):
        container.record_service.delete(current_actor(), record_id)
        return jsonify({"success": True, "message": "Work record deleted"})

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        summary = container.record_service.dashboard(current_actor())
        return jsonify(
            {
                "records_this_month": summary.records_this_month,
                "unique_dates": summary.unique_dates,
                "total_records": summary.total_records,
                "recent": [record_to_dict(r) for r in summary.recent],
            }
        )
