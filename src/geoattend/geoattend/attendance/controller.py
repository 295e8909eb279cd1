from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso
from ..common.http import client_ip, json_body
from ..container import Container
from .model import AttendanceRecord


def record_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "sessionId": r.session_id,
        "studentId": r.student_id,
        "studentName": r.student_name,
        "status": r.status.value,
        "timestamp": to_iso(r.timestamp),
        "studentIp": r.student_ip,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_mark")
    def api_attendance_mark():
        data = json_body()
        record = container.attendance_service.mark_attendance(
            data.get("sessionId"),
            data.get("studentId"),
            data.get("studentName"),
            client_ip(data.get("studentIp")),
        )
        return jsonify(record_json(record))

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    def api_attendance_list():
        records = container.attendance_service.list_records(
            session_id=request.args.get("sessionId") or None,
            student_id=request.args.get("studentId") or None,
        )
        return jsonify([record_json(r) for r in records])

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="api_attendance_stats")
    def api_attendance_stats():
        counts = container.attendance_service.aggregate_status_counts()
        return jsonify({status.value: total for status, total in counts.items()})

    @app.route("/api/attendance/<record_id>", methods=["PATCH"], endpoint="api_attendance_override")
    def api_attendance_override(record_id: str):
        data = json_body()
        record = container.attendance_service.update_status(record_id, data.get("status"))
        return jsonify(record_json(record))

    @app.route("/api/students/<student_id>/history", methods=["GET"], endpoint="api_student_history")
    def api_student_history(student_id: str):
        """Student's records joined with the owning session's subject and date."""
        sessions = {}
        out = []
        for r in container.attendance_service.list_for_student(student_id):
            if r.session_id not in sessions:
                sessions[r.session_id] = container.sessions_repo.get_by_id(r.session_id)
            session = sessions[r.session_id]

            item = record_json(r)
            item["sessionSubject"] = session.subject if session else None
            item["sessionDate"] = to_iso(session.date) if session else None
            out.append(item)
        return jsonify(out)
