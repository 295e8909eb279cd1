from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso
from ..common.http import client_ip, json_body, parse_flag
from ..container import Container
from .model import Session


def session_json(s: Session) -> dict:
    return {
        "id": s.session_id,
        "teacherId": s.teacher_id,
        "subject": s.subject,
        "date": to_iso(s.date),
        "teacherIp": s.teacher_ip,
        "isActive": s.is_active,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["POST"], endpoint="api_sessions_create")
    def api_sessions_create():
        data = json_body()
        session = container.session_service.create_session(
            data.get("teacherId"),
            data.get("subject"),
            client_ip(data.get("teacherIp")),
        )
        return jsonify(session_json(session)), 201

    @app.route("/api/sessions", methods=["GET"], endpoint="api_sessions_list")
    def api_sessions_list():
        sessions = container.session_service.list_sessions(
            teacher_id=request.args.get("teacherId") or None,
            active_only=parse_flag(request.args.get("active")),
        )
        return jsonify([session_json(s) for s in sessions])

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="api_sessions_get")
    def api_sessions_get(session_id: str):
        return jsonify(session_json(container.session_service.get_session(session_id)))

    @app.route("/api/sessions/<session_id>/end", methods=["PUT"], endpoint="api_sessions_end")
    def api_sessions_end(session_id: str):
        return jsonify(session_json(container.session_service.end_session(session_id)))
