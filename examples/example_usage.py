"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the session/attendance rules live in services.
"""

import importlib

from config import get_settings_module

from src.geoattend.geoattend.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    session = container.session_service.create_session("teacher-1", "Algebra", "10.0.0.5")
    for student_id, ip in (("s-1", "10.0.0.42"), ("s-2", "10.0.1.42")):
        record = container.attendance_service.mark_attendance(session.session_id, student_id, student_id, ip)
        print(student_id, ip, record.status.value)

    container.session_service.end_session(session.session_id)
    print(container.attendance_service.aggregate_status_counts())


if __name__ == "__main__":
    main()
