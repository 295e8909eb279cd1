from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MATCH_PREFIX_OCTETS
from .database.connection import DBConfig, DatabaseConnection
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    session_service: SessionService
    attendance_service: AttendanceService


def build_services(
    *,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    match_prefix_octets: int = DEFAULT_MATCH_PREFIX_OCTETS,
) -> Container:
    """Wire services around explicitly provided repositories."""

    factory = AttendanceStrategyFactory(prefix_octets=int(match_prefix_octets))
    # Fail at startup rather than on the first join.
    factory.for_join()

    return Container(
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        session_service=SessionService(sessions_repo),
        attendance_service=AttendanceService(attendance_repo, sessions_repo, strategy_factory=factory),
    )


def build_container(*, db_config: dict, match_prefix_octets: int = DEFAULT_MATCH_PREFIX_OCTETS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        match_prefix_octets=match_prefix_octets,
    )
