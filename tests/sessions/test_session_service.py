from __future__ import annotations

import threading
import time

import pytest

from src.geoattend.geoattend.core.exceptions import NotFoundError, ValidationError
from src.geoattend.geoattend.sessions.service import SessionService
from tests.fakes import InMemorySessions


def test_create_session_is_active_and_anchored_to_teacher_ip(sessions_repo, fixed_now):
    svc = SessionService(sessions_repo)

    s = svc.create_session("t1", "  Physics ", "10.0.0.5", now=fixed_now)

    assert s.is_active is True
    assert s.subject == "Physics"
    assert s.teacher_ip == "10.0.0.5"
    assert s.date == fixed_now
    assert svc.list_active_sessions() == [s]


@pytest.mark.parametrize(
    "teacher_id,subject,ip",
    [("t1", "", "10.0.0.5"), ("t1", "   ", "10.0.0.5"), ("t1", "Math", "10.0.0"), ("t1", "Math", "999.0.0.1"), ("", "Math", "10.0.0.5")],
)
def test_create_session_validates_input(sessions_repo, teacher_id, subject, ip):
    svc = SessionService(sessions_repo)

    with pytest.raises(ValidationError):
        svc.create_session(teacher_id, subject, ip)

    assert svc.list_active_sessions() == []


def test_new_session_supersedes_previous_one(sessions_repo, clock):
    svc = SessionService(sessions_repo)

    s1 = svc.create_session("t1", "Math", "10.0.0.5", now=clock())
    s2 = svc.create_session("t1", "Math II", "10.0.0.5", now=clock())

    assert svc.get_session(s1.session_id).is_active is False
    assert svc.get_session(s2.session_id).is_active is True
    assert svc.list_sessions(teacher_id="t1", active_only=True) == [s2]


def test_other_teachers_sessions_are_untouched(sessions_repo, clock):
    svc = SessionService(sessions_repo)

    a = svc.create_session("t1", "Math", "10.0.0.5", now=clock())
    b = svc.create_session("t2", "Art", "10.0.9.1", now=clock())
    svc.create_session("t1", "Math", "10.0.0.5", now=clock())

    assert svc.get_session(b.session_id).is_active is True
    assert svc.get_session(a.session_id).is_active is False
    assert [s.teacher_id for s in svc.list_active_sessions()] == ["t2", "t1"]


def test_at_most_one_active_session_after_many_creates(sessions_repo, clock):
    svc = SessionService(sessions_repo)

    for i in range(5):
        svc.create_session("t1", f"Class {i}", "10.0.0.5", now=clock())

    active = [s for s in svc.list_sessions_for_teacher("t1") if s.is_active]
    assert len(active) == 1
    assert active[0].subject == "Class 4"


def test_teacher_history_is_newest_first(sessions_repo, clock):
    svc = SessionService(sessions_repo)

    first = svc.create_session("t1", "A", "10.0.0.5", now=clock())
    second = svc.create_session("t1", "B", "10.0.0.5", now=clock())

    history = svc.list_sessions_for_teacher("t1")
    assert [s.session_id for s in history] == [second.session_id, first.session_id]


def test_end_session_is_idempotent(sessions_repo, fixed_now):
    svc = SessionService(sessions_repo)
    s = svc.create_session("t1", "Math", "10.0.0.5", now=fixed_now)

    ended = svc.end_session(s.session_id)
    again = svc.end_session(s.session_id)

    assert ended.is_active is False
    assert again == ended
    assert svc.list_active_sessions() == []


def test_end_unknown_session_raises(sessions_repo):
    with pytest.raises(NotFoundError):
        SessionService(sessions_repo).end_session("missing")


class RacySessions(InMemorySessions):
    """Deactivate and insert are separate steps with a gap in between."""

    def create_replacing_active(self, *, teacher_id, subject, teacher_ip, created_at):
        self.deactivate_for_teacher(teacher_id)
        time.sleep(0.005)
        return self.insert(teacher_id=teacher_id, subject=subject, teacher_ip=teacher_ip, created_at=created_at)


def test_concurrent_creates_for_one_teacher_leave_one_active(fixed_now):
    repo = RacySessions()
    svc = SessionService(repo)

    threads = [
        threading.Thread(target=svc.create_session, args=("t1", f"Class {i}", "10.0.0.5"), kwargs={"now": fixed_now})
        for i in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(repo.list_for_teacher("t1")) == 8
    assert len([s for s in repo.list_for_teacher("t1") if s.is_active]) == 1


@pytest.mark.parametrize("teacher_id,subject", [("t" * 65, "Math"), ("t1", "M" * 256)])
def test_create_session_rejects_oversized_fields(sessions_repo, teacher_id, subject):
    with pytest.raises(ValidationError):
        SessionService(sessions_repo).create_session(teacher_id, subject, "10.0.0.5")
