from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def create_replacing_active(
        self,
        *,
        teacher_id: str,
        subject: str,
        teacher_ip: str,
        created_at: datetime,
    ) -> Session:
        """Deactivate the teacher's active sessions and insert a new active one.

        Both steps must happen in a single transaction.
        """

        raise NotImplementedError

    def list_active(self) -> Sequence[Session]:
        """Active sessions of every teacher, oldest first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Session]:
        """Every session ever created, newest first."""

        raise NotImplementedError

    def list_for_teacher(self, teacher_id: str) -> Sequence[Session]:
        """All sessions of one teacher, newest first."""

        raise NotImplementedError

    def deactivate(self, session_id: str) -> bool:
        raise NotImplementedError
