"""
Repository for admin audit entries.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.change_log import ChangeLog


class ChangeLogRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def record(
        self,
        *,
        action: str,
        entity_type: str,
        entity_id: str,
        admin_username: str,
        details: str | None = None,
    ) -> ChangeLog:
        entry = ChangeLog(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            admin_username=admin_username,
            details=details,
        )
        self._session.add(entry)
        self._session.flush()
        return entry

    def list_recent(self, *, limit: int = 50) -> list[ChangeLog]:
        stmt = select(ChangeLog).order_by(ChangeLog.created_at.desc(), ChangeLog.id.desc()).limit(max(1, limit))
        return list(self._session.scalars(stmt).all())
