"""
Repository for the append-only search log.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models.search_log import SearchLog


class SearchLogRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def append(self, *, query: str, success: bool) -> SearchLog:
        entry = SearchLog(query=query, success=success)
        self._session.add(entry)
        self._session.flush()
        return entry

    def count(self, *, success: bool | None = None) -> int:
        stmt = select(func.count()).select_from(SearchLog)
        if success is not None:
            stmt = stmt.where(SearchLog.success.is_(success))
        return int(self._session.scalar(stmt) or 0)
