"""
db/models/search_log.py

Append-only record of submitted search queries.
"""

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class SearchLog(Base, CreatedAtMixin):
    __tablename__ = "search_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    query: Mapped[str] = mapped_column(String(500), nullable=False)
    success: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        comment="True when the search returned at least one result",
    )

    __table_args__ = (
        Index("ix_search_logs_success", "success"),
        Index("ix_search_logs_created_at", "created_at"),
    )
