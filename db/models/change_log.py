"""
db/models/change_log.py

Audit trail of admin edits to catalog entities.
"""

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class ChangeLogAction:
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeLog(Base, CreatedAtMixin):
    __tablename__ = "change_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="UPDATE, DELETE",
    )
    entity_type: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_username: Mapped[str] = mapped_column(String(150), nullable=False)

    __table_args__ = (
        Index("ix_change_logs_created_at", "created_at"),
        Index("ix_change_logs_entity", "entity_type", "entity_id"),
    )
