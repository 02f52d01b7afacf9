"""
db/models/company.py

Company model: one persisted brand with its logo and usage counters.
"""

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Company(Base, TimestampMixin):
    """
    A brand saved to the catalog, either seeded, curated by an admin, or
    promoted from an external search result when a user downloaded it.

    download_count and search_count are only ever changed with atomic
    `col = col + 1` UPDATE statements.
    """

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    domain: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Bare hostname without scheme, e.g. stripe.com",
    )

    logo_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    category: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    sector: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    industry: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    affiliate_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Curated affiliate link shown on the logo detail page",
    )

    download_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    search_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    # ── Indexes ────────────────────────────────────────────────────────────────

    __table_args__ = (
        Index("ix_companies_name", "name"),
        Index("ix_companies_download_count", "download_count"),
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} name={self.name!r} domain={self.domain!r}>"
