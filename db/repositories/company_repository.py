"""
Repository for company lookups, creation and atomic counter updates.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.orm import Session

from db.models.company import Company


class CompanyRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, company_id: int) -> Company | None:
        return self._session.get(Company, company_id)

    def get_by_domain(self, domain: str) -> Company | None:
        stmt = select(Company).where(Company.domain == domain)
        return self._session.scalars(stmt).first()

    def domain_taken_by_other(self, *, domain: str, company_id: int) -> bool:
        stmt = select(Company.id).where(Company.domain == domain, Company.id != company_id).limit(1)
        return self._session.scalars(stmt).first() is not None

    def search(self, query: str, *, limit: int | None = None) -> list[Company]:
        """
        Substring match on name or domain, most downloaded first.
        """

        stmt = (
            select(Company)
            .where(self._match(query))
            .order_by(Company.download_count.desc(), Company.id.asc())
        )
        if limit is not None:
            stmt = stmt.limit(max(1, limit))
        return list(self._session.scalars(stmt).all())

    def list_top_downloaded(self, *, limit: int) -> list[Company]:
        stmt = (
            select(Company)
            .order_by(Company.download_count.desc(), Company.id.asc())
            .limit(max(1, limit))
        )
        return list(self._session.scalars(stmt).all())

    def list_page(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
    ) -> tuple[list[Company], int]:
        """
        Return one page of companies (newest first) and the total match count.
        """

        stmt: Select[tuple[Company]] = select(Company)
        count_stmt = select(func.count()).select_from(Company)
        if search:
            stmt = stmt.where(self._match(search))
            count_stmt = count_stmt.where(self._match(search))

        stmt = stmt.order_by(Company.created_at.desc(), Company.id.desc()).offset(max(0, offset)).limit(max(1, limit))
        companies = list(self._session.scalars(stmt).all())
        total = int(self._session.scalar(count_stmt) or 0)
        return companies, total

    def create(self, **fields: Any) -> Company:
        company = Company(**fields)
        self._session.add(company)
        self._session.flush()
        self._session.refresh(company)
        return company

    def delete(self, company: Company) -> None:
        self._session.delete(company)
        self._session.flush()

    def increment_download_count(self, company_id: int) -> bool:
        """
        Atomically add one download; return False when no row matched.
        """

        stmt = (
            update(Company)
            .where(Company.id == company_id)
            .values(download_count=Company.download_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return bool(result.rowcount)

    def increment_search_counts(self, company_ids: Sequence[int]) -> int:
        if not company_ids:
            return 0
        stmt = (
            update(Company)
            .where(Company.id.in_(list(company_ids)))
            .values(search_count=Company.search_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def count(self) -> int:
        return int(self._session.scalar(select(func.count()).select_from(Company)) or 0)

    def total_downloads(self) -> int:
        return int(self._session.scalar(select(func.coalesce(func.sum(Company.download_count), 0))) or 0)

    @staticmethod
    def _match(term: str):
        return or_(
            Company.name.contains(term, autoescape=True),
            Company.domain.contains(term, autoescape=True),
        )
