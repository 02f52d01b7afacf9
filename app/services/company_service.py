"""
app/services/company_service.py

Company registration on interaction, download counters and usage metrics.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.brand import BrandRecord, BrandSource, BrandType
from db.repositories.company_repository import CompanyRepository
from db.repositories.errors import CompanyNotFoundError
from db.repositories.search_log_repository import SearchLogRepository

logger = logging.getLogger(__name__)

AUTO_DISCOVERED_SECTOR = "Auto-discovered"
AUTO_DISCOVERED_INDUSTRY = "Internet"


@dataclass(frozen=True)
class CatalogMetrics:
    total_searches: int
    search_success_rate: int
    total_downloads: int
    total_companies: int


def _success_rate(successful: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(successful * 100 / total + 0.5)


class CompanyService:
    """
    Write paths and aggregate reads over persisted companies.
    """

    def register(
        self,
        *,
        db: Session,
        name: str,
        domain: str,
        logo_url: str | None = None,
    ) -> BrandRecord:
        """
        Persist an external brand the user interacted with.

        Idempotent per domain. Persistence failures degrade to a transient
        record so the user-visible action (usually a download) proceeds.
        """

        name = name.strip()
        domain = domain.strip().lower()
        if not name or not domain:
            raise ValueError("Both name and domain are required.")

        repository = CompanyRepository(db)
        try:
            existing = repository.get_by_domain(domain)
            if existing is not None:
                return BrandRecord.from_company(existing)

            try:
                company = repository.create(
                    name=name,
                    domain=domain,
                    logo_url=logo_url or "",
                    description=f"Official logo of {name}",
                    sector=AUTO_DISCOVERED_SECTOR,
                    industry=AUTO_DISCOVERED_INDUSTRY,
                    search_count=1,
                )
                db.commit()
            except IntegrityError:
                db.rollback()
                company = repository.get_by_domain(domain)
                if company is None:
                    raise
                logger.info("Company registered concurrently domain=%s id=%s", domain, company.id)
            return BrandRecord.from_company(company)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Company registration failed domain=%s error=%s", domain, exc)
            return BrandRecord(
                id=f"temp-{int(time.time() * 1000)}",
                name=name,
                domain=domain,
                logo_url=logo_url,
                source=BrandSource.FALLBACK,
                type=BrandType.LOGO,
                is_external=True,
            )

    def record_download(self, *, db: Session, company_id: int) -> None:
        repository = CompanyRepository(db)
        if not repository.increment_download_count(company_id):
            db.rollback()
            raise CompanyNotFoundError(company_id)
        db.commit()

    def get_metrics(self, *, db: Session) -> CatalogMetrics:
        search_logs = SearchLogRepository(db)
        companies = CompanyRepository(db)
        total_searches = search_logs.count()
        successful = search_logs.count(success=True)
        return CatalogMetrics(
            total_searches=total_searches,
            search_success_rate=_success_rate(successful, total_searches),
            total_downloads=companies.total_downloads(),
            total_companies=companies.count(),
        )
