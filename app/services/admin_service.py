"""
app/services/admin_service.py

Admin curation of persisted companies with an audit trail.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from db.models.change_log import ChangeLog, ChangeLogAction
from db.models.company import Company
from db.repositories.change_log_repository import ChangeLogRepository
from db.repositories.company_repository import CompanyRepository
from db.repositories.errors import CompanyNotFoundError, DomainConflictError

logger = logging.getLogger(__name__)

COMPANY_ENTITY = "Company"
HISTORY_LIMIT = 50


@dataclass(frozen=True)
class CompanyPage:
    companies: list[Company]
    total: int
    pages: int
    current: int


@dataclass(frozen=True)
class CompanyUpdate:
    name: str
    domain: str
    logo_url: str | None = None
    description: str | None = None
    category: str | None = None
    affiliate_url: str | None = None


class AdminService:
    def list_companies(
        self,
        *,
        db: Session,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
    ) -> CompanyPage:
        page = max(1, page)
        limit = max(1, limit)
        companies, total = CompanyRepository(db).list_page(
            offset=(page - 1) * limit,
            limit=limit,
            search=(search or "").strip() or None,
        )
        return CompanyPage(
            companies=companies,
            total=total,
            pages=math.ceil(total / limit),
            current=page,
        )

    def update_company(
        self,
        *,
        db: Session,
        company_id: int,
        changes: CompanyUpdate,
        admin_username: str,
    ) -> Company:
        """
        Apply an admin edit and record it in the change log in one transaction.

        Empty optional strings clear the column.
        """

        companies = CompanyRepository(db)
        company = companies.get(company_id)
        if company is None:
            raise CompanyNotFoundError(company_id)

        domain = changes.domain.strip().lower()
        if companies.domain_taken_by_other(domain=domain, company_id=company_id):
            raise DomainConflictError(domain)

        company.name = changes.name.strip()
        company.domain = domain
        company.logo_url = changes.logo_url or None
        company.description = changes.description or None
        company.category = changes.category or None
        company.affiliate_url = changes.affiliate_url or None

        ChangeLogRepository(db).record(
            action=ChangeLogAction.UPDATE,
            entity_type=COMPANY_ENTITY,
            entity_id=str(company_id),
            admin_username=admin_username,
            details=f"Updated company {company.name}",
        )
        db.commit()
        db.refresh(company)
        logger.info("Company updated id=%s admin=%s", company_id, admin_username)
        return company

    def delete_company(self, *, db: Session, company_id: int, admin_username: str) -> None:
        companies = CompanyRepository(db)
        company = companies.get(company_id)
        if company is None:
            raise CompanyNotFoundError(company_id)

        companies.delete(company)
        ChangeLogRepository(db).record(
            action=ChangeLogAction.DELETE,
            entity_type=COMPANY_ENTITY,
            entity_id=str(company_id),
            admin_username=admin_username,
            details=f"Deleted company with ID {company_id}",
        )
        db.commit()
        logger.info("Company deleted id=%s admin=%s", company_id, admin_username)

    def list_history(self, *, db: Session, limit: int = HISTORY_LIMIT) -> list[ChangeLog]:
        return ChangeLogRepository(db).list_recent(limit=limit)
