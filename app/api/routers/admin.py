"""
app/api/routers/admin.py

Admin curation endpoints (HTTP Basic protected).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, require_admin
from app.schemas.admin import (
    AdminCompanyResponse,
    ChangeLogListResponse,
    ChangeLogResponse,
    CompanyPageResponse,
    CompanyUpdateRequest,
    PaginationResponse,
)
from app.schemas.brand import SuccessResponse
from app.services.admin_service import AdminService, CompanyUpdate
from db.repositories.errors import CompanyNotFoundError, DomainConflictError

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service() -> AdminService:
    return AdminService()


@router.get("/companies", response_model=CompanyPageResponse)
def list_companies(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: str = Query(default=""),
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
    _admin: str = Depends(require_admin),
) -> CompanyPageResponse:
    result = admin_service.list_companies(db=db, page=page, limit=limit, search=search)
    return CompanyPageResponse(
        companies=[AdminCompanyResponse.model_validate(company) for company in result.companies],
        pagination=PaginationResponse(total=result.total, pages=result.pages, current=result.current),
    )


@router.put("/companies/{company_id}", response_model=AdminCompanyResponse)
def update_company(
    company_id: int,
    body: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
    admin_username: str = Depends(require_admin),
) -> AdminCompanyResponse:
    """
    Update a company (including its affiliate link) and audit the change.
    """

    try:
        company = admin_service.update_company(
            db=db,
            company_id=company_id,
            changes=CompanyUpdate(
                name=body.name,
                domain=body.domain,
                logo_url=body.logo_url,
                description=body.description,
                category=body.category,
                affiliate_url=body.affiliate_url,
            ),
            admin_username=admin_username,
        )
    except CompanyNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DomainConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return AdminCompanyResponse.model_validate(company)


@router.delete("/companies/{company_id}", response_model=SuccessResponse)
def delete_company(
    company_id: int,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
    admin_username: str = Depends(require_admin),
) -> SuccessResponse:
    try:
        admin_service.delete_company(db=db, company_id=company_id, admin_username=admin_username)
    except CompanyNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return SuccessResponse()


@router.get("/history", response_model=ChangeLogListResponse)
def list_history(
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
    _admin: str = Depends(require_admin),
) -> ChangeLogListResponse:
    return ChangeLogListResponse(
        logs=[ChangeLogResponse.model_validate(entry) for entry in admin_service.list_history(db=db)]
    )
