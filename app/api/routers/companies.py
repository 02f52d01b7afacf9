"""
app/api/routers/companies.py

Search, registration-on-interaction and download counter endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, get_search_service
from app.schemas.brand import BrandRecordResponse, CompanyRegistrationRequest, SuccessResponse
from app.services.background import FastAPIBackgroundTaskExecutor
from app.services.brand_search_service import BrandSearchService
from app.services.company_service import CompanyService
from db.repositories.errors import CompanyNotFoundError

router = APIRouter(prefix="/companies", tags=["companies"])


def get_company_service() -> CompanyService:
    return CompanyService()


@router.get("", response_model=list[BrandRecordResponse])
def search_companies(
    background_tasks: BackgroundTasks,
    category: str | None = Query(default=None, description="Curated category key"),
    query: str | None = Query(default=None, description="Free-text search"),
    q: str | None = Query(default=None, description="Alias of query"),
    search_service: BrandSearchService = Depends(get_search_service),
) -> list[BrandRecordResponse]:
    """
    Curated category list, default top list, or merged multi-source search.
    """

    records = search_service.search(
        tasks=FastAPIBackgroundTaskExecutor(background_tasks),
        category=category,
        query=query if query is not None else q,
    )
    return [BrandRecordResponse.from_record(record) for record in records]


@router.post("", response_model=BrandRecordResponse)
def register_company(
    body: CompanyRegistrationRequest,
    db: Session = Depends(get_db),
    company_service: CompanyService = Depends(get_company_service),
) -> BrandRecordResponse:
    """
    Save an external result the user interacted with; idempotent per domain.
    """

    try:
        record = company_service.register(
            db=db,
            name=body.name,
            domain=body.domain,
            logo_url=body.logo_url,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return BrandRecordResponse.from_record(record)


@router.post("/{company_id}/download", response_model=SuccessResponse)
def record_download(
    company_id: int,
    db: Session = Depends(get_db),
    company_service: CompanyService = Depends(get_company_service),
) -> SuccessResponse:
    try:
        company_service.record_download(db=db, company_id=company_id)
    except CompanyNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return SuccessResponse()
