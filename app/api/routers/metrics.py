"""
app/api/routers/metrics.py

Aggregate catalog usage metrics.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.api.routers.companies import get_company_service
from app.schemas.brand import MetricsResponse
from app.services.company_service import CompanyService

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(
    db: Session = Depends(get_db),
    company_service: CompanyService = Depends(get_company_service),
) -> MetricsResponse:
    metrics = company_service.get_metrics(db=db)
    return MetricsResponse(
        total_searches=metrics.total_searches,
        search_success_rate=metrics.search_success_rate,
        total_downloads=metrics.total_downloads,
        total_companies=metrics.total_companies,
    )
