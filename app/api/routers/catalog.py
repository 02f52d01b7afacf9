"""
app/api/routers/catalog.py

Curated category listing and logo detail lookups.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.catalog.curated import domain_slug
from app.connectors.favicon import clearbit_logo_url
from app.schemas.catalog import CategorySummaryResponse, LogoDetailResponse, RelatedCompanyResponse
from app.services.catalog_service import get_logo_detail, list_categories

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=list[CategorySummaryResponse])
def get_categories() -> list[CategorySummaryResponse]:
    return [
        CategorySummaryResponse(
            key=summary.key,
            title=summary.title,
            description=summary.description,
            logo_count=summary.logo_count,
        )
        for summary in list_categories()
    ]


@router.get("/logos/{slug}", response_model=LogoDetailResponse)
def get_logo(slug: str) -> LogoDetailResponse:
    """
    Curated logo detail by slug (domain with dots replaced by hyphens).
    """

    detail = get_logo_detail(slug)
    if detail is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Logo {slug!r} not found.",
        )

    return LogoDetailResponse(
        slug=detail.slug,
        name=detail.name,
        domain=detail.domain,
        category=detail.category,
        logo_url=detail.logo_url,
        favicon_url=detail.favicon_url,
        resolutions=detail.resolutions,
        related=[
            RelatedCompanyResponse(
                name=company.name,
                domain=company.domain,
                slug=domain_slug(company.domain),
                logo_url=clearbit_logo_url(company.domain),
            )
            for company in detail.related
        ],
    )
