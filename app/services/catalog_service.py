"""
app/services/catalog_service.py

Curated catalog formatting and lookups (categories, logo detail pages).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from app.catalog.curated import (
    CATEGORY_META,
    CURATED_CATEGORIES,
    CuratedCompany,
    find_by_slug,
    related_companies,
)
from app.connectors.favicon import (
    clearbit_logo_resolutions,
    clearbit_logo_url,
    google_favicon_url,
)
from app.domain.brand import BrandRecord, BrandSource, BrandType

CURATED_TOP_DOWNLOADS = 1000


@dataclass(frozen=True)
class CategorySummary:
    key: str
    title: str
    description: str
    logo_count: int


@dataclass(frozen=True)
class LogoDetail:
    slug: str
    name: str
    domain: str
    category: str
    logo_url: str
    favicon_url: str
    resolutions: dict[str, str]
    related: list[CuratedCompany]


def format_curated(companies: Sequence[CuratedCompany]) -> list[BrandRecord]:
    """
    Curated companies as BrandRecords, list order kept and encoded as a
    descending synthetic download count.
    """

    return [
        BrandRecord(
            id=f"curated-{company.domain}",
            name=company.name,
            domain=company.domain,
            logo_url=clearbit_logo_url(company.domain),
            source=BrandSource.CURATED,
            type=BrandType.LOGO,
            description=f"Official logo of {company.name}",
            download_count=max(0, CURATED_TOP_DOWNLOADS - index),
            is_external=True,
            resolutions=clearbit_logo_resolutions(company.domain),
        )
        for index, company in enumerate(companies)
    ]


def list_categories() -> list[CategorySummary]:
    return [
        CategorySummary(
            key=key,
            title=CATEGORY_META[key].title,
            description=CATEGORY_META[key].description,
            logo_count=len(companies),
        )
        for key, companies in CURATED_CATEGORIES.items()
    ]


def get_logo_detail(slug: str) -> LogoDetail | None:
    found = find_by_slug(slug)
    if found is None:
        return None

    company, category = found
    return LogoDetail(
        slug=slug.strip().lower(),
        name=company.name,
        domain=company.domain,
        category=category,
        logo_url=clearbit_logo_url(company.domain),
        favicon_url=google_favicon_url(company.domain),
        resolutions=clearbit_logo_resolutions(company.domain),
        related=related_companies(category, company.domain),
    )
