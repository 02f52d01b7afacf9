"""
app/schemas/catalog.py

Response schemas for curated category and logo detail lookups.
"""

from __future__ import annotations

from app.schemas.brand import CamelModel


class CategorySummaryResponse(CamelModel):
    key: str
    title: str
    description: str
    logo_count: int


class RelatedCompanyResponse(CamelModel):
    name: str
    domain: str
    slug: str
    logo_url: str


class LogoDetailResponse(CamelModel):
    slug: str
    name: str
    domain: str
    category: str
    logo_url: str
    favicon_url: str
    resolutions: dict[str, str]
    related: list[RelatedCompanyResponse]
