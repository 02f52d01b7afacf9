"""
app/catalog package marker.
"""

from app.catalog.curated import (
    CATEGORY_META,
    CURATED_CATEGORIES,
    TOP_COMPANIES,
    CuratedCompany,
    domain_slug,
    find_by_slug,
    get_category,
    related_companies,
)

__all__ = [
    "CATEGORY_META",
    "CURATED_CATEGORIES",
    "TOP_COMPANIES",
    "CuratedCompany",
    "domain_slug",
    "find_by_slug",
    "get_category",
    "related_companies",
]
