"""
app/domain package marker.
"""

from app.domain.brand import (
    APP_STORE_DOMAIN,
    BrandRecord,
    BrandSource,
    BrandType,
    looks_like_domain,
    name_from_domain,
)

__all__ = [
    "APP_STORE_DOMAIN",
    "BrandRecord",
    "BrandSource",
    "BrandType",
    "looks_like_domain",
    "name_from_domain",
]
