"""
app/api/routers package marker.
"""

from app.api.routers.admin import router as admin_router
from app.api.routers.catalog import router as catalog_router
from app.api.routers.companies import router as companies_router
from app.api.routers.download_proxy import router as download_proxy_router
from app.api.routers.metrics import router as metrics_router

__all__ = [
    "admin_router",
    "catalog_router",
    "companies_router",
    "download_proxy_router",
    "metrics_router",
]
