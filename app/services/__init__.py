"""
app/services package marker.
"""

from app.services.admin_service import AdminService, CompanyPage, CompanyUpdate
from app.services.background import FastAPIBackgroundTaskExecutor, TaskExecutor
from app.services.brand_search_service import BrandSearchService, build_domain_fallback
from app.services.company_service import CatalogMetrics, CompanyService
from app.services.download_proxy_service import (
    BlockedHostError,
    DownloadProxyError,
    DownloadProxyService,
    ProxiedImage,
)

__all__ = [
    "AdminService",
    "BlockedHostError",
    "BrandSearchService",
    "CatalogMetrics",
    "CompanyPage",
    "CompanyService",
    "CompanyUpdate",
    "DownloadProxyError",
    "DownloadProxyService",
    "FastAPIBackgroundTaskExecutor",
    "ProxiedImage",
    "TaskExecutor",
    "build_domain_fallback",
]
