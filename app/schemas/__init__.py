"""
app/schemas package marker.
"""

from app.schemas.admin import (
    AdminCompanyResponse,
    ChangeLogListResponse,
    ChangeLogResponse,
    CompanyPageResponse,
    CompanyUpdateRequest,
    PaginationResponse,
)
from app.schemas.brand import (
    BrandRecordResponse,
    CompanyRegistrationRequest,
    MetricsResponse,
    SuccessResponse,
)
from app.schemas.catalog import CategorySummaryResponse, LogoDetailResponse, RelatedCompanyResponse

__all__ = [
    "AdminCompanyResponse",
    "BrandRecordResponse",
    "CategorySummaryResponse",
    "ChangeLogListResponse",
    "ChangeLogResponse",
    "CompanyPageResponse",
    "CompanyRegistrationRequest",
    "CompanyUpdateRequest",
    "LogoDetailResponse",
    "MetricsResponse",
    "PaginationResponse",
    "RelatedCompanyResponse",
    "SuccessResponse",
]
