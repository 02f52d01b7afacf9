"""
app/schemas/brand.py

Request/response schemas for search, registration and download endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.brand import BrandRecord


class CamelModel(BaseModel):
    """
    Serializes with camelCase keys and accepts both spellings on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BrandRecordResponse(CamelModel):
    id: int | str
    name: str
    domain: str
    logo_url: str | None = None
    description: str | None = None
    download_count: int = Field(default=0, ge=0)
    is_external: bool
    source: str
    type: str
    resolutions: dict[str, str] | None = None

    @classmethod
    def from_record(cls, record: BrandRecord) -> "BrandRecordResponse":
        return cls(
            id=record.id,
            name=record.name,
            domain=record.domain,
            logo_url=record.logo_url,
            description=record.description,
            download_count=record.download_count,
            is_external=record.is_external,
            source=record.source,
            type=record.type,
            resolutions=record.resolutions,
        )


class CompanyRegistrationRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field(..., min_length=1, max_length=255)
    logo_url: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class SuccessResponse(BaseModel):
    success: bool = True


class MetricsResponse(CamelModel):
    total_searches: int = Field(..., ge=0)
    search_success_rate: int = Field(..., ge=0, le=100)
    total_downloads: int = Field(..., ge=0)
    total_companies: int = Field(..., ge=0)
