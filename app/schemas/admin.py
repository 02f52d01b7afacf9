"""
app/schemas/admin.py

Schemas for the admin curation API.
"""

from __future__ import annotations

from datetime import datetime
from urllib.parse import urlparse

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.brand import CamelModel


def _validate_optional_url(value: str | None) -> str | None:
    if value is None or value == "":
        return value
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("must be an http(s) URL or empty")
    return value


class CompanyUpdateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field(..., min_length=1, max_length=255)
    logo_url: str | None = None
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    affiliate_url: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @field_validator("logo_url", "affiliate_url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        return _validate_optional_url(value)


class AdminCompanyResponse(CamelModel):
    id: int
    name: str
    domain: str
    logo_url: str | None = None
    description: str | None = None
    category: str | None = None
    sector: str | None = None
    industry: str | None = None
    affiliate_url: str | None = None
    download_count: int
    search_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PaginationResponse(CamelModel):
    total: int
    pages: int
    current: int


class CompanyPageResponse(CamelModel):
    companies: list[AdminCompanyResponse] = Field(default_factory=list)
    pagination: PaginationResponse


class ChangeLogResponse(CamelModel):
    id: int
    action: str
    entity_type: str
    entity_id: str
    details: str | None = None
    admin_username: str
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ChangeLogListResponse(CamelModel):
    logs: list[ChangeLogResponse] = Field(default_factory=list)
