"""
app/domain/brand.py

BrandRecord, the normalized unit produced by the logo resolution pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from db.models.company import Company


class BrandSource:
    DB = "DB"
    BRANDFETCH = "Brandfetch"
    APP_STORE = "AppStore"
    CLEARBIT = "Clearbit"
    GOOGLE = "Google"
    CURATED = "Curated"
    FALLBACK = "Fallback"


class BrandType:
    LOGO = "logo"
    FAVICON = "favicon"


APP_STORE_DOMAIN = "App Store"

# Lowercased domains that cannot identify a brand on their own; such records dedup by id.
NON_CANONICAL_DOMAINS = frozenset({APP_STORE_DOMAIN.lower(), ""})

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
DOMAIN_PATTERN = re.compile(rf"^{_LABEL}(?:\.{_LABEL})*\.[A-Za-z]{{2,}}$")


@dataclass(frozen=True)
class BrandRecord:
    """
    One brand/logo result.

    `id` is the primary key for persisted companies and a provider-prefixed
    string for transient ones.
    """

    id: int | str
    name: str
    domain: str
    logo_url: str | None
    source: str
    type: str = BrandType.LOGO
    description: str | None = None
    download_count: int = 0
    is_external: bool = True
    resolutions: dict[str, str] | None = field(default=None, compare=False)

    @property
    def dedup_key(self) -> str:
        domain = (self.domain or "").strip().lower()
        if domain in NON_CANONICAL_DOMAINS:
            return f"id:{self.id}"
        return domain

    @classmethod
    def from_company(cls, company: Company) -> "BrandRecord":
        return cls(
            id=company.id,
            name=company.name,
            domain=company.domain,
            logo_url=company.logo_url or None,
            source=BrandSource.DB,
            type=BrandType.LOGO,
            description=company.description,
            download_count=company.download_count or 0,
            is_external=False,
        )


def looks_like_domain(value: str) -> bool:
    return bool(DOMAIN_PATTERN.match(value.strip()))


def name_from_domain(domain: str) -> str:
    """
    Display name from the second-to-last label: `example.com` -> `Example`.
    """

    parts = domain.strip().split(".")
    if len(parts) < 2:
        return domain
    label = parts[-2]
    return label[:1].upper() + label[1:]
