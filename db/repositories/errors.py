"""
Repository-layer exceptions for catalog persistence flows.
"""

from __future__ import annotations


class CatalogRepositoryError(Exception):
    """Base exception for catalog repository failures."""


class CompanyNotFoundError(CatalogRepositoryError):
    """Raised when a referenced company does not exist."""

    def __init__(self, company_id: int) -> None:
        super().__init__(f"Company {company_id} not found.")
        self.company_id = company_id


class DomainConflictError(CatalogRepositoryError):
    """Raised when a domain is already owned by a different company."""

    def __init__(self, domain: str) -> None:
        super().__init__(f"Domain {domain!r} already exists.")
        self.domain = domain
