"""
Repository layer exports.
"""

from db.repositories.change_log_repository import ChangeLogRepository
from db.repositories.company_repository import CompanyRepository
from db.repositories.errors import CatalogRepositoryError, CompanyNotFoundError, DomainConflictError
from db.repositories.search_log_repository import SearchLogRepository

__all__ = [
    "CatalogRepositoryError",
    "ChangeLogRepository",
    "CompanyNotFoundError",
    "CompanyRepository",
    "DomainConflictError",
    "SearchLogRepository",
]
