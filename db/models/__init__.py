"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.change_log import ChangeLog, ChangeLogAction
from db.models.company import Company
from db.models.search_log import SearchLog

__all__ = [
    "ChangeLog",
    "ChangeLogAction",
    "Company",
    "SearchLog",
]
