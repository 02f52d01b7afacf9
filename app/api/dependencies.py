"""
app/api/dependencies.py

Shared FastAPI dependencies: store sessions, services and admin auth.
"""

from __future__ import annotations

import secrets
from collections.abc import Generator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from app.config import AdminSettings, get_admin_settings
from app.services.brand_search_service import BrandSearchService
from db.session import Database

_basic_auth = HTTPBasic(realm="LogoList admin")


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """
    Yield one request-scoped session and guarantee cleanup.
    """

    yield from database.sessions()


def get_search_service(request: Request) -> BrandSearchService:
    return request.app.state.search_service


def require_admin(
    credentials: HTTPBasicCredentials = Depends(_basic_auth),
    settings: AdminSettings = Depends(get_admin_settings),
) -> str:
    """
    Validate HTTP Basic credentials and return the admin username.
    """

    if not settings.configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin credentials are not configured.",
        )

    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        (settings.username or "").encode("utf-8"),
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        (settings.password or "").encode("utf-8"),
    )
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
