from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.logging_utils import configure_logging
from app.schemas.health import HealthResponse
from app.services.brand_search_service import BrandSearchService
from db.session import Database

logger = logging.getLogger(__name__)


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Raises RuntimeError listing every missing or inconsistent variable so the
    operator can fix all problems in one restart cycle.

    Rules:
    - A database URL must be configured (DATABASE_URL, CLOUD_DATABASE_URL or
      LOCAL_DATABASE_URL).
    - BRANDFETCH_API_KEY is required whenever BRANDFETCH_ENABLED is true.
    - ADMIN_USERNAME and ADMIN_PASSWORD must be set together.
    """

    from db.config import has_database_url, load_env_files

    load_env_files()

    errors: list[str] = []

    if not has_database_url():
        errors.append(
            "No database URL configured. Set DATABASE_URL, CLOUD_DATABASE_URL or LOCAL_DATABASE_URL."
        )

    brandfetch_enabled = os.getenv("BRANDFETCH_ENABLED", "").strip().lower() in {"1", "true", "yes", "on"}
    if brandfetch_enabled and not os.getenv("BRANDFETCH_API_KEY", "").strip():
        errors.append(
            "BRANDFETCH_API_KEY is not set but BRANDFETCH_ENABLED is true. "
            "Set BRANDFETCH_API_KEY or disable the provider with BRANDFETCH_ENABLED=false."
        )

    admin_username = os.getenv("ADMIN_USERNAME", "").strip()
    admin_password = os.getenv("ADMIN_PASSWORD", "").strip()
    if bool(admin_username) != bool(admin_password):
        errors.append("ADMIN_USERNAME and ADMIN_PASSWORD must be set together.")

    if errors:
        raise RuntimeError(
            "Startup validation failed, missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _check_schema(database: Database) -> None:
    """
    Abort startup when ORM tables are missing from a reachable database.

    Does NOT auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers all ORM models on Base.metadata
    from db.base import Base

    actual: set[str] = set(sa_inspect(database.engine).get_table_names())
    missing = set(Base.metadata.tables.keys()) - actual
    if missing:
        logger.critical(
            "Schema mismatch, %d table(s) absent from the database: %s. "
            "Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


def build_search_service(database: Database) -> BrandSearchService:
    """
    Wire provider adapters in their declared priority order.
    """

    from app.config import (
        get_app_store_settings,
        get_brandfetch_settings,
        get_catalog_settings,
        get_clearbit_settings,
        get_external_http_settings,
    )
    from app.connectors import AppStoreProvider, BrandfetchProvider, ClearbitProvider

    http_settings = get_external_http_settings()
    providers = [
        BrandfetchProvider(settings=get_brandfetch_settings(), http_settings=http_settings),
        AppStoreProvider(settings=get_app_store_settings(), http_settings=http_settings),
        ClearbitProvider(settings=get_clearbit_settings(), http_settings=http_settings),
    ]
    return BrandSearchService(
        session_factory=database.session_factory,
        providers=providers,
        page_size=get_catalog_settings().page_size,
        timeout_seconds=http_settings.timeout_seconds,
    )


def create_app(
    *,
    database: Database | None = None,
    search_service: BrandSearchService | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    `database` and `search_service` are built from the environment at
    startup unless supplied.
    """

    _validate_env()
    configure_logging()

    @asynccontextmanager
    async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
        """Open the store and provider pool on boot; release both on exit."""
        store = database or Database.from_env()
        if store.ping():
            _check_schema(store)
            logger.info("Database connectivity confirmed")
        else:
            logger.warning("Database unreachable at startup; search will run on external providers only")

        service = search_service or build_search_service(store)
        application.state.database = store
        application.state.search_service = service
        logger.info(
            "Search service started providers=%s",
            [provider.source for provider in service.providers if provider.enabled],
        )
        try:
            yield
        finally:
            service.close()
            store.dispose()
            logger.info("Search service and database shut down")

    application = FastAPI(
        title="LogoList API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        admin_router,
        catalog_router,
        companies_router,
        download_proxy_router,
        metrics_router,
    )

    application.include_router(companies_router)
    application.include_router(metrics_router)
    application.include_router(catalog_router)
    application.include_router(download_proxy_router)
    application.include_router(admin_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck(request: Request) -> HealthResponse:
        store: Database = request.app.state.database
        service: BrandSearchService = request.app.state.search_service
        return HealthResponse(
            status="ok",
            database=store.ping(),
            providers=[provider.source for provider in service.providers if provider.enabled],
        )

    return application


app = create_app()
