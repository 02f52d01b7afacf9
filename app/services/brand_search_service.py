"""
app/services/brand_search_service.py

Logo resolution pipeline: query routing, multi-source fan-out, merge and
search bookkeeping.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.catalog.curated import TOP_COMPANIES, get_category
from app.connectors.base import BaseProvider
from app.connectors.favicon import google_favicon_resolutions, google_favicon_url
from app.domain.brand import BrandRecord, BrandSource, BrandType, looks_like_domain, name_from_domain
from app.logging_utils import log_event
from app.services.background import TaskExecutor
from app.services.catalog_service import format_curated
from app.services.merge import merge_brand_records, provider_rank
from db.repositories.company_repository import CompanyRepository
from db.repositories.search_log_repository import SearchLogRepository

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class BrandSearchService:
    """
    Produces ranked, deduplicated BrandRecords for a category or a query.

    Owns the providers' HTTP sessions; call `close()` at shutdown.
    """

    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        providers: Sequence[BaseProvider],
        page_size: int = 20,
        timeout_seconds: float = 3.0,
    ) -> None:
        self._session_factory = session_factory
        self._providers = sorted(providers, key=lambda provider: provider_rank(provider.source))
        self._page_size = max(1, page_size)
        self._timeout_seconds = timeout_seconds

    @property
    def providers(self) -> list[BaseProvider]:
        return list(self._providers)

    def search(
        self,
        *,
        tasks: TaskExecutor,
        category: str | None = None,
        query: str | None = None,
    ) -> list[BrandRecord]:
        """
        Route a request to the curated list, the default listing or the resolver.
        """

        curated = get_category(category)
        if curated is not None:
            return format_curated(curated)

        normalized = (query or "").strip()
        if not normalized:
            return self.list_default()

        return self.resolve(normalized, tasks=tasks)

    def list_default(self) -> list[BrandRecord]:
        """
        Most downloaded persisted companies; curated top list when the store is down.
        """

        try:
            with self._session_factory() as db:
                companies = CompanyRepository(db).list_top_downloaded(limit=self._page_size)
                return [BrandRecord.from_company(company) for company in companies]
        except SQLAlchemyError as exc:
            logger.warning("Default listing failed, serving curated list error=%s", exc)
            return format_curated(TOP_COMPANIES[: self._page_size])

    def resolve(self, query: str, *, tasks: TaskExecutor) -> list[BrandRecord]:
        """
        Merge store and provider results for a non-empty query.

        Providers run on a per-request executor while the store lookup runs
        on the calling thread, so a slow provider from one request never
        delays another request. Never raises for store or provider failures;
        the worst outcome is an empty list.
        """

        started = time.monotonic()
        deadline = started + self._timeout_seconds
        enabled = [provider for provider in self._providers if provider.enabled]
        pool = ThreadPoolExecutor(max_workers=max(1, len(enabled)), thread_name_prefix="brand-search")
        try:
            provider_futures: dict[str, Future[list[BrandRecord]]] = {
                provider.source: pool.submit(provider.search, query) for provider in enabled
            }

            local, store_operational = self._lookup_store_safely(query)

            if provider_futures:
                wait(provider_futures.values(), timeout=max(0.0, deadline - time.monotonic()))
            provider_results = {
                source: self._collect_provider(source, future, query)
                for source, future in provider_futures.items()
            }
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        fallback: list[BrandRecord] = []
        if not local and not any(provider_results.values()) and looks_like_domain(query):
            fallback.append(build_domain_fallback(query))

        results = merge_brand_records(local=local, provider_results=provider_results, fallback=fallback)

        if store_operational:
            tasks.submit(self._log_search, query, bool(results))
            local_ids = [
                record.id
                for record in results
                if record.source == BrandSource.DB and isinstance(record.id, int)
            ]
            if local_ids:
                tasks.submit(self._increment_search_counts, local_ids)

        log_event(
            logger,
            logging.INFO,
            "search_resolved",
            query=query,
            local=len(local),
            providers={source: len(records) for source, records in provider_results.items()},
            fallback=bool(fallback),
            results=len(results),
            store_operational=store_operational,
            elapsed_ms=round((time.monotonic() - started) * 1000),
        )
        return results

    def close(self) -> None:
        for provider in self._providers:
            provider.close()

    def _lookup_store_safely(self, query: str) -> tuple[list[BrandRecord], bool]:
        try:
            return self._lookup_store(query), True
        except SQLAlchemyError as exc:
            log_event(logger, logging.WARNING, "store_lookup_failed", query=query, error=str(exc))
            return [], False

    def _lookup_store(self, query: str) -> list[BrandRecord]:
        with self._session_factory() as db:
            companies = CompanyRepository(db).search(query, limit=self._page_size)
            return [BrandRecord.from_company(company) for company in companies]

    def _collect_provider(
        self,
        source: str,
        future: Future[list[BrandRecord]],
        query: str,
    ) -> list[BrandRecord]:
        # A cancelled future is also done; exception() would raise CancelledError.
        if future.cancelled() or not future.done():
            log_event(logger, logging.WARNING, "provider_timeout", source=source, query=query)
            return []
        exc = future.exception()
        if exc is not None:
            log_event(logger, logging.WARNING, "provider_failed", source=source, query=query, error=str(exc))
            return []
        return future.result()

    def _log_search(self, query: str, success: bool) -> None:
        try:
            with self._session_factory() as db, db.begin():
                SearchLogRepository(db).append(query=query, success=success)
        except SQLAlchemyError as exc:
            logger.warning("Failed to log search query=%r error=%s", query, exc)

    def _increment_search_counts(self, company_ids: list[int]) -> None:
        try:
            with self._session_factory() as db, db.begin():
                CompanyRepository(db).increment_search_counts(company_ids)
        except SQLAlchemyError as exc:
            logger.warning("Failed to update search counts ids=%s error=%s", company_ids, exc)


def build_domain_fallback(domain: str) -> BrandRecord:
    """
    Last-resort favicon record for a query that looks like a domain.
    """

    name = name_from_domain(domain)
    return BrandRecord(
        id=f"auto-{domain}",
        name=name,
        domain=domain,
        logo_url=google_favicon_url(domain),
        source=BrandSource.GOOGLE,
        type=BrandType.FAVICON,
        description=f"Official logo of {name}",
        resolutions=google_favicon_resolutions(domain),
    )
