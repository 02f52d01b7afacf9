"""
app/connectors/base.py

Base provider abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import requests

from app.config import ExternalHTTPSettings
from app.domain.brand import BrandRecord
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class ConnectorRequestError(RuntimeError):
    """
    Raised when a provider request fails or returns an unusable payload.
    """


class BaseProvider(ABC):
    """
    Adapter for one external brand lookup service.

    Subclasses implement `fetch_brands`, which may raise. `search` is the
    adapter boundary: it never raises and turns every failure into an empty
    contribution.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    def fetch_brands(self, query: str) -> list[BrandRecord]:
        """
        Query the provider and map its items into BrandRecords.
        """

    def search(self, query: str) -> list[BrandRecord]:
        if not self.enabled:
            return []

        started = time.monotonic()
        try:
            records = self.fetch_brands(query)
        except ConnectorRequestError as exc:
            log_event(
                logger,
                logging.WARNING,
                "provider_failed",
                source=self.source,
                query=query,
                error=str(exc),
            )
            return []
        except Exception as exc:
            logger.exception("Unhandled provider failure source=%s error=%s", self.source, exc)
            return []

        log_event(
            logger,
            logging.DEBUG,
            "provider_completed",
            source=self.source,
            query=query,
            results=len(records),
            elapsed_ms=round((time.monotonic() - started) * 1000),
        )
        return records

    def close(self) -> None:
        self._session.close()

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Execute an HTTP request and return parsed JSON.
        """

        response = self._request(method=method, url=url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise ConnectorRequestError(f"{self.source}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Execute an HTTP request with a bounded timeout and optional backoff retries.
        """

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    headers=headers,
                    timeout=self._timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    raise ConnectorRequestError(
                        f"{self.source}: request failed with status {status_code}."
                    ) from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Provider request retry source=%s attempt=%s/%s wait_seconds=%.2f url=%s",
                self.source,
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        raise ConnectorRequestError(f"{self.source}: request failed ({last_error}).") from last_error
