"""
Test doubles shared across test modules.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from app.config import ExternalHTTPSettings
from app.connectors.base import BaseProvider
from app.domain.brand import BrandRecord, BrandSource, BrandType


class RecordingTaskExecutor:
    """
    Collects submitted background tasks; `run_all` executes them in order.
    """

    def __init__(self) -> None:
        self.tasks: list[tuple[Callable[..., None], tuple[Any, ...], dict[str, Any]]] = []

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        self.tasks.append((task, args, kwargs))

    def run_all(self) -> None:
        for task, args, kwargs in self.tasks:
            task(*args, **kwargs)
        self.tasks.clear()


class StubProvider(BaseProvider):
    """
    Provider returning canned records, or raising/sleeping on demand.
    """

    def __init__(
        self,
        source: str,
        records: list[BrandRecord] | None = None,
        *,
        error: Exception | None = None,
        delay_seconds: float = 0.0,
        enabled: bool = True,
    ) -> None:
        super().__init__(source=source, http_settings=ExternalHTTPSettings())
        self._records = records or []
        self._error = error
        self._delay_seconds = delay_seconds
        self._enabled = enabled
        self.queries: list[str] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    def fetch_brands(self, query: str) -> list[BrandRecord]:
        self.queries.append(query)
        if self._delay_seconds:
            time.sleep(self._delay_seconds)
        if self._error is not None:
            raise self._error
        return list(self._records)


def brand(
    record_id: int | str,
    domain: str,
    *,
    source: str = BrandSource.CLEARBIT,
    type: str = BrandType.LOGO,
    name: str | None = None,
) -> BrandRecord:
    return BrandRecord(
        id=record_id,
        name=name or domain.split(".")[0].title(),
        domain=domain,
        logo_url=f"https://img.example/{domain}.png",
        source=source,
        type=type,
        is_external=source != BrandSource.DB,
    )
