"""
app/connectors/app_store_connector.py

iTunes Search API provider for app/software icons.
"""

from __future__ import annotations

from typing import Any

import requests

from app.config import AppStoreSettings, ExternalHTTPSettings
from app.connectors.base import BaseProvider, ConnectorRequestError
from app.domain.brand import APP_STORE_DOMAIN, BrandRecord, BrandSource, BrandType

DESCRIPTION_PREVIEW_CHARS = 100
_ARTWORK_FIELDS = (
    ("512x512", "artworkUrl512"),
    ("100x100", "artworkUrl100"),
    ("60x60", "artworkUrl60"),
)


class AppStoreProvider(BaseProvider):
    """
    Searches App Store software; results have no web domain, so they are
    tagged with the "App Store" sentinel and deduplicate by id.
    """

    def __init__(
        self,
        *,
        settings: AppStoreSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source=BrandSource.APP_STORE, http_settings=http_settings, session=session)
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def fetch_brands(self, query: str) -> list[BrandRecord]:
        payload = self._request_json(
            method="GET",
            url=f"{self._settings.base_url.rstrip('/')}/search",
            params={
                "term": query,
                "entity": "software",
                "limit": self._settings.limit,
                "country": self._settings.country,
            },
        )
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise ConnectorRequestError(f"{self.source}: payload has no results list.")

        records: list[BrandRecord] = []
        for item in results:
            record = self._normalize_item(item)
            if record is not None:
                records.append(record)
        return records

    def _normalize_item(self, item: Any) -> BrandRecord | None:
        if not isinstance(item, dict):
            return None

        track_id = item.get("trackId")
        name = (item.get("trackName") or "").strip()
        resolutions = {
            label: item[key]
            for label, key in _ARTWORK_FIELDS
            if isinstance(item.get(key), str) and item[key]
        }
        if track_id is None or not name or not resolutions:
            return None

        return BrandRecord(
            id=f"appstore-{track_id}",
            name=name,
            domain=APP_STORE_DOMAIN,
            logo_url=resolutions.get("512x512") or resolutions.get("100x100") or resolutions.get("60x60"),
            source=self.source,
            type=BrandType.LOGO,
            description=_preview(item.get("description")),
            resolutions=resolutions,
        )


def _preview(description: Any) -> str | None:
    if not isinstance(description, str) or not description.strip():
        return None
    text = description.strip()
    if len(text) <= DESCRIPTION_PREVIEW_CHARS:
        return text
    return text[:DESCRIPTION_PREVIEW_CHARS] + "..."
