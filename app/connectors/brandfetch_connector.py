"""
app/connectors/brandfetch_connector.py

Brandfetch brand search provider (highest visual quality source).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from app.config import BrandfetchSettings, ExternalHTTPSettings
from app.connectors.base import BaseProvider, ConnectorRequestError
from app.connectors.favicon import clearbit_logo_url
from app.domain.brand import BrandRecord, BrandSource, BrandType


class BrandfetchProvider(BaseProvider):
    def __init__(
        self,
        *,
        settings: BrandfetchSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source=BrandSource.BRANDFETCH, http_settings=http_settings, session=session)
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return self._settings.enabled and bool(self._settings.api_key)

    def fetch_brands(self, query: str) -> list[BrandRecord]:
        payload = self._request_json(
            method="GET",
            url=f"{self._settings.base_url.rstrip('/')}/v2/search/{quote(query, safe='')}",
            headers={"Authorization": f"Bearer {self._settings.api_key}"},
        )
        if not isinstance(payload, list):
            raise ConnectorRequestError(f"{self.source}: expected a JSON list of brands.")

        records: list[BrandRecord] = []
        for item in payload:
            record = self._normalize_item(item)
            if record is not None:
                records.append(record)
        return records

    def _normalize_item(self, item: Any) -> BrandRecord | None:
        if not isinstance(item, dict):
            return None

        name = (item.get("name") or "").strip()
        domain = (item.get("domain") or "").strip().lower()
        if not name or not domain:
            return None

        brand_id = item.get("brandId") or f"brandfetch-{domain}"
        icon = (item.get("icon") or "").strip()
        logo_url = icon or clearbit_logo_url(domain)
        resolutions = {"Original": logo_url}
        if icon:
            resolutions["Clearbit"] = clearbit_logo_url(domain)

        return BrandRecord(
            id=brand_id,
            name=name,
            domain=domain,
            logo_url=logo_url,
            source=self.source,
            type=BrandType.LOGO,
            description=(item.get("description") or "").strip() or f"Logo of {name}",
            resolutions=resolutions,
        )
