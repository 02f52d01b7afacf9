"""
app/connectors/clearbit_connector.py

Clearbit company autocomplete provider.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from app.config import ClearbitSettings, ExternalHTTPSettings
from app.connectors.base import BaseProvider, ConnectorRequestError
from app.connectors.favicon import clearbit_logo_resolutions, google_favicon_resolutions, google_favicon_url
from app.domain.brand import BrandRecord, BrandSource, BrandType

logger = logging.getLogger(__name__)


class ClearbitProvider(BaseProvider):
    """
    Suggests companies by name; items carry {name, domain, logo}.
    """

    def __init__(
        self,
        *,
        settings: ClearbitSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source=BrandSource.CLEARBIT, http_settings=http_settings, session=session)
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def fetch_brands(self, query: str) -> list[BrandRecord]:
        payload = self._request_json(
            method="GET",
            url=f"{self._settings.base_url.rstrip('/')}/v1/companies/suggest",
            params={"query": query},
        )
        if not isinstance(payload, list):
            raise ConnectorRequestError(f"{self.source}: expected a JSON list of suggestions.")

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
            logger.debug("Skipping Clearbit suggestion without name/domain item=%s", item)
            return None

        logo = (item.get("logo") or "").strip()
        if logo:
            logo_url = logo
            brand_type = BrandType.LOGO
            resolutions = clearbit_logo_resolutions(domain, self._settings.logo_base_url)
            resolutions["Original"] = logo
        else:
            logo_url = google_favicon_url(domain)
            brand_type = BrandType.FAVICON
            resolutions = google_favicon_resolutions(domain)

        return BrandRecord(
            id=f"ext-{domain}",
            name=name,
            domain=domain,
            logo_url=logo_url,
            source=self.source,
            type=brand_type,
            description=f"Official logo of {name}",
            resolutions=resolutions,
        )
