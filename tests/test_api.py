"""
tests/test_api.py

HTTP contract of the FastAPI application, wired to an in-memory store and
stub providers.
"""

from __future__ import annotations

from collections.abc import Generator, Iterator
from typing import Any

import pytest
import requests
from fastapi.testclient import TestClient

from app.api.routers.download_proxy import get_download_proxy_service
from app.config import AdminSettings, get_admin_settings
from app.domain.brand import BrandSource
from app.main import create_app
from app.services.brand_search_service import BrandSearchService
from app.services.download_proxy_service import (
    CHUNK_SIZE,
    DownloadProxyError,
    DownloadProxyService,
    is_public_address,
    resolve_host,
)
from db.session import Database
from tests.helpers import StubProvider, brand

ADMIN_AUTH = ("admin", "secret")


class FakeImageResponse:
    def __init__(
        self,
        *,
        status_code: int = 200,
        content: bytes = b"",
        content_type: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = {"content-type": content_type} if content_type else {}
        self.headers.update(headers or {})
        self.closed = False

    @property
    def is_redirect(self) -> bool:
        return self.status_code in {301, 302, 303, 307, 308} and "location" in self.headers

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeImageSession:
    def __init__(self, *outcomes: FakeImageResponse | Exception) -> None:
        self._outcomes = list(outcomes)
        self.requested: list[str] = []

    def get(self, url: str, **_kwargs: Any) -> FakeImageResponse:
        self.requested.append(url)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _public_resolver(hostname: str) -> list[str]:
    return ["93.184.216.34"]


@pytest.fixture()
def clearbit() -> StubProvider:
    return StubProvider(BrandSource.CLEARBIT, [brand("ext-acme.io", "acme.io", name="Acme")])


@pytest.fixture()
def client(database: Database, clearbit: StubProvider) -> Generator[TestClient, None, None]:
    service = BrandSearchService(
        session_factory=database.session_factory,
        providers=[clearbit],
        page_size=20,
        timeout_seconds=2.0,
    )
    app = create_app(database=database, search_service=service)
    app.dependency_overrides[get_admin_settings] = lambda: AdminSettings(username="admin", password="secret")
    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Search and registration
# ---------------------------------------------------------------------------


class TestCompaniesEndpoints:
    def test_category_listing_uses_camel_case(self, client: TestClient) -> None:
        response = client.get("/companies", params={"category": "ai"})

        assert response.status_code == 200
        body = response.json()
        assert len(body) > 0
        first = body[0]
        assert {"id", "name", "domain", "logoUrl", "downloadCount", "isExternal", "source", "type"} <= set(first)
        assert first["source"] == BrandSource.CURATED

    def test_query_merges_provider_results(self, client: TestClient, clearbit: StubProvider) -> None:
        response = client.get("/companies", params={"query": "acme"})

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == ["ext-acme.io"]
        assert clearbit.queries == ["acme"]

    def test_q_alias_and_search_logging(self, client: TestClient) -> None:
        client.get("/companies", params={"q": "acme"})

        metrics = client.get("/metrics").json()
        assert metrics["totalSearches"] == 1
        assert metrics["searchSuccessRate"] == 100

    def test_domain_query_falls_back_to_favicon(self, client: TestClient, clearbit: StubProvider) -> None:
        clearbit._records = []

        body = client.get("/companies", params={"query": "example.com"}).json()

        assert len(body) == 1
        assert body[0]["source"] == BrandSource.GOOGLE
        assert body[0]["type"] == "favicon"
        assert body[0]["name"] == "Example"

    def test_register_is_idempotent(self, client: TestClient) -> None:
        payload = {"name": "Acme", "domain": "acme.io", "logoUrl": "https://img/acme.png"}

        first = client.post("/companies", json=payload)
        second = client.post("/companies", json=payload)

        assert first.status_code == 200
        assert first.json()["isExternal"] is False
        assert first.json()["id"] == second.json()["id"]

    def test_register_requires_name_and_domain(self, client: TestClient) -> None:
        response = client.post("/companies", json={"name": " ", "domain": "acme.io"})

        assert response.status_code == 422

    def test_registered_company_shows_in_default_listing(self, client: TestClient) -> None:
        created = client.post("/companies", json={"name": "Acme", "domain": "acme.io"}).json()
        client.post(f"/companies/{created['id']}/download")

        body = client.get("/companies").json()

        assert body[0]["id"] == created["id"]
        assert body[0]["downloadCount"] == 1

    def test_download_unknown_company_is_404(self, client: TestClient) -> None:
        assert client.post("/companies/999/download").status_code == 404


# ---------------------------------------------------------------------------
# Catalog, metrics, health
# ---------------------------------------------------------------------------


class TestCatalogEndpoints:
    def test_categories(self, client: TestClient) -> None:
        body = client.get("/categories").json()

        keys = {item["key"] for item in body}
        assert {"ai", "saas", "fintech"} <= keys
        assert all(item["logoCount"] > 0 for item in body)

    def test_logo_detail(self, client: TestClient) -> None:
        response = client.get("/logos/hubspot-com")

        assert response.status_code == 200
        body = response.json()
        assert body["domain"] == "hubspot.com"
        assert body["faviconUrl"].startswith("https://")
        assert len(body["related"]) <= 8

    def test_logo_detail_not_found(self, client: TestClient) -> None:
        assert client.get("/logos/nope-invalid").status_code == 404

    def test_metrics_on_empty_store(self, client: TestClient) -> None:
        assert client.get("/metrics").json() == {
            "totalSearches": 0,
            "searchSuccessRate": 0,
            "totalDownloads": 0,
            "totalCompanies": 0,
        }

    def test_health(self, client: TestClient) -> None:
        body = client.get("/health").json()

        assert body == {"status": "ok", "database": True, "providers": [BrandSource.CLEARBIT]}


# ---------------------------------------------------------------------------
# Download proxy
# ---------------------------------------------------------------------------


class TestDownloadProxy:
    def _use_session(
        self,
        client: TestClient,
        session: FakeImageSession,
        *,
        host_resolver=_public_resolver,
        max_bytes: int = 1024,
    ) -> DownloadProxyService:
        service = DownloadProxyService(
            timeout_seconds=1.0,
            max_bytes=max_bytes,
            session=session,  # type: ignore[arg-type]
            host_resolver=host_resolver,
        )
        client.app.dependency_overrides[get_download_proxy_service] = lambda: service
        return service

    def test_missing_url_is_400(self, client: TestClient) -> None:
        assert client.get("/download-proxy").status_code == 400

    def test_non_http_url_is_400(self, client: TestClient) -> None:
        assert client.get("/download-proxy", params={"url": "file:///etc/passwd"}).status_code == 400

    def test_streams_image_as_attachment(self, client: TestClient) -> None:
        session = FakeImageSession(FakeImageResponse(content=b"\x89PNG", content_type="image/svg+xml"))
        self._use_session(client, session)

        response = client.get(
            "/download-proxy",
            params={"url": "https://img.example/logo.svg", "filename": "acme.svg"},
        )

        assert response.status_code == 200
        assert response.content == b"\x89PNG"
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.headers["content-disposition"] == 'attachment; filename="acme.svg"'
        assert session.requested == ["https://img.example/logo.svg"]

    def test_defaults_content_type_and_filename(self, client: TestClient) -> None:
        self._use_session(client, FakeImageSession(FakeImageResponse(content=b"data")))

        response = client.get("/download-proxy", params={"url": "https://img.example/x"})

        assert response.headers["content-type"].startswith("image/png")
        assert response.headers["content-disposition"] == 'attachment; filename="logo.png"'

    @pytest.mark.parametrize(
        "outcome",
        [FakeImageResponse(status_code=404), requests.ConnectionError("refused")],
    )
    def test_upstream_failure_is_502(self, client: TestClient, outcome: FakeImageResponse | Exception) -> None:
        self._use_session(client, FakeImageSession(outcome))

        response = client.get("/download-proxy", params={"url": "https://img.example/missing.png"})

        assert response.status_code == 502

    @pytest.mark.parametrize(
        "url",
        [
            "http://127.0.0.1/x.png",
            "http://10.0.0.5/logo.png",
            "http://192.168.1.1/logo.png",
            "http://169.254.169.254/latest/meta-data",
        ],
    )
    def test_non_public_host_is_400(self, client: TestClient, url: str) -> None:
        session = FakeImageSession(FakeImageResponse(content=b"secret"))
        self._use_session(client, session, host_resolver=resolve_host)

        response = client.get("/download-proxy", params={"url": url})

        assert response.status_code == 400
        assert session.requested == []

    def test_hostname_resolving_to_private_address_is_400(self, client: TestClient) -> None:
        session = FakeImageSession(FakeImageResponse(content=b"secret"))
        self._use_session(client, session, host_resolver=lambda host: ["93.184.216.34", "10.1.2.3"])

        response = client.get("/download-proxy", params={"url": "https://internal.example/logo.png"})

        assert response.status_code == 400
        assert session.requested == []

    def test_redirect_to_private_host_is_blocked(self, client: TestClient) -> None:
        redirect = FakeImageResponse(status_code=302, headers={"location": "http://metadata.internal/creds"})
        session = FakeImageSession(redirect, FakeImageResponse(content=b"secret"))
        addresses = {"img.example": ["93.184.216.34"], "metadata.internal": ["169.254.169.254"]}
        self._use_session(client, session, host_resolver=addresses.__getitem__)

        response = client.get("/download-proxy", params={"url": "https://img.example/logo.png"})

        assert response.status_code == 400
        assert session.requested == ["https://img.example/logo.png"]
        assert redirect.closed

    def test_redirect_to_public_host_is_followed(self, client: TestClient) -> None:
        redirect = FakeImageResponse(status_code=301, headers={"location": "/v2/logo.png"})
        session = FakeImageSession(redirect, FakeImageResponse(content=b"moved", content_type="image/png"))
        self._use_session(client, session)

        response = client.get("/download-proxy", params={"url": "https://img.example/logo.png"})

        assert response.status_code == 200
        assert response.content == b"moved"
        assert session.requested == ["https://img.example/logo.png", "https://img.example/v2/logo.png"]

    def test_declared_oversize_body_is_502(self, client: TestClient) -> None:
        upstream = FakeImageResponse(content=b"x" * 2048, headers={"content-length": "2048"})
        self._use_session(client, FakeImageSession(upstream), max_bytes=1024)

        response = client.get("/download-proxy", params={"url": "https://img.example/huge.png"})

        assert response.status_code == 502
        assert upstream.closed

    def test_undeclared_oversize_body_stops_streaming(self, client: TestClient) -> None:
        upstream = FakeImageResponse(content=b"x" * (CHUNK_SIZE * 3))
        service = self._use_session(client, FakeImageSession(upstream), max_bytes=CHUNK_SIZE + 1)

        image = service.fetch("https://img.example/huge.png")

        with pytest.raises(DownloadProxyError):
            list(image.chunks)
        assert upstream.closed


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("93.184.216.34", True),
        ("2606:2800:220:1:248:1893:25c8:1946", True),
        ("127.0.0.1", False),
        ("10.0.0.5", False),
        ("172.16.0.1", False),
        ("169.254.169.254", False),
        ("0.0.0.0", False),
        ("::1", False),
        ("fe80::1%eth0", False),
        ("::ffff:127.0.0.1", False),
        ("224.0.0.1", False),
    ],
)
def test_is_public_address(address: str, expected: bool) -> None:
    assert is_public_address(address) is expected


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


class TestAdminEndpoints:
    def _create(self, client: TestClient, name: str, domain: str) -> int:
        return client.post("/companies", json={"name": name, "domain": domain}).json()["id"]

    def test_requires_credentials(self, client: TestClient) -> None:
        assert client.get("/admin/companies").status_code == 401
        assert client.get("/admin/companies", auth=("admin", "wrong")).status_code == 401

    def test_unconfigured_admin_is_503(self, client: TestClient) -> None:
        client.app.dependency_overrides[get_admin_settings] = lambda: AdminSettings()

        assert client.get("/admin/companies", auth=ADMIN_AUTH).status_code == 503

    def test_lists_companies_with_pagination(self, client: TestClient) -> None:
        for index in range(3):
            self._create(client, f"Co{index}", f"co{index}.com")

        body = client.get("/admin/companies", params={"limit": 2}, auth=ADMIN_AUTH).json()

        assert body["pagination"] == {"total": 3, "pages": 2, "current": 1}
        assert len(body["companies"]) == 2
        assert "affiliateUrl" in body["companies"][0]

    def test_update_and_history(self, client: TestClient) -> None:
        company_id = self._create(client, "Acme", "acme.io")

        response = client.put(
            f"/admin/companies/{company_id}",
            json={"name": "Acme Inc", "domain": "acme.io", "affiliateUrl": "https://partner.example/acme"},
            auth=ADMIN_AUTH,
        )

        assert response.status_code == 200
        assert response.json()["affiliateUrl"] == "https://partner.example/acme"
        logs = client.get("/admin/history", auth=ADMIN_AUTH).json()["logs"]
        assert [(log["action"], log["adminUsername"]) for log in logs] == [("UPDATE", "admin")]

    def test_update_rejects_invalid_url(self, client: TestClient) -> None:
        company_id = self._create(client, "Acme", "acme.io")

        response = client.put(
            f"/admin/companies/{company_id}",
            json={"name": "Acme", "domain": "acme.io", "logoUrl": "not a url"},
            auth=ADMIN_AUTH,
        )

        assert response.status_code == 422

    def test_update_conflicts_and_missing(self, client: TestClient) -> None:
        self._create(client, "A", "a.com")
        second_id = self._create(client, "B", "b.com")

        conflict = client.put(f"/admin/companies/{second_id}", json={"name": "B", "domain": "a.com"}, auth=ADMIN_AUTH)
        missing = client.put("/admin/companies/999", json={"name": "X", "domain": "x.com"}, auth=ADMIN_AUTH)

        assert conflict.status_code == 409
        assert missing.status_code == 404

    def test_delete(self, client: TestClient) -> None:
        company_id = self._create(client, "Gone", "gone.com")

        assert client.delete(f"/admin/companies/{company_id}", auth=ADMIN_AUTH).json() == {"success": True}
        assert client.delete(f"/admin/companies/{company_id}", auth=ADMIN_AUTH).status_code == 404
        logs = client.get("/admin/history", auth=ADMIN_AUTH).json()["logs"]
        assert logs[0]["action"] == "DELETE"
