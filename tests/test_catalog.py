"""
tests/test_catalog.py

Curated catalog data, lookups and domain helpers.
"""

from __future__ import annotations

import pytest

from app.catalog.curated import (
    CATEGORY_META,
    CURATED_CATEGORIES,
    TOP_COMPANIES,
    domain_slug,
    find_by_slug,
    get_category,
)
from app.domain.brand import BrandSource, looks_like_domain, name_from_domain
from app.services.catalog_service import format_curated, get_logo_detail, list_categories


class TestCuratedData:
    def test_every_category_has_metadata(self) -> None:
        assert set(CURATED_CATEGORIES) == set(CATEGORY_META)

    def test_domains_are_unique_within_each_category(self) -> None:
        for companies in CURATED_CATEGORIES.values():
            domains = [company.domain for company in companies]
            assert len(domains) == len(set(domains))

    def test_top_list_is_not_empty(self) -> None:
        assert len(TOP_COMPANIES) >= 20

    @pytest.mark.parametrize("key", ["ai", "AI", " saas "])
    def test_category_lookup_is_case_insensitive(self, key: str) -> None:
        assert get_category(key) is not None

    @pytest.mark.parametrize("key", [None, "", "unknown"])
    def test_unknown_or_blank_category_is_none(self, key: str | None) -> None:
        assert get_category(key) is None


class TestFormatCurated:
    def test_ids_and_synthetic_download_counts(self) -> None:
        records = format_curated(TOP_COMPANIES[:3])

        assert [record.download_count for record in records] == [1000, 999, 998]
        assert records[0].id == f"curated-{TOP_COMPANIES[0].domain}"
        assert all(record.source == BrandSource.CURATED for record in records)
        assert all(record.resolutions and "Original" in record.resolutions for record in records)


class TestLogoDetail:
    def test_slug_roundtrip_and_related(self) -> None:
        company = CURATED_CATEGORIES["saas"][1]

        detail = get_logo_detail(domain_slug(company.domain).upper())

        assert detail is not None
        assert detail.domain == company.domain
        assert detail.category == "saas"
        assert company.domain not in {related.domain for related in detail.related}
        assert 0 < len(detail.related) <= 8

    def test_unknown_slug(self) -> None:
        assert get_logo_detail("does-not-exist-com") is None
        assert find_by_slug("does-not-exist-com") is None

    def test_category_summaries_count_logos(self) -> None:
        summaries = {summary.key: summary for summary in list_categories()}

        assert summaries["fintech"].logo_count == len(CURATED_CATEGORIES["fintech"])
        assert summaries["fintech"].title == CATEGORY_META["fintech"].title


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("example.com", True),
        ("sub.example.co.uk", True),
        ("my-site.io", True),
        ("stripe", False),
        ("no such brand", False),
        ("-bad.com", False),
        ("bad-.com", False),
        ("example.c", False),
        ("example.123", False),
    ],
)
def test_looks_like_domain(value: str, expected: bool) -> None:
    assert looks_like_domain(value) is expected


@pytest.mark.parametrize(
    ("domain", "expected"),
    [("example.com", "Example"), ("app.stripe.com", "Stripe"), ("localhost", "localhost")],
)
def test_name_from_domain(domain: str, expected: str) -> None:
    assert name_from_domain(domain) == expected
