"""
app/services/merge.py

Priority-ordered merge and deduplication of BrandRecords.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from app.domain.brand import BrandRecord, BrandSource, BrandType

# Highest visual quality first, app/software icons before generic web logos.
PROVIDER_PRIORITY: tuple[str, ...] = (
    BrandSource.BRANDFETCH,
    BrandSource.APP_STORE,
    BrandSource.CLEARBIT,
)
BEST_QUALITY_SOURCE = BrandSource.BRANDFETCH


def provider_rank(source: str) -> int:
    try:
        return PROVIDER_PRIORITY.index(source)
    except ValueError:
        return len(PROVIDER_PRIORITY)


def _replaces(existing: BrandRecord, candidate: BrandRecord) -> bool:
    if existing.type == BrandType.FAVICON and candidate.type == BrandType.LOGO:
        return True
    if candidate.source == BEST_QUALITY_SOURCE and existing.source != BEST_QUALITY_SOURCE:
        return True
    return False


def dedupe_brand_records(records: Iterable[BrandRecord]) -> list[BrandRecord]:
    """
    Keep one record per dedup key, first seen wins unless overridden.

    A later record replaces the kept one when it is a logo and the kept one
    a favicon, or when it comes from the best-quality provider. The
    replacement keeps the original position in the output.
    """

    merged: dict[str, BrandRecord] = {}
    for record in records:
        key = record.dedup_key
        existing = merged.get(key)
        if existing is None or _replaces(existing, record):
            merged[key] = record
    return list(merged.values())


def merge_brand_records(
    *,
    local: Sequence[BrandRecord],
    provider_results: dict[str, Sequence[BrandRecord]],
    fallback: Sequence[BrandRecord] = (),
) -> list[BrandRecord]:
    """
    Concatenate store results, provider results in declared priority order,
    and the fallback favicon, then deduplicate.
    """

    ordered: list[BrandRecord] = list(local)
    for source in sorted(provider_results, key=provider_rank):
        ordered.extend(provider_results[source])
    ordered.extend(fallback)
    return dedupe_brand_records(ordered)
