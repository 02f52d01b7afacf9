"""
app/api/routers/download_proxy.py

Logo download passthrough endpoint.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from app.config import get_catalog_settings
from app.services.download_proxy_service import DownloadProxyError, DownloadProxyService

router = APIRouter(tags=["download-proxy"])


@lru_cache(maxsize=1)
def get_download_proxy_service() -> DownloadProxyService:
    settings = get_catalog_settings()
    return DownloadProxyService(
        timeout_seconds=settings.download_proxy_timeout_seconds,
        max_bytes=settings.download_proxy_max_bytes,
    )


def _safe_filename(filename: str) -> str:
    cleaned = "".join(ch for ch in filename if ch not in '"\\\r\n/').strip()
    return cleaned or "logo.png"


@router.get("/download-proxy")
def download_proxy(
    url: str | None = Query(default=None, description="Image URL to fetch"),
    filename: str = Query(default="logo.png"),
    proxy: DownloadProxyService = Depends(get_download_proxy_service),
) -> StreamingResponse:
    if not url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing url parameter",
        )

    try:
        image = proxy.fetch(url)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DownloadProxyError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    headers = {"Content-Disposition": f'attachment; filename="{_safe_filename(filename)}"'}
    if image.content_length is not None:
        headers["Content-Length"] = str(image.content_length)
    return StreamingResponse(image.chunks, media_type=image.content_type, headers=headers)
