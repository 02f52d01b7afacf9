"""
app/connectors/favicon.py

URL builders for image services that need no lookup request.
"""

from __future__ import annotations

from urllib.parse import quote

GOOGLE_FAVICON_URL = (
    "https://t3.gstatic.com/faviconV2?client=SOCIAL&type=FAVICON"
    "&fallback_opts=TYPE,SIZE,URL&url=http://{domain}&size={size}"
)
FAVICON_SIZES = (256, 128, 64)
CLEARBIT_LOGO_BASE_URL = "https://logo.clearbit.com"
CLEARBIT_LOGO_SIZES = (512, 256, 128)


def google_favicon_url(domain: str, size: int = 256) -> str:
    return GOOGLE_FAVICON_URL.format(domain=quote(domain.strip(), safe=".-"), size=size)


def google_favicon_resolutions(domain: str) -> dict[str, str]:
    return {f"{size}x{size}": google_favicon_url(domain, size) for size in FAVICON_SIZES}


def clearbit_logo_url(domain: str, base_url: str = CLEARBIT_LOGO_BASE_URL, size: int | None = None) -> str:
    url = f"{base_url.rstrip('/')}/{quote(domain.strip(), safe='.-')}"
    if size is not None:
        url = f"{url}?size={size}"
    return url


def clearbit_logo_resolutions(domain: str, base_url: str = CLEARBIT_LOGO_BASE_URL) -> dict[str, str]:
    resolutions = {"Original": clearbit_logo_url(domain, base_url)}
    for size in CLEARBIT_LOGO_SIZES:
        resolutions[f"{size}x{size}"] = clearbit_logo_url(domain, base_url, size)
    return resolutions
