"""
app/services/download_proxy_service.py

Server-side image fetch so browsers can download cross-origin logos.

Only public hosts are fetched: every hop (including redirects) is resolved
and rejected when any address is loopback, private, link-local or
otherwise non-global. Bodies are streamed and capped at `max_bytes`.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from urllib.parse import urljoin, urlparse

import requests

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "image/avif,image/webp,image/apng,image/svg+xml,image/*,*/*;q=0.8",
}
DEFAULT_CONTENT_TYPE = "image/png"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
MAX_REDIRECTS = 5
CHUNK_SIZE = 64 * 1024

HostResolver = Callable[[str], list[str]]


class DownloadProxyError(RuntimeError):
    """Raised when the upstream image cannot be fetched."""


class BlockedHostError(ValueError):
    """Raised when a URL points at a non-public address."""


@dataclass(frozen=True)
class ProxiedImage:
    chunks: Iterator[bytes]
    content_type: str
    content_length: int | None = None


def resolve_host(hostname: str) -> list[str]:
    infos = socket.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
    return [str(info[4][0]) for info in infos]


def is_public_address(address: str) -> bool:
    ip = ipaddress.ip_address(address.split("%", 1)[0])
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return ip.is_global and not ip.is_multicast


class DownloadProxyService:
    def __init__(
        self,
        *,
        timeout_seconds: float,
        max_bytes: int = DEFAULT_MAX_BYTES,
        session: requests.Session | None = None,
        host_resolver: HostResolver = resolve_host,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._max_bytes = max_bytes
        self._session = session or requests.Session()
        self._resolve_host = host_resolver

    def fetch(self, url: str) -> ProxiedImage:
        """
        Open the upstream image and return a capped chunk stream.

        Raises ValueError for malformed or non-public URLs and
        DownloadProxyError for upstream failures or oversize bodies.
        """

        response = self._open(url)
        content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
        content_length = _declared_length(response)
        if content_length is not None and content_length > self._max_bytes:
            response.close()
            logger.warning("Proxy download too large url=%s bytes=%s", url, content_length)
            raise DownloadProxyError("Image exceeds the maximum download size")

        return ProxiedImage(
            chunks=self._iter_capped(response, url),
            content_type=content_type,
            content_length=content_length,
        )

    def _open(self, url: str) -> requests.Response:
        current = url
        for _ in range(MAX_REDIRECTS + 1):
            self._check_url(current)
            try:
                response = self._session.get(
                    current,
                    headers=BROWSER_HEADERS,
                    timeout=self._timeout_seconds,
                    stream=True,
                    allow_redirects=False,
                )
            except requests.RequestException as exc:
                logger.error("Proxy download failed url=%s error=%s", current, exc)
                raise DownloadProxyError("Failed to fetch image") from exc

            if response.is_redirect:
                location = response.headers.get("location", "")
                response.close()
                current = urljoin(current, location)
                continue
            try:
                response.raise_for_status()
            except requests.HTTPError as exc:
                response.close()
                logger.error("Proxy download failed url=%s error=%s", current, exc)
                raise DownloadProxyError("Failed to fetch image") from exc
            return response

        raise DownloadProxyError("Too many redirects")

    def _check_url(self, url: str) -> None:
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or not parsed.hostname:
            raise ValueError("url must be an absolute http(s) URL.")

        try:
            addresses = self._resolve_host(parsed.hostname)
        except OSError as exc:
            raise DownloadProxyError(f"Could not resolve host {parsed.hostname!r}") from exc

        if not addresses or not all(is_public_address(address) for address in addresses):
            logger.warning("Proxy download blocked host=%s addresses=%s", parsed.hostname, addresses)
            raise BlockedHostError("url must point at a public host.")

    def _iter_capped(self, response: requests.Response, url: str) -> Iterator[bytes]:
        received = 0
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                received += len(chunk)
                if received > self._max_bytes:
                    logger.warning("Proxy download aborted over limit url=%s bytes>%s", url, self._max_bytes)
                    raise DownloadProxyError("Image exceeds the maximum download size")
                yield chunk
        finally:
            response.close()


def _declared_length(response: requests.Response) -> int | None:
    raw = response.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
