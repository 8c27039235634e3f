"""HTML fetching and URL validation utilities."""

import ipaddress
import logging
import re
from typing import Awaitable, Callable, Dict, Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from recipe_cart.app.core.config import get_settings

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[str]]


class FetchError(Exception):
    """Raised when a page cannot be fetched (network failure or non-2xx status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def is_private_host(host: str) -> bool:
    """Check if a host is private/localhost."""
    hostname = host.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
        return ip.is_private or ip.is_loopback
    except ValueError:
        return hostname.lower() in {"localhost"}


def validate_url(url: str) -> None:
    """Reject non-http(s) URLs and private hosts."""
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("URL must start with http:// or https://")
    if is_private_host(parsed.hostname or ""):
        raise ValueError("URL points to a private or disallowed host")


def default_headers() -> Dict[str, str]:
    settings = get_settings()
    headers = {
        "User-Agent": settings.scraper_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Connection": "keep-alive",
    }
    if settings.scraper_cookies:
        headers["Cookie"] = settings.scraper_cookies
    return headers


def _decode(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    content_bytes = response.content

    encoding = None
    if "charset=" in content_type.lower():
        try:
            encoding = content_type.split("charset=")[1].split(";")[0].strip().strip("\"'")
        except (IndexError, AttributeError):
            pass

    try:
        return content_bytes.decode(encoding or "utf-8")
    except (UnicodeDecodeError, LookupError):
        text = content_bytes.decode("utf-8", errors="replace")
        match = re.search(r'<meta[^>]+charset=["\']?([^"\'>\s]+)', text, re.I)
        if match and match.group(1).lower() != "utf-8":
            try:
                return content_bytes.decode(match.group(1).lower())
            except (UnicodeDecodeError, LookupError):
                pass
        return text


async def fetch_html(url: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Fetch a page and return its decoded HTML.

    Raises ValueError for URLs that must not be fetched and FetchError for
    network failures or non-success statuses. Nothing is retried here except
    a single alternate-Accept attempt when the site answers 401/403.
    """
    validate_url(url)
    settings = get_settings()
    merged_headers = default_headers() | (headers or {})
    timeout = httpx.Timeout(settings.fetch_timeout_seconds, connect=5.0)

    async def _try_fetch(extra_headers: Optional[dict] = None) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, headers=merged_headers | (extra_headers or {})
        ) as client:
            return await client.get(url)

    try:
        response = await _try_fetch()
        if response.status_code in {401, 403}:
            logger.info("Site returned %s for %s; retrying with generic Accept", response.status_code, url)
            response = await _try_fetch({"Accept": "*/*"})
    except httpx.TimeoutException as exc:
        raise FetchError(url, f"Timed out fetching {url}") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(url, f"Network error: {exc}") from exc

    if response.status_code >= 400:
        raise FetchError(
            url, f"Site returned status {response.status_code}", status_code=response.status_code
        )

    content_type = response.headers.get("content-type", "")
    if content_type and "html" not in content_type and "text/plain" not in content_type:
        raise ValueError(f"Unsupported content type: {content_type}")

    return _decode(response)


def parse_document(html: str) -> BeautifulSoup:
    """Parse HTML into a queryable tree."""
    return BeautifulSoup(html or "", "lxml")


async def check_url_available(url: str, timeout: float = 3.0) -> bool:
    """Cheap availability probe. HEAD first, fallback to GET on 405."""
    validate_url(url)
    async with httpx.AsyncClient(follow_redirects=True, timeout=timeout) as client:
        try:
            resp = await client.head(url, headers=default_headers())
            if resp.status_code == 405:
                resp = await client.get(url, headers=default_headers())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(url, f"Network error: {exc}") from exc
    return resp.status_code < 400
