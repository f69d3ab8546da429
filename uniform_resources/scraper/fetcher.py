"""HTTP fetcher for HTML pages."""

from __future__ import annotations

import logging

import httpx

from uniform_resources.config import settings
from uniform_resources.scraper.models import RawPage

logger = logging.getLogger(__name__)

_HTML_MEDIA_TYPES = ("text/html", "application/xhtml+xml")


class NotHtmlContentError(ValueError):
    """Raised when a fetched URL does not serve HTML."""


def _media_type(content_type: str) -> str:
    """``"text/html; charset=utf-8"`` -> ``"text/html"``."""
    return content_type.split(";", 1)[0].strip().lower()


def fetch_url(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    A response without a ``Content-Type`` header is assumed to be HTML.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        NotHtmlContentError: If the response is not an HTML media type.
    """
    logger.info("Fetching %s", url)
    with httpx.Client(
        headers=settings.default_headers,
        timeout=settings.request_timeout,
        max_redirects=settings.max_redirects,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "text/html")
        if _media_type(content_type) not in _HTML_MEDIA_TYPES:
            raise NotHtmlContentError(f"{url} served {content_type!r}, not HTML")
        html = response.text
        status_code = response.status_code

    return RawPage(url=url, html=html, status_code=status_code, content_type=content_type)
