"""Queryable HTML content: the anchor source resource suppliers read from."""

from __future__ import annotations

import base64
import binascii
from typing import List, Optional, Union

from bs4 import BeautifulSoup

from uniform_resources.scraper.models import RawPage
from uniform_resources.supplier.models import Anchor


class EmailBodyDecodeError(ValueError):
    """Raised when an e-mail body is not valid base64."""


def decode_email_body(payload: Union[bytes, str]) -> str:
    """Decode a base64-encoded HTML e-mail body to text.

    Line breaks and other whitespace inside *payload* are ignored, as MIME
    encoders wrap base64 bodies at 76 columns.
    """
    if isinstance(payload, str):
        payload = payload.encode("ascii", errors="ignore")
    compact = b"".join(payload.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except binascii.Error as exc:
        raise EmailBodyDecodeError(f"E-mail body is not valid base64: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


class HtmlContent:
    """An HTML document identified by *uri*, parsed once on first use."""

    def __init__(self, uri: str, html: str) -> None:
        self.uri = uri
        self.html = html
        self._soup: Optional[BeautifulSoup] = None

    @classmethod
    def from_page(cls, raw: RawPage) -> "HtmlContent":
        return cls(raw.url, raw.html)

    @classmethod
    def from_base64(cls, uri: str, payload: Union[bytes, str]) -> "HtmlContent":
        """Build content from a base64-encoded e-mail body."""
        return cls(uri, decode_email_body(payload))

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html, "html.parser")
        return self._soup

    def anchors(self) -> List[Anchor]:
        """Return every ``<a href>`` in document order.

        The label is the element's text exactly as it appears (no trimming);
        it is ``None`` for an element with no children at all.
        """
        result: List[Anchor] = []
        for tag in self.soup.find_all("a", href=True):
            label = tag.get_text() if tag.contents else None
            result.append(Anchor(href=tag["href"], label=label))
        return result

    def title(self) -> str:
        """Return the text of the first ``<title>`` tag, or empty string."""
        if self.soup.title is None:
            return ""
        return self.soup.title.get_text(strip=True)
