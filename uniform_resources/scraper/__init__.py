"""Scraper package: page fetch & anchor discovery."""

from uniform_resources.scraper.content import HtmlContent, decode_email_body
from uniform_resources.scraper.fetcher import fetch_url
from uniform_resources.scraper.models import RawPage

__all__ = ["fetch_url", "decode_email_body", "HtmlContent", "RawPage"]
