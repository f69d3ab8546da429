"""Standard transformer steps.

    label cleanup → redirect following → tracking-code removal

is the usual order, e.g.::

    pipe(
        RemoveLabelLineBreaksAndTrimSpaces(),
        FollowRedirects(),
        RemoveTrackingCodesFromUrl(),
    )
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional
from urllib.parse import unquote_plus, urlsplit, urlunsplit

import httpx

from uniform_resources.config import settings
from uniform_resources.supplier.models import Resource, ResourceContext, transformed
from uniform_resources.transform.pipeline import TransformerStep

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Label cleanup
# ---------------------------------------------------------------------------

class RemoveLabelLineBreaksAndTrimSpaces(TransformerStep):
    """Collapse line breaks and runs of spaces in the label, then trim it."""

    async def flow(self, ctx: ResourceContext, resource: Resource) -> Resource:
        if not resource.label:
            return resource
        cleaned = _WHITESPACE_RUN.sub(" ", resource.label).strip()
        if cleaned == resource.label:
            return resource
        return transformed(
            resource,
            "Removed line breaks and trimmed spaces in label",
            label=cleaned,
        )


# ---------------------------------------------------------------------------
# Redirect following
# ---------------------------------------------------------------------------

class FollowRedirects(TransformerStep):
    """Replace the URI with the end of its redirect chain.

    Uses ``ctx.http_client`` when one is supplied, otherwise opens a
    short-lived ``httpx.AsyncClient`` per resource.  Only ``http`` and
    ``https`` URIs are resolved.  The response body is never read.

    Transport errors (``httpx.TransportError``, ``httpx.TooManyRedirects``)
    propagate; an error *status* at the end of the chain does not, the URI is
    simply left as the last location reached.
    """

    async def flow(self, ctx: ResourceContext, resource: Resource) -> Resource:
        if urlsplit(resource.uri).scheme.lower() not in ("http", "https"):
            return resource

        if ctx.http_client is not None:
            final_url, hops = await self._resolve(ctx.http_client, resource.uri)
        else:
            async with httpx.AsyncClient(
                headers=settings.default_headers,
                timeout=settings.request_timeout,
                max_redirects=settings.max_redirects,
            ) as client:
                final_url, hops = await self._resolve(client, resource.uri)

        if hops == 0 or final_url == resource.uri:
            return resource
        logger.debug("Followed %d redirect(s): %s -> %s", hops, resource.uri, final_url)
        return transformed(
            resource,
            f"Followed {hops} redirect(s) from {resource.uri}",
            uri=final_url,
        )

    @staticmethod
    async def _resolve(client: httpx.AsyncClient, uri: str) -> tuple[str, int]:
        async with client.stream("GET", uri, follow_redirects=True) as response:
            return str(response.url), len(response.history)


# ---------------------------------------------------------------------------
# Tracking-code removal
# ---------------------------------------------------------------------------

class RemoveTrackingCodesFromUrl(TransformerStep):
    """Drop ``utm_*`` and other marketing parameters from the query string.

    The remaining parameters keep their original order.  *params* defaults to
    ``settings.tracking_params``; names are compared case-insensitively.
    """

    def __init__(self, params: Optional[Iterable[str]] = None) -> None:
        if params is None:
            params = settings.tracking_params
        self.params = frozenset(p.lower() for p in params)

    def is_tracking_param(self, name: str) -> bool:
        name = name.lower()
        return name.startswith("utm_") or name in self.params

    def _segment_key(self, segment: str) -> str:
        """Decoded parameter name of a raw ``name=value`` query segment."""
        return unquote_plus(segment.split("=", 1)[0])

    async def flow(self, ctx: ResourceContext, resource: Resource) -> Resource:
        parts = urlsplit(resource.uri)
        if not parts.query:
            return resource

        # Raw segments are kept byte-for-byte; only tracking ones are dropped
        segments = parts.query.split("&")
        kept = [s for s in segments if not self.is_tracking_param(self._segment_key(s))]
        if len(kept) == len(segments):
            return resource

        removed = [
            self._segment_key(s) for s in segments
            if self.is_tracking_param(self._segment_key(s))
        ]
        clean = urlunsplit(parts._replace(query="&".join(kept)))
        return transformed(
            resource,
            f"Removed tracking codes: {', '.join(removed)}",
            uri=clean,
        )
