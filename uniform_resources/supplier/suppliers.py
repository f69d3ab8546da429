"""Resource suppliers: anchors in, filtered and transformed resources out.

Per anchor the supplier runs:

    build original → filter (original) → [transform → filter (transformed)] → emit

The bracketed stages only run when a transformer is configured.  Any
rejection drops the anchor.  Anchors are processed one at a time, in the
order the content source returns them; nothing is batched, deduplicated or
reordered.  Filter and transformer errors are not caught: they abort the
iteration and leave whatever was already emitted in the consumer's hands.
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Optional, Protocol, Union

from uniform_resources.supplier.filters import ResourceFilter
from uniform_resources.supplier.models import (
    Anchor,
    Provenance,
    Resource,
    ResourceContext,
    resource_from_anchor,
)

logger = logging.getLogger(__name__)

ResourceConsumer = Callable[[Resource], Union[None, Awaitable[None]]]


class QueryableHtmlContent(Protocol):
    """A parsed content source that can list its anchors."""

    def anchors(self) -> list[Anchor]: ...


class ResourceTransformer(Protocol):
    """Anything a resource can be handed to for transformation."""

    async def flow(self, ctx: ResourceContext, resource: Resource) -> Resource: ...


# ---------------------------------------------------------------------------
# Single-anchor resolution
# ---------------------------------------------------------------------------

class TypicalResourcesSupplier:
    """Turns single anchors into resources under a fixed provenance."""

    provenance_kind = "html-content"

    def __init__(
        self,
        provenance_urn: str,
        filter: Optional[ResourceFilter] = None,
        transformer: Optional[ResourceTransformer] = None,
    ) -> None:
        self.provenance = Provenance(urn=provenance_urn, kind=self.provenance_kind)
        self.filter = filter
        self.transformer = transformer

    async def resource_from_anchor(
        self,
        ctx: ResourceContext,
        anchor: Anchor,
    ) -> Optional[Resource]:
        """Resolve *anchor* to a resource, or ``None`` if a filter drops it."""
        original = resource_from_anchor(anchor, self.provenance)
        if self.filter is not None and not self.filter.retain_original(ctx, original):
            logger.debug("Dropped before transformation: %r", original.uri)
            return None

        if self.transformer is None:
            return original

        resource = await self.transformer.flow(ctx, original)
        if self.filter is not None and not self.filter.retain_transformed(ctx, resource):
            logger.debug("Dropped after transformation: %r", resource.uri)
            return None
        return resource


# ---------------------------------------------------------------------------
# Whole-source iteration
# ---------------------------------------------------------------------------

class HtmlContentResourcesSupplier(TypicalResourcesSupplier):
    """Supplies a resource for every retained anchor of an HTML document."""

    def __init__(
        self,
        content: QueryableHtmlContent,
        provenance_urn: str,
        filter: Optional[ResourceFilter] = None,
        transformer: Optional[ResourceTransformer] = None,
    ) -> None:
        super().__init__(provenance_urn, filter=filter, transformer=transformer)
        self.content = content

    async def for_each_resource(
        self,
        ctx: ResourceContext,
        consume: ResourceConsumer,
    ) -> int:
        """Feed every anchor through :meth:`resource_from_anchor` in order.

        *consume* is called once per emitted resource; if it returns an
        awaitable, that is awaited before the next anchor is started.

        Returns:
            The number of resources handed to *consume*.
        """
        anchors = self.content.anchors()
        emitted = 0
        for anchor in anchors:
            resource = await self.resource_from_anchor(ctx, anchor)
            if resource is None:
                continue
            result = consume(resource)
            if inspect.isawaitable(result):
                await result
            emitted += 1
        logger.info(
            "%s: %d of %d anchor(s) emitted",
            self.provenance.urn,
            emitted,
            len(anchors),
        )
        return emitted


class EmailMessageResourcesSupplier(HtmlContentResourcesSupplier):
    """Same as :class:`HtmlContentResourcesSupplier`, for e-mail bodies."""

    provenance_kind = "email-message"
