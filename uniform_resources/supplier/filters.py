"""Resource filters and their composition.

A filter may reject a resource at two checkpoints:

  * ``retain_original``: the freshly built resource, before any
    transformation;
  * ``retain_transformed``: the resource after the transformer pipeline.

Both default to "retain", so a filter only overrides the checkpoint it cares
about.  ``FilterChain`` composes filters with short-circuit AND semantics: the
first rejecting filter wins and later filters (and their reporters) are never
consulted for that resource.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from uniform_resources.config import settings
from uniform_resources.supplier.models import Resource, ResourceContext, UniformResource

logger = logging.getLogger(__name__)

Reporter = Callable[[ResourceContext, Resource], None]


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class ResourceFilter:
    """Base class for filters; both checkpoints retain everything by default."""

    def __init__(self, reporter: Optional[Reporter] = None) -> None:
        self.reporter = reporter

    def retain_original(self, ctx: ResourceContext, resource: UniformResource) -> bool:
        return True

    def retain_transformed(self, ctx: ResourceContext, resource: Resource) -> bool:
        return True

    def _reject(self, ctx: ResourceContext, resource: Resource) -> bool:
        """Report *resource* (if a reporter is attached) and return ``False``."""
        logger.debug("%s rejected %r", type(self).__name__, resource.uri)
        if self.reporter is not None:
            self.reporter(ctx, resource)
        return False


# ---------------------------------------------------------------------------
# Standard filters
# ---------------------------------------------------------------------------

class BlankLabelFilter(ResourceFilter):
    """Reject resources whose label is missing or empty."""

    def retain_original(self, ctx: ResourceContext, resource: UniformResource) -> bool:
        if resource.label is None or len(resource.label) == 0:
            return self._reject(ctx, resource)
        return True


class BrowserTraversibleFilter(ResourceFilter):
    """Reject resources a browser cannot navigate to (``mailto:`` and friends).

    *schemes* are URI prefixes compared case-insensitively; they default to
    ``settings.non_traversible_schemes``.
    """

    def __init__(
        self,
        reporter: Optional[Reporter] = None,
        schemes: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(reporter)
        if schemes is None:
            schemes = settings.non_traversible_schemes
        self.schemes = tuple(s.lower() for s in schemes)

    def retain_original(self, ctx: ResourceContext, resource: UniformResource) -> bool:
        if resource.uri.lower().startswith(self.schemes):
            return self._reject(ctx, resource)
        return True


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

class FilterChain(ResourceFilter):
    """All-must-pass composition of an ordered list of filters."""

    def __init__(self, filters: Iterable[ResourceFilter]) -> None:
        super().__init__()
        self.filters: tuple[ResourceFilter, ...] = tuple(filters)

    def retain_original(self, ctx: ResourceContext, resource: UniformResource) -> bool:
        for f in self.filters:
            if not f.retain_original(ctx, resource):
                return False
        return True

    def retain_transformed(self, ctx: ResourceContext, resource: Resource) -> bool:
        for f in self.filters:
            if not f.retain_transformed(ctx, resource):
                return False
        return True

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        names = ", ".join(type(f).__name__ for f in self.filters)
        return f"FilterChain([{names}])"


def filter_pipe(*filters: ResourceFilter) -> FilterChain:
    """Compose *filters* into a single :class:`FilterChain`."""
    return FilterChain(filters)
