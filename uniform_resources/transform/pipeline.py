"""Transformer pipeline: ordered, asynchronous enrichment steps.

Each step receives the output of the previous one.  A step that changes the
resource returns a :class:`TransformedResource` (see
:func:`~uniform_resources.supplier.models.transformed`); a step with nothing
to do returns its input unchanged.  Step failures propagate to the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod

from uniform_resources.supplier.models import (
    Resource,
    ResourceContext,
    TransformedResource,
)

logger = logging.getLogger(__name__)


class TransformerStep(ABC):
    """Abstract base class for a single pipeline step."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def flow(self, ctx: ResourceContext, resource: Resource) -> Resource:
        """Return *resource* unchanged or a transformed copy of it."""


class TransformerPipeline:
    """Run steps strictly in order, one resource at a time."""

    def __init__(self, *steps: TransformerStep) -> None:
        self.steps: tuple[TransformerStep, ...] = steps

    async def flow(self, ctx: ResourceContext, resource: Resource) -> Resource:
        for position, step in enumerate(self.steps, start=1):
            resource = await step.flow(ctx, resource)
            if isinstance(resource, TransformedResource):
                # pipe_position counts the steps run so far
                resource = dataclasses.replace(resource, pipe_position=position)
                logger.debug("[%s] %s", step.name, resource.uri)
        return resource

    def __len__(self) -> int:
        return len(self.steps)


def pipe(*steps: TransformerStep) -> TransformerPipeline:
    """Compose *steps* into a :class:`TransformerPipeline`."""
    return TransformerPipeline(*steps)
