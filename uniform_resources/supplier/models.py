"""Data models for anchors and the resources derived from them.

These are plain, immutable Python objects.  A resource is either a
:class:`UniformResource` or a :class:`TransformedResource`; the two share
their leading fields but are distinct types carrying an explicit ``kind``
tag, so callers branch on the variant rather than probing for fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import httpx


class ResourceKind(str, Enum):
    PLAIN = "plain"
    TRANSFORMED = "transformed"


@dataclass(frozen=True)
class Anchor:
    """A hyperlink discovered in parsed content, in document order."""

    href: str
    label: Optional[str] = None


@dataclass(frozen=True)
class Provenance:
    """Identifies the supplier a resource came from.

    Resources hold this value rather than the supplier itself, so a resource
    never keeps its supplier alive.
    """

    urn: str
    kind: str = "html-content"


@dataclass(frozen=True)
class UniformResource:
    """A resource built from an anchor, before any transformation."""

    uri: str
    label: Optional[str]
    provenance: Provenance
    kind: ResourceKind = field(default=ResourceKind.PLAIN, init=False)


@dataclass(frozen=True)
class TransformedResource:
    """A resource at least one transformer step has changed."""

    uri: str
    label: Optional[str]
    provenance: Provenance
    transformation_remarks: tuple[str, ...] = ()
    pipe_position: int = 0
    kind: ResourceKind = field(default=ResourceKind.TRANSFORMED, init=False)


Resource = Union[UniformResource, TransformedResource]


@dataclass
class ResourceContext:
    """Per-run context handed to filters, reporters and transformer steps.

    ``http_client`` is shared by steps that talk to the network; when it is
    ``None`` those steps open a short-lived client of their own.
    """

    http_client: Optional[httpx.AsyncClient] = None


# ------------------------------------------------------------------
# Convenience helpers
# ------------------------------------------------------------------

def resource_from_anchor(anchor: Anchor, provenance: Provenance) -> UniformResource:
    """Build the untransformed resource for *anchor*."""
    return UniformResource(uri=anchor.href, label=anchor.label, provenance=provenance)


def is_transformed(resource: Resource) -> bool:
    return resource.kind is ResourceKind.TRANSFORMED


def all_transformation_remarks(resource: Resource) -> tuple[str, ...]:
    """Return every remark recorded on *resource*, oldest first."""
    if isinstance(resource, TransformedResource):
        return resource.transformation_remarks
    return ()


def transformed(
    resource: Resource,
    remark: str,
    *,
    uri: Optional[str] = None,
    label: Optional[str] = None,
) -> TransformedResource:
    """Return the transformed variant of *resource* with *remark* appended.

    *uri* and *label* replace the current values when given.  The
    ``pipe_position`` is carried over; the pipeline stamps the final value.
    """
    remarks = all_transformation_remarks(resource) + (remark,)
    position = resource.pipe_position if isinstance(resource, TransformedResource) else 0
    return TransformedResource(
        uri=uri if uri is not None else resource.uri,
        label=label if label is not None else resource.label,
        provenance=resource.provenance,
        transformation_remarks=remarks,
        pipe_position=position,
    )
