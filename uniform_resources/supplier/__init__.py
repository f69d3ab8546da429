"""Resource supplier package.

Public API::

    from uniform_resources.supplier import (
        HtmlContentResourcesSupplier, filter_pipe, BlankLabelFilter,
    )
"""

from uniform_resources.supplier.counter import (
    FilteredResourcesCounter,
    UnregisteredReporterError,
)
from uniform_resources.supplier.filters import (
    BlankLabelFilter,
    BrowserTraversibleFilter,
    FilterChain,
    ResourceFilter,
    filter_pipe,
)
from uniform_resources.supplier.models import (
    Anchor,
    Provenance,
    Resource,
    ResourceContext,
    ResourceKind,
    TransformedResource,
    UniformResource,
    all_transformation_remarks,
    is_transformed,
    transformed,
)
from uniform_resources.supplier.suppliers import (
    EmailMessageResourcesSupplier,
    HtmlContentResourcesSupplier,
    QueryableHtmlContent,
    ResourceTransformer,
    TypicalResourcesSupplier,
)

__all__ = [
    "FilteredResourcesCounter",
    "UnregisteredReporterError",
    "BlankLabelFilter",
    "BrowserTraversibleFilter",
    "FilterChain",
    "ResourceFilter",
    "filter_pipe",
    "Anchor",
    "Provenance",
    "Resource",
    "ResourceContext",
    "ResourceKind",
    "TransformedResource",
    "UniformResource",
    "all_transformation_remarks",
    "is_transformed",
    "transformed",
    "EmailMessageResourcesSupplier",
    "HtmlContentResourcesSupplier",
    "QueryableHtmlContent",
    "ResourceTransformer",
    "TypicalResourcesSupplier",
]
