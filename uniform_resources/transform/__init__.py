"""Resource transformer pipeline and its standard steps."""

from uniform_resources.transform.pipeline import (
    TransformerPipeline,
    TransformerStep,
    pipe,
)
from uniform_resources.transform.steps import (
    FollowRedirects,
    RemoveLabelLineBreaksAndTrimSpaces,
    RemoveTrackingCodesFromUrl,
)

__all__ = [
    "TransformerPipeline",
    "TransformerStep",
    "pipe",
    "FollowRedirects",
    "RemoveLabelLineBreaksAndTrimSpaces",
    "RemoveTrackingCodesFromUrl",
]
