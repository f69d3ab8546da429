"""Tally of resources removed by each named filter step."""

from __future__ import annotations

from dataclasses import dataclass

from uniform_resources.supplier.filters import Reporter
from uniform_resources.supplier.models import Resource, ResourceContext


class UnregisteredReporterError(KeyError):
    """Raised when counting a label no reporter was ever registered for."""


@dataclass
class RemovalTally:
    removed_count: int = 0


class FilteredResourcesCounter:
    """Named removal counters, one per registered reporter label.

    Usage::

        counter = FilteredResourcesCounter()
        f = filter_pipe(BlankLabelFilter(counter.reporter("Blank label")))
        ...
        counter.count("Blank label")

    Registering the same label again resets its tally to zero.
    """

    def __init__(self) -> None:
        self._tallies: dict[str, RemovalTally] = {}

    def reporter(self, label: str) -> Reporter:
        """Register *label* with a zeroed tally and return its reporter."""

        def report(ctx: ResourceContext, resource: Resource) -> None:
            self._tallies[label].removed_count += 1

        self._tallies[label] = RemovalTally()
        return report

    def count(self, label: str) -> int:
        """Return how many resources the reporter for *label* has seen.

        Raises:
            UnregisteredReporterError: If no reporter was registered for *label*.
        """
        try:
            return self._tallies[label].removed_count
        except KeyError:
            raise UnregisteredReporterError(label) from None

    def counts(self) -> dict[str, int]:
        """Snapshot of every registered label and its tally."""
        return {label: t.removed_count for label, t in self._tallies.items()}

    @property
    def labels(self) -> list[str]:
        return list(self._tallies)

    def __contains__(self, label: object) -> bool:
        return label in self._tallies
