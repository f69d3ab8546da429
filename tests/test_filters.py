"""Tests for resource filters, filter chains and the removal counter."""

from __future__ import annotations

import pytest

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
    Provenance,
    ResourceContext,
    UniformResource,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

PROVENANCE = Provenance(urn="test:filters")


def _resource(uri: str = "https://example.com/", label: str | None = "Example") -> UniformResource:
    return UniformResource(uri=uri, label=label, provenance=PROVENANCE)


class RecordingReporter:
    def __init__(self) -> None:
        self.seen: list[UniformResource] = []

    def __call__(self, ctx, resource) -> None:
        self.seen.append(resource)


class RejectTransformed(ResourceFilter):
    """Only implements the transformed checkpoint."""

    def retain_transformed(self, ctx, resource) -> bool:
        return self._reject(ctx, resource)


@pytest.fixture()
def ctx() -> ResourceContext:
    return ResourceContext()


# ---------------------------------------------------------------------------
# Base filter
# ---------------------------------------------------------------------------

class TestResourceFilter:
    def test_defaults_retain_everything(self, ctx) -> None:
        f = ResourceFilter()
        assert f.retain_original(ctx, _resource()) is True
        assert f.retain_transformed(ctx, _resource()) is True


# ---------------------------------------------------------------------------
# Blank-label filter
# ---------------------------------------------------------------------------

class TestBlankLabelFilter:
    @pytest.mark.parametrize("label", [None, ""])
    def test_rejects_blank_label_and_reports_once(self, ctx, label) -> None:
        reporter = RecordingReporter()
        f = BlankLabelFilter(reporter)
        resource = _resource(label=label)

        assert f.retain_original(ctx, resource) is False
        assert reporter.seen == [resource]

    def test_retains_labelled_resource_without_reporting(self, ctx) -> None:
        reporter = RecordingReporter()
        f = BlankLabelFilter(reporter)

        assert f.retain_original(ctx, _resource(label="Read more")) is True
        assert reporter.seen == []

    def test_whitespace_label_is_not_blank(self, ctx) -> None:
        assert BlankLabelFilter().retain_original(ctx, _resource(label=" ")) is True

    def test_no_reporter_still_rejects(self, ctx) -> None:
        assert BlankLabelFilter().retain_original(ctx, _resource(label="")) is False

    def test_transformed_checkpoint_always_retains(self, ctx) -> None:
        assert BlankLabelFilter().retain_transformed(ctx, _resource(label="")) is True


# ---------------------------------------------------------------------------
# Browser-traversible filter
# ---------------------------------------------------------------------------

class TestBrowserTraversibleFilter:
    def test_rejects_mailto(self, ctx) -> None:
        reporter = RecordingReporter()
        f = BrowserTraversibleFilter(reporter)

        assert f.retain_original(ctx, _resource(uri="mailto:someone@example.com")) is False
        assert len(reporter.seen) == 1

    def test_scheme_match_is_case_insensitive(self, ctx) -> None:
        f = BrowserTraversibleFilter()
        assert f.retain_original(ctx, _resource(uri="MAILTO:someone@example.com")) is False

    def test_retains_http(self, ctx) -> None:
        reporter = RecordingReporter()
        f = BrowserTraversibleFilter(reporter)

        assert f.retain_original(ctx, _resource(uri="https://example.com/a")) is True
        assert reporter.seen == []

    def test_custom_schemes(self, ctx) -> None:
        f = BrowserTraversibleFilter(schemes=["mailto:", "tel:"])
        assert f.retain_original(ctx, _resource(uri="tel:+15551234")) is False
        assert f.retain_original(ctx, _resource(uri="https://example.com")) is True

    def test_default_schemes_come_from_settings(self, ctx, monkeypatch) -> None:
        monkeypatch.setattr(
            "uniform_resources.supplier.filters.settings.non_traversible_schemes",
            ("javascript:",),
        )
        f = BrowserTraversibleFilter()
        assert f.retain_original(ctx, _resource(uri="javascript:void(0)")) is False
        assert f.retain_original(ctx, _resource(uri="mailto:a@b.c")) is True


# ---------------------------------------------------------------------------
# Filter chain
# ---------------------------------------------------------------------------

class TestFilterChain:
    def test_empty_chain_retains(self, ctx) -> None:
        chain = filter_pipe()
        assert chain.retain_original(ctx, _resource()) is True
        assert chain.retain_transformed(ctx, _resource()) is True

    def test_all_pass(self, ctx) -> None:
        chain = filter_pipe(BlankLabelFilter(), BrowserTraversibleFilter())
        assert chain.retain_original(ctx, _resource()) is True

    def test_short_circuit_only_first_reporter_fires(self, ctx) -> None:
        first, second = RecordingReporter(), RecordingReporter()
        chain = filter_pipe(BlankLabelFilter(first), BrowserTraversibleFilter(second))
        # Rejected by both filters individually
        resource = _resource(uri="mailto:a@example.com", label="")

        assert chain.retain_original(ctx, resource) is False
        assert first.seen == [resource]
        assert second.seen == []

    def test_order_decides_attribution(self, ctx) -> None:
        first, second = RecordingReporter(), RecordingReporter()
        chain = filter_pipe(BrowserTraversibleFilter(first), BlankLabelFilter(second))
        resource = _resource(uri="mailto:a@example.com", label="")

        assert chain.retain_original(ctx, resource) is False
        assert len(first.seen) == 1
        assert second.seen == []

    def test_checkpoints_are_independent(self, ctx) -> None:
        reporter = RecordingReporter()
        chain = filter_pipe(BlankLabelFilter(), RejectTransformed(reporter))

        assert chain.retain_original(ctx, _resource()) is True
        assert reporter.seen == []
        assert chain.retain_transformed(ctx, _resource()) is False
        assert len(reporter.seen) == 1

    def test_nested_chains_are_associative(self, ctx) -> None:
        resources = [
            _resource(),
            _resource(label=""),
            _resource(uri="mailto:x@example.com"),
        ]
        flat = filter_pipe(BlankLabelFilter(), BrowserTraversibleFilter(), RejectTransformed())
        nested = filter_pipe(
            filter_pipe(BlankLabelFilter(), BrowserTraversibleFilter()),
            RejectTransformed(),
        )
        for r in resources:
            assert flat.retain_original(ctx, r) == nested.retain_original(ctx, r)
            assert flat.retain_transformed(ctx, r) == nested.retain_transformed(ctx, r)

    def test_chain_is_a_filter(self) -> None:
        chain = filter_pipe(BlankLabelFilter())
        assert isinstance(chain, FilterChain)
        assert isinstance(chain, ResourceFilter)
        assert len(chain) == 1
        assert "BlankLabelFilter" in repr(chain)


# ---------------------------------------------------------------------------
# Removal counter
# ---------------------------------------------------------------------------

class TestFilteredResourcesCounter:
    def test_reporter_increments(self, ctx) -> None:
        counter = FilteredResourcesCounter()
        report = counter.reporter("Blank label")
        report(ctx, _resource())
        report(ctx, _resource())
        assert counter.count("Blank label") == 2

    def test_fresh_reporter_counts_zero(self) -> None:
        counter = FilteredResourcesCounter()
        counter.reporter("X")
        assert counter.count("X") == 0

    def test_unregistered_label_raises(self) -> None:
        counter = FilteredResourcesCounter()
        with pytest.raises(UnregisteredReporterError):
            counter.count("never registered")

    def test_unregistered_error_is_a_key_error(self) -> None:
        with pytest.raises(KeyError):
            FilteredResourcesCounter().count("missing")

    def test_reregistering_resets(self, ctx) -> None:
        counter = FilteredResourcesCounter()
        old = counter.reporter("X")
        old(ctx, _resource())
        old(ctx, _resource())

        new = counter.reporter("X")
        assert counter.count("X") == 0
        new(ctx, _resource())
        assert counter.count("X") == 1

    def test_labels_are_independent(self, ctx) -> None:
        counter = FilteredResourcesCounter()
        a = counter.reporter("A")
        counter.reporter("B")
        a(ctx, _resource())

        assert counter.counts() == {"A": 1, "B": 0}
        assert counter.labels == ["A", "B"]
        assert "A" in counter
        assert "C" not in counter

    def test_counter_with_chain(self, ctx) -> None:
        counter = FilteredResourcesCounter()
        chain = filter_pipe(
            BlankLabelFilter(counter.reporter("Blank label")),
            BrowserTraversibleFilter(counter.reporter("Not traversible")),
        )
        for r in [
            _resource(label=""),
            _resource(uri="mailto:a@b.c", label=""),
            _resource(uri="mailto:a@b.c"),
            _resource(),
        ]:
            chain.retain_original(ctx, r)

        assert counter.count("Blank label") == 2
        assert counter.count("Not traversible") == 1
