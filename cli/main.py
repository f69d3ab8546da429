"""Uniform resources CLI: entry-point for anchor discovery and supply.

Usage:
    python cli/main.py --help

Commands:
    anchors  → list the raw anchors of a page, HTML file or e-mail body
    supply   → run anchors through the filter/transform pipeline
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from uniform_resources.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import logging
from typing import Optional

import httpx
import typer

from uniform_resources.config import settings
from uniform_resources.scraper.content import EmailBodyDecodeError, HtmlContent
from uniform_resources.scraper.fetcher import NotHtmlContentError, fetch_url
from uniform_resources.supplier import (
    BlankLabelFilter,
    BrowserTraversibleFilter,
    EmailMessageResourcesSupplier,
    FilteredResourcesCounter,
    HtmlContentResourcesSupplier,
    Resource,
    ResourceContext,
    all_transformation_remarks,
    filter_pipe,
    is_transformed,
)
from uniform_resources.transform import (
    FollowRedirects,
    RemoveLabelLineBreaksAndTrimSpaces,
    RemoveTrackingCodesFromUrl,
    TransformerStep,
    pipe,
)

app = typer.Typer(
    name="resources",
    help="Uniform resources CLI.",
    no_args_is_help=True,
)

BLANK_LABEL = "Blank label"
NOT_TRAVERSIBLE = "Not traversible"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_content(
    url: Optional[str],
    file: Optional[Path],
    email: Optional[Path],
) -> HtmlContent:
    """Build the content source from exactly one of *url*, *file*, *email*."""
    given = [x for x in (url, file, email) if x is not None]
    if len(given) != 1:
        typer.echo("❌ Give exactly one of --url, --file or --email.")
        raise typer.Exit(code=1)

    try:
        if url is not None:
            return HtmlContent.from_page(fetch_url(url))
        elif file is not None:
            return HtmlContent(f"file:{file}", file.read_text(encoding="utf-8"))
        else:
            return HtmlContent.from_base64(f"email:{email}", email.read_bytes())
    except (httpx.HTTPError, NotHtmlContentError, EmailBodyDecodeError, OSError) as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)


def _describe(resource: Resource) -> str:
    if is_transformed(resource):
        remarks = " | ".join(all_transformation_remarks(resource))
        return f"[{resource.label}] {remarks} ({resource.pipe_position}) {resource.uri}"
    return f"[{resource.label}] no transformations {resource.uri}"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("anchors")
def anchors(
    url: Optional[str] = typer.Option(None, help="URL of an HTML page."),
    file: Optional[Path] = typer.Option(None, help="Local HTML file."),
    email: Optional[Path] = typer.Option(None, help="File holding a base64 e-mail body."),
) -> None:
    """List every anchor in the content, unfiltered, in document order."""
    content = _load_content(url, file, email)
    found = content.anchors()
    typer.echo(f"[anchors] {len(found)} anchor(s) in {content.uri}")
    for a in found:
        typer.echo(f"  [{a.label}] {a.href}")


@app.command("supply")
def supply(
    url: Optional[str] = typer.Option(None, help="URL of an HTML page."),
    file: Optional[Path] = typer.Option(None, help="Local HTML file."),
    email: Optional[Path] = typer.Option(None, help="File holding a base64 e-mail body."),
    transform: bool = typer.Option(True, help="Run the transformer pipeline."),
    follow_redirects: bool = typer.Option(
        False, help="Resolve redirects (one request per resource)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Filter and transform every anchor, printing the retained resources."""
    _configure_logging(verbose)
    content = _load_content(url, file, email)

    counter = FilteredResourcesCounter()
    resource_filter = filter_pipe(
        BlankLabelFilter(counter.reporter(BLANK_LABEL)),
        BrowserTraversibleFilter(counter.reporter(NOT_TRAVERSIBLE)),
    )

    transformer = None
    if transform:
        steps: list[TransformerStep] = [RemoveLabelLineBreaksAndTrimSpaces()]
        if follow_redirects:
            steps.append(FollowRedirects())
        steps.append(RemoveTrackingCodesFromUrl())
        transformer = pipe(*steps)

    supplier_class = (
        EmailMessageResourcesSupplier if email is not None else HtmlContentResourcesSupplier
    )
    supplier = supplier_class(
        content,
        content.uri,
        filter=resource_filter,
        transformer=transformer,
    )

    def consume(resource: Resource) -> None:
        typer.echo(f"  {_describe(resource)}")

    async def run() -> int:
        async with httpx.AsyncClient(
            headers=settings.default_headers,
            timeout=settings.request_timeout,
            max_redirects=settings.max_redirects,
        ) as client:
            return await supplier.for_each_resource(ResourceContext(http_client=client), consume)

    typer.echo(f"[supply] {supplier.provenance.kind} {supplier.provenance.urn}")
    try:
        emitted = asyncio.run(run())
    except httpx.HTTPError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    typer.echo(f"[supply] Retained : {emitted}")
    for label, removed in counter.counts().items():
        typer.echo(f"[supply] {label:<16}: {removed} removed")


if __name__ == "__main__":
    app()
