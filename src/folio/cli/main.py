"""Main Typer application for Folio."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.cli.errorhandler import handle_cli_errors
from folio.config import FolioConfig
from folio.content.catalog import ContentLibrary
from folio.content.labels import type_label
from folio.exceptions import ContentError, RenderError
from folio.explorer.engine import Explorer
from folio.explorer.types import ALL_TYPES, SortMode
from folio.logging_setup import configure_logging
from folio.rendering.mdx import MdxRenderer, render_body

app = typer.Typer(
    name="folio",
    help="Browse, validate and export portfolio content",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CliState:
    config: FolioConfig
    debug: bool

    @property
    def library(self) -> ContentLibrary:
        return ContentLibrary.from_config(self.config)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    site_root: Annotated[
        Path | None,
        typer.Option("--site-root", "-r", help="Site directory holding content/ and .folio.toml"),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks")] = False,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Override FOLIO_LOG_LEVEL")] = None,
) -> None:
    """Load configuration shared by every command."""
    configure_logging(log_level)
    with handle_cli_errors(debug=debug):
        ctx.obj = CliState(config=FolioConfig.load(site_root), debug=debug)


@app.command()
def collections(ctx: typer.Context) -> None:
    """List the content collections and how many items each holds."""
    state = _state(ctx)
    table = Table(title="Collections")
    table.add_column("Name", style="cyan")
    table.add_column("Items", justify="right")
    table.add_column("Required fields")

    for name, catalog in state.library.catalogs.items():
        try:
            count = str(len(catalog.slugs()))
        except ContentError as exc:
            logger.debug("Collection %s unavailable: %s", name, exc)
            count = "-"
        table.add_row(name, count, ", ".join(catalog.required_fields))
    console.print(table)


@app.command("list")
def list_items(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection name, e.g. projects or blog")],
) -> None:
    """List a collection's items, newest first."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        catalog = state.library.get(collection)
        items = catalog.get_all()

    table = Table(title=f"{collection} ({len(items)})")
    table.add_column("Date")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    for item in items:
        table.add_row(item.frontmatter.date, item.slug, escape(item.frontmatter.title))
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection name")],
    slug: Annotated[str, typer.Argument(help="Item slug")],
    html: Annotated[bool, typer.Option("--html", help="Render the body to HTML")] = False,
) -> None:
    """Print one item's frontmatter and body."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        item = state.library.get(collection).get_by_slug(slug)
        body = render_body(item.content) if html else item.content

    frontmatter = item.frontmatter.model_dump(mode="json", exclude_none=True)
    typer.echo(json.dumps({"slug": item.slug, "frontmatter": frontmatter}, indent=2, ensure_ascii=False))
    typer.echo("")
    typer.echo(body)


@app.command()
def explore(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection name")],
    query: Annotated[str, typer.Option("--query", "-q", help="Fuzzy search text")] = "",
    type_: Annotated[str, typer.Option("--type", "-t", help="Only items of this type")] = ALL_TYPES,
    sort: Annotated[SortMode | None, typer.Option("--sort", "-s", help="newest or oldest")] = None,
) -> None:
    """Search, filter and sort a collection the way the site explorer does."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        items = state.library.get(collection).explorer_items()

    explorer = Explorer(
        items,
        default_sort=state.config.explorer.default_sort,
        threshold=state.config.explorer.threshold,
    )
    explorer.set_query(query)
    explorer.select_type(type_)
    if sort is not None:
        explorer.set_sort(sort)

    view = explorer.view()
    table = Table(title=view.summary)
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Link", style="cyan")
    for item in view.items:
        table.add_row(
            item.date or "",
            type_label(item.type) if item.type else "",
            escape(item.title),
            item.href,
        )
    console.print(table)


@app.command()
def export(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection name")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write JSON here instead of stdout")] = None,
) -> None:
    """Export a collection's explorer items as JSON for the browser."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        items = state.library.get(collection).explorer_items()

    payload = json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    logger.info("Wrote %d %s items to %s", len(items), collection, output)


@app.command()
def check(ctx: typer.Context) -> None:
    """Validate every item of every collection and report all problems."""
    state = _state(ctx)
    renderer = MdxRenderer()
    failures = 0
    for name, catalog in state.library.catalogs.items():
        try:
            slugs = catalog.slugs()
        except ContentError as exc:
            failures += 1
            console.print(f"[red]✗[/red] {escape(str(exc))}", highlight=False)
            continue
        for slug in slugs:
            try:
                renderer.validate(catalog.get_by_slug(slug).content)
            except ContentError as exc:
                failures += 1
                console.print(f"[red]✗[/red] {escape(str(exc))}", highlight=False)
            except RenderError as exc:
                failures += 1
                console.print(f"[red]✗[/red] {name}/{slug}: {escape(str(exc))}", highlight=False)
        console.print(f"[green]✓[/green] {name}: checked {len(slugs)} item(s)", highlight=False)

    if failures:
        console.print(f"[bold red]{failures} problem(s) found[/bold red]")
        raise typer.Exit(1)
    console.print("[bold green]All content is valid[/bold green]")
