"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from folio.exceptions import (
    CollectionDirectoryNotFoundError,
    ConfigError,
    ContentItemNotFoundError,
    FolioError,
    FrontmatterValidationError,
    RenderError,
)

console = Console(stderr=True)


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Turn Folio errors into a one-line message and exit status 1.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except ContentItemNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Not found:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except CollectionDirectoryNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Missing content directory:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except FrontmatterValidationError as e:
        if debug:
            raise
        console.print(f"[bold red]Invalid frontmatter:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except RenderError as e:
        if debug:
            raise
        console.print(f"[bold red]Render failed:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}", highlight=False)
        for err in e.errors:
            console.print(f"  - {err.get('loc', '')}: {err.get('msg', err)}", highlight=False)
        raise typer.Exit(1) from e
    except FolioError as e:
        if debug:
            raise
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
