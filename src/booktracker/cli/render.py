"""
Console rendering for catalog results.

Record listings are Rich tables; the banner and statistics block are plain
fixed-format text so they stay stable for scripts that scrape them.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..domain.entities import Book
from ..shared.types import OperationKind
from ..usecases.operation_dispatch import OperationResult, RunStats

NO_RESULTS = "No results found."
FAREWELL = "Thank you for using the Library Book Tracker."


def banner(kind: OperationKind, token: str) -> str:
    if kind is OperationKind.ISBN_SEARCH:
        return f"=== ISBN Search: {token} ==="
    if kind is OperationKind.TITLE_SEARCH:
        return f'=== Title Search: "{token}" ==='
    return "=== Book Added ==="


def render_books(books: Sequence[Book], console: Console | None = None) -> None:
    """Print books as a Title/Author/ISBN/Copies table."""
    console = console or Console()
    table = Table()
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("ISBN", style="cyan")
    table.add_column("Copies", style="yellow", justify="right")
    for book in books:
        table.add_row(escape(book.title), escape(book.author), book.isbn, str(book.copies))
    console.print(table)


def render_stats(stats: RunStats) -> None:
    typer.echo()
    typer.echo("=== Statistics ===")
    typer.echo(f"Valid records processed : {stats.records_loaded}")
    typer.echo(f"Search results          : {stats.search_results}")
    typer.echo(f"Books added             : {stats.books_added}")
    typer.echo(f"Errors encountered      : {stats.errors}")


def render_result(result: OperationResult) -> None:
    """Human-readable output for a completed operation."""
    if result.kind is OperationKind.ADD and result.error is not None:
        typer.echo(f"Error: {result.error}", err=True)
    else:
        typer.echo()
        typer.echo(banner(result.kind, result.token))
        if result.books:
            render_books(result.books)
        else:
            typer.echo(NO_RESULTS)
    render_stats(result.stats)


def render_json(result: OperationResult) -> None:
    status = "error" if result.error is not None else "ok"
    typer.echo(json.dumps({"status": status, **result.to_dict()}, indent=2))
