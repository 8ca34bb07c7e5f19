"""
Main CLI application using Typer.

    booktracker CATALOG_FILE OPERATION [--json]

OPERATION is classified by shape: a 13-digit ISBN searches by ISBN, a
``title:author:isbn:copies`` record is added, anything else is a title
keyword search.
"""

from __future__ import annotations

import typer

from ..infra.exceptions import DuplicateISBNError, StartupError
from ..infra.logging import configure_logging
from ..usecases.operation_dispatch import OperationDispatcher
from .render import FAREWELL, render_json, render_result

app = typer.Typer(
    name="booktracker",
    help="Search and extend a flat-file library book catalog.",
    add_completion=False,
)


@app.command()
def track(
    catalog_file: str | None = typer.Argument(
        None, help="Catalog file, one title:author:isbn:copies record per line (*.txt)"
    ),
    operation: str | None = typer.Argument(
        None, help="13-digit ISBN, title keyword, or a title:author:isbn:copies record to add"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """
    Search the catalog by ISBN or title, or add a new book record.

    Examples:

        booktracker books.txt 9780441013593

        booktracker books.txt dune

        booktracker books.txt "Foundation:Isaac Asimov:9780553293357:5"
    """
    configure_logging()
    dispatcher = OperationDispatcher()
    try:
        result = dispatcher.run([catalog_file, operation])
        if json_output:
            render_json(result)
        else:
            render_result(result)
    except (StartupError, DuplicateISBNError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"Unexpected error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        typer.echo(FAREWELL, err=json_output)


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
