"""Missing-word report."""

from typing import Annotated

import typer

from kamusi.errors import KamusiError

from ..console import console
from ..state import CliState
from ..ui import create_missing_words_table, render_error_panel


def missing(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Number of missing words to display"),
    ] = 10,
) -> None:
    """Show missing words | Onyesha maneno yaliyokosekana.

    Display the most frequently searched words that were not found in the dictionary.
    """
    state: CliState = ctx.obj

    try:
        records = state.service.get_missing_words(limit)
    except KamusiError as e:
        render_error_panel("Database Error", e.message)
        raise typer.Exit(1)

    if not records:
        console.print("Hakuna maneno yaliyokosekana | No missing words recorded yet.")
        return

    console.print(create_missing_words_table(records))
