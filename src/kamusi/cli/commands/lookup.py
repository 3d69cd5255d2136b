"""Word lookup commands."""

from typing import Annotated

import typer
from rich.markup import escape

from kamusi.errors import KamusiError, WordNotFoundError

from ..console import console
from ..state import CliState
from ..ui import create_entries_table, render_error_panel

SUGGESTION_LIMIT = 5


def search(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="Word to look up")],
    details: Annotated[
        bool,
        typer.Option("--details", "-d", help="Also show synonyms and conjugation"),
    ] = False,
) -> None:
    """Search for a word | Tafuta neno."""
    state: CliState = ctx.obj

    try:
        service = state.service
        entry = service.search(word)
    except WordNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        _print_suggestions(state, word)
        raise typer.Exit(1)
    except KamusiError as e:
        render_error_panel("Database Error", e.message)
        raise typer.Exit(1)

    console.print(f"Maana yake: {escape(entry.meaning)}")

    if details:
        if entry.synonyms is not None:
            console.print(f"Visawe | Synonyms: {escape(entry.synonyms)}")
        if entry.conjugation is not None:
            console.print(f"Mnyambuliko | Conjugation: {escape(entry.conjugation)}")


def _print_suggestions(state: CliState, word: str) -> None:
    try:
        matches = state.service.fuzzy_search(word, SUGGESTION_LIMIT)
    except KamusiError:
        return

    if matches:
        words = ", ".join(escape(entry.word) for entry in matches)
        console.print(f"[yellow]Je, ulimaanisha | Did you mean:[/yellow] {words}")


def many(
    ctx: typer.Context,
    words: Annotated[list[str], typer.Argument(help="Words to look up")],
) -> None:
    """Look up several words at once."""
    state: CliState = ctx.obj

    try:
        results = state.service.search_multiple(words)
    except KamusiError as e:
        render_error_panel("Database Error", e.message)
        raise typer.Exit(1)

    rows = [(word, results.get(word)) for word in dict.fromkeys(words)]
    console.print(create_entries_table("Matokeo | Results", rows))

    found = sum(1 for _, entry in rows if entry is not None)
    console.print(f"\n[dim]{found} of {len(rows)} found[/dim]")


def fuzzy(
    ctx: typer.Context,
    term: Annotated[str, typer.Argument(help="Part of a word")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Max matches to show"),
    ] = 10,
) -> None:
    """Find words containing a term."""
    state: CliState = ctx.obj

    try:
        matches = state.service.fuzzy_search(term, limit)
    except KamusiError as e:
        render_error_panel("Database Error", e.message)
        raise typer.Exit(1)

    if not matches:
        console.print(f"[yellow]Hakuna maneno yenye '{escape(term)}' | No words contain '{escape(term)}'[/yellow]")
        return

    console.print(create_entries_table(f"Maneno yenye | Words containing '{escape(term)}'", [(entry.word, entry) for entry in matches]))
