"""CLI for the Kamusi dictionary using Typer."""

from enum import Enum
from typing import Annotated, Optional

import typer

from kamusi import __version__
from kamusi.logging import configure_logging

from .commands import db, lookup, missing
from .console import console
from .state import CliState


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log format options."""

    CONSOLE = "console"
    JSON = "json"


app = typer.Typer(
    name="km",
    help="KAMUSI YA KISWAHILI : MAANA YA MANENO YA KISWAHILI",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("s", help="Search for a word | Tafuta neno")(lookup.search)
app.command("search", hidden=True)(lookup.search)
app.command("many")(lookup.many)
app.command("fuzzy")(lookup.fuzzy)
app.command("f", hidden=True)(lookup.fuzzy)
app.command("missing")(missing.missing)
app.command("m", hidden=True)(missing.missing)
app.add_typer(db.app, name="db", help="Database management")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"km, version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Logging level (default: KAMUSI_LOG_LEVEL or WARNING)"),
    ] = None,
    log_format: Annotated[
        Optional[LogFormat],
        typer.Option("--log-format", help="Log format"),
    ] = None,
) -> None:
    """
    KAMUSI YA KISWAHILI : MAANA YA MANENO YA KISWAHILI

    CLI to search word meanings.
    """
    configure_logging(
        level=log_level.value if log_level else None,
        format=log_format.value if log_format else None,
        force=True,
    )

    state = CliState()
    ctx.obj = state
    ctx.call_on_close(state.close)


def cli_main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
