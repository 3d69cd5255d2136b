"""Database management commands."""

import typer

from kamusi.errors import KamusiError

from ..state import CliState
from ..ui import render_error_panel, render_info_panel

app = typer.Typer(no_args_is_help=True)


@app.command("init")
def init_db_command(ctx: typer.Context) -> None:
    """Create the schema if it does not exist (never drops data)."""
    state: CliState = ctx.obj

    try:
        state.store.init_schema()
    except KamusiError as e:
        render_error_panel("Initialization Error", e.message)
        raise typer.Exit(1)

    render_info_panel(
        title="Database Initialized",
        message="Schema tables created successfully",
        content={"path": state.store.path},
    )


@app.command("info")
def info_command(ctx: typer.Context) -> None:
    """Show where the store lives and what it holds."""
    state: CliState = ctx.obj

    try:
        counts = state.service.store.table_counts()
    except KamusiError as e:
        render_error_panel("Database Error", e.message)
        raise typer.Exit(1)

    content = {"path": state.store.path}
    content.update({f"{table}_rows": count for table, count in counts.items()})
    content.update({f"pool_{key}": value for key, value in state.store.stats().items()})

    render_info_panel(title="Database", content=content)
