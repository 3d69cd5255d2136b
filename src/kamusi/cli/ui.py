"""Rich UI components for panels and tables."""

from typing import Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kamusi.app.models import DictionaryEntry, MissingWord

from .console import console

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def render_error_panel(title: str, message: str, details: list[str] | None = None) -> None:
    """Render error panel."""
    lines = [escape(message)]

    if details:
        lines.append("")
        for detail in details:
            lines.append(f"  • {escape(detail)}")

    panel = Panel("\n".join(lines), title=title, border_style="red")
    console.print(panel)


def render_info_panel(title: str, message: str | None = None, content: dict[str, Any] | None = None) -> None:
    """Render informational panel."""
    lines = []

    if message:
        lines.append(message)

    if content:
        for key, value in content.items():
            display_key = key.replace("_", " ").title()
            lines.append(f"{display_key}: {escape(str(value))}")

    panel = Panel("\n".join(lines), title=title, border_style="cyan")
    console.print(panel)


def create_missing_words_table(missing: list[MissingWord]) -> Table:
    """
    Create a table of missing words.

    Args:
        missing: Records ordered by search count

    Returns:
        Rich Table ready for display
    """
    table = Table(title="Maneno yaliyotafutwa lakini hayakupatikana | Words searched but not found")
    table.add_column("NENO | WORD", style="cyan")
    table.add_column("IDADI | COUNT", justify="right")
    table.add_column("MUDA | LAST SEARCHED")

    for item in missing:
        last = item.last_searched_at.strftime(TIMESTAMP_FORMAT) if item.last_searched_at else "-"
        table.add_row(escape(item.word), str(item.search_count), last)

    return table


def create_entries_table(title: str, rows: list[tuple[str, DictionaryEntry | None]]) -> Table:
    """Create a word/meaning table; a None entry renders as a dash."""
    table = Table(title=title)
    table.add_column("NENO | WORD", style="cyan")
    table.add_column("MAANA | MEANING")

    for word, entry in rows:
        meaning = escape(entry.meaning) if entry is not None else "[dim]-[/dim]"
        table.add_row(escape(word), meaning)

    return table
