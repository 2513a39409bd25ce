from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from app.config import configure_logging, load_settings
from app.paper_wiring import PaperContext, build_paper_context
from domain.models import DecoType, DeviceProfile
from domain.placement import (
    Conflict,
    MessageDeleteForbiddenError,
    MessageNotFoundError,
    OutOfBounds,
    Placed,
    ValidationError,
)

app = typer.Typer(no_args_is_help=True)
console = Console()

ConfigOption = typer.Option(None, "--config", help="YAML settings file.")


def _context(config: Path | None) -> PaperContext:
    settings = load_settings(config)
    configure_logging(settings)
    return build_paper_context(settings)


@app.command("place")
def place(
    owner_id: int = typer.Argument(..., help="Board owner member id."),
    x: int = typer.Argument(..., help="Absolute column, 0-11."),
    y: int = typer.Argument(..., help="Absolute row, 0-9."),
    content: str = typer.Option(..., help="Message text, up to 255 characters."),
    nickname: str = typer.Option(..., help="Anonymous nickname, up to 8 characters."),
    deco: DecoType = typer.Option(DecoType.POTATO, help="Decoration type."),
    config: Path | None = ConfigOption,
) -> None:
    context = _context(config)
    result = context.placement.place(owner_id, x, y, content, nickname, deco)
    if isinstance(result, Placed):
        console.print(f"[green]Placed[/] message {result.message.id} at ({x}, {y})")
        return
    if isinstance(result, Conflict):
        console.print(f"[yellow]Slot ({x}, {y}) is taken.[/]")
        if result.suggestions:
            options = ", ".join(f"({slot.x}, {slot.y})" for slot in result.suggestions)
            console.print(f"Free nearby: {options}")
        else:
            console.print("The board is full.")
        raise typer.Exit(code=2)
    if isinstance(result, OutOfBounds):
        console.print(f"[red]Out of bounds:[/] {result.reason}")
    elif isinstance(result, ValidationError):
        console.print(f"[red]Invalid {result.field}:[/] {result.reason}")
    raise typer.Exit(code=1)


@app.command("suggest")
def suggest(
    owner_id: int = typer.Argument(..., help="Board owner member id."),
    x: int = typer.Argument(...),
    y: int = typer.Argument(...),
    limit: int = typer.Option(3, min=0, help="Maximum number of suggestions."),
    config: Path | None = ConfigOption,
) -> None:
    context = _context(config)
    suggestions = context.placement.suggest(owner_id, x, y, limit)
    if not suggestions:
        console.print("[yellow]No free slots.[/]")
        return
    for slot in suggestions:
        console.print(f"({slot.x}, {slot.y})")


@app.command("board")
def board(
    owner_id: int = typer.Argument(..., help="Board owner member id."),
    profile: DeviceProfile = typer.Option(DeviceProfile.DESKTOP, help="Device profile."),
    page: int = typer.Option(1, min=1, help="1-based page number."),
    config: Path | None = ConfigOption,
) -> None:
    context = _context(config)
    layout = context.reader.page_layout(owner_id, page, profile)
    if layout is None:
        console.print(f"[red]Page {page} does not exist for {profile.value}.[/]")
        raise typer.Exit(code=1)

    table = Table(title=f"Board {owner_id} - page {page}/{layout.page_count} ({profile.value})")
    table.add_column("row", justify="right")
    for col in range(layout.columns):
        table.add_column(str(col), justify="center")
    rows: dict[int, list[str]] = {}
    for cell in layout.cells:
        label = cell.message.deco_type.value[:3] if cell.message else "."
        rows.setdefault(cell.row, []).append(label)
    for row, labels in sorted(rows.items()):
        table.add_row(str(row), *labels)
    console.print(table)


@app.command("delete")
def delete(
    member_id: int = typer.Argument(..., help="Member deleting from their own board."),
    message_id: int = typer.Argument(...),
    config: Path | None = ConfigOption,
) -> None:
    context = _context(config)
    try:
        message = context.placement.delete_message(member_id, message_id)
    except (MessageNotFoundError, MessageDeleteForbiddenError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Deleted[/] message {message.id} at ({message.x}, {message.y})")


if __name__ == "__main__":
    app()
