"""Rich renderables for boards, racks and placement results."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dabble.game.placement import PlacementResult
from dabble.puzzle.board import Board, BonusType, Cell
from dabble.puzzle.generator import DailyPuzzle

BONUS_STYLES: dict[BonusType, tuple[str, str]] = {
    BonusType.DL: ("DL", "bold white on dodger_blue2"),
    BonusType.TL: ("TL", "bold white on blue"),
    BonusType.DW: ("DW", "bold white on deep_pink3"),
    BonusType.TW: ("TW", "bold white on dark_orange3"),
    BonusType.START: (" *", "bold black on gold1"),
}


def format_cell(cell: Cell) -> Text:
    if not cell.is_playable:
        return Text("  ", style="on grey11")
    if cell.letter is not None:
        return Text(f" {cell.letter}", style="bold black on wheat1")
    if cell.bonus is not None:
        label, style = BONUS_STYLES[cell.bonus]
        return Text(label, style=style)
    return Text(" .", style="dim")


def build_board_table(board: Board) -> Table:
    table = Table(show_header=False, show_edge=False, pad_edge=False, padding=0)
    for _ in range(board.size):
        table.add_column(width=3, no_wrap=True)
    for row in board.cells:
        table.add_row(*(format_cell(cell) for cell in row))
    return table


def format_rack(letters: tuple[str, ...] | list[str]) -> Text:
    text = Text()
    for letter in letters:
        text.append(f" {letter} ", style="bold black on wheat1")
        text.append(" ")
    return text


def build_puzzle_panel(puzzle: DailyPuzzle, board: Board | None = None) -> Panel:
    rack = Text("\nRack: ", style="dim")
    rack.append_text(format_rack(puzzle.letters))
    content = Group(build_board_table(board or puzzle.board), rack)
    return Panel(
        content,
        title=f"[bold]Dabble {puzzle.date}[/bold]",
        border_style="green",
        padding=(0, 1),
        expand=False,
    )


def format_result(result: PlacementResult) -> Text:
    if not result.valid:
        return Text(f"Rejected: {result.error}", style="bold red")
    text = Text()
    for word in result.words:
        text.append(f"{word.word}", style="bold")
        text.append(f" +{word.score}  ", style="green")
    text.append(f"(total +{result.total_score})", style="bold green")
    return text
