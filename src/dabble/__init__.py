"""Dabble: a deterministic daily word-placement puzzle."""

__version__ = "0.1.0"

from dabble.game.placement import (  # noqa: E402
    PlacementResult,
    Word,
    apply_placement,
    validate_placement,
)
from dabble.puzzle.board import Board, BonusType, Cell, PlacedTile  # noqa: E402
from dabble.puzzle.generator import (  # noqa: E402
    DailyPuzzle,
    generate_daily_puzzle,
    get_puzzle_for_date,
)

__all__ = [
    "Board",
    "BonusType",
    "Cell",
    "DailyPuzzle",
    "PlacedTile",
    "PlacementResult",
    "Word",
    "apply_placement",
    "generate_daily_puzzle",
    "get_puzzle_for_date",
    "validate_placement",
]
