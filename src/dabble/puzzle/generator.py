"""Daily puzzle assembly: date string in, board and rack out.

One ``SeededRandom`` keyed on the date drives the shape, then the
bonuses, then the letters. The order of draws is part of the puzzle's
identity; changing it changes every day's puzzle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from dabble.config import GameConfig
from dabble.core.seed import SeededRandom
from dabble.puzzle.board import Board
from dabble.puzzle.bonuses import place_bonuses
from dabble.puzzle.letters import draw_letters
from dabble.puzzle.shape import generate_board_shape

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class DailyPuzzle:
    date: str  # YYYY-MM-DD
    board: Board
    letters: tuple[str, ...]
    seed: int

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "seed": self.seed,
            "letters": list(self.letters),
            "board": self.board.to_dict(),
        }


def today_date_string() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).strftime(DATE_FORMAT)


def date_to_seed(date_string: str) -> int:
    """Milliseconds since the Unix epoch at UTC midnight of ``date_string``.

    Raises ValueError for anything that is not a real YYYY-MM-DD date.
    """
    parsed = datetime.strptime(date_string, DATE_FORMAT).replace(tzinfo=timezone.utc)
    if parsed.strftime(DATE_FORMAT) != date_string:
        # strptime accepts "2025-1-5"; the seed string must be canonical
        raise ValueError(f"date must be zero-padded YYYY-MM-DD, got {date_string!r}")
    return int(parsed.timestamp()) * 1000


def generate_board(rng: SeededRandom, config: GameConfig) -> Board:
    playable = generate_board_shape(rng, config.board)
    bonuses = place_bonuses(rng, playable, config.board)
    return Board.build(playable, bonuses)


def generate_daily_puzzle(
    date_string: str | None = None, config: GameConfig | None = None
) -> DailyPuzzle:
    """Generate the puzzle for ``date_string`` (default: today, UTC)."""
    config = config or GameConfig()
    config.validate()
    day = date_string or today_date_string()
    seed = date_to_seed(day)

    rng = SeededRandom(day)
    board = generate_board(rng, config)
    letters = draw_letters(rng, config.letters)
    logger.debug(
        "puzzle %s: %d playable cells, letters=%s, %d draws",
        day,
        sum(1 for cell in board if cell.is_playable),
        "".join(letters),
        rng.draws,
    )
    return DailyPuzzle(date=day, board=board, letters=letters, seed=seed)


def get_puzzle_for_date(
    date_string: str | date, config: GameConfig | None = None
) -> DailyPuzzle:
    """Puzzle for an explicit date (string or ``datetime.date``)."""
    if isinstance(date_string, date):
        date_string = date_string.strftime(DATE_FORMAT)
    return generate_daily_puzzle(date_string, config)
