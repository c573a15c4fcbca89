"""Placement validation, word extraction and scoring.

``validate_placement`` never raises on caller data: every problem comes
back as ``PlacementResult(valid=False, error=...)`` with the first rule
that failed. ``apply_placement`` writes a validated placement into a new
board.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from dabble.config import LETTER_POINTS
from dabble.puzzle.board import Board, PlacedTile, tile_value

logger = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"

WordOracle = Callable[[str], bool]

_STEP = {HORIZONTAL: (0, 1), VERTICAL: (1, 0)}
_CROSS = {HORIZONTAL: VERTICAL, VERTICAL: HORIZONTAL}


@dataclass(frozen=True)
class Word:
    """A word formed by an accepted placement.

    ``tiles`` lists every letter of the word in reading order, including
    letters that were already locked on the board.
    """

    word: str
    tiles: tuple[PlacedTile, ...]
    score: int
    start_row: int
    start_col: int
    direction: str  # "horizontal" | "vertical"

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "score": self.score,
            "start_row": self.start_row,
            "start_col": self.start_col,
            "direction": self.direction,
            "tiles": [
                {"row": t.row, "col": t.col, "letter": t.letter} for t in self.tiles
            ],
        }


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of validating a placement against the board."""

    valid: bool
    words: tuple[Word, ...] = ()
    total_score: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "words": [w.to_dict() for w in self.words],
            "total_score": self.total_score,
            "error": self.error,
        }


def _reject(reason: str) -> PlacementResult:
    logger.debug("placement rejected: %s", reason)
    return PlacementResult(valid=False, error=reason)


# ----------------------------------------------------------------------
# Word extraction
# ----------------------------------------------------------------------

def _run_positions(
    letters: dict[tuple[int, int], str],
    row: int,
    col: int,
    direction: str,
) -> list[tuple[int, int]]:
    """Every lettered position in the contiguous run through (row, col)."""
    dr, dc = _STEP[direction]
    r, c = row, col
    while (r - dr, c - dc) in letters:
        r, c = r - dr, c - dc
    positions: list[tuple[int, int]] = []
    while (r, c) in letters:
        positions.append((r, c))
        r, c = r + dr, c + dc
    return positions


def score_word(
    board: Board,
    positions: Sequence[tuple[int, int]],
    letters: dict[tuple[int, int], str],
    new_positions: set[tuple[int, int]],
) -> int:
    """Scrabble scoring. Bonuses only count under newly placed tiles."""
    total = 0
    word_mult = 1
    for pos in positions:
        value = tile_value(letters[pos])
        if pos in new_positions:
            bonus = board.cells[pos[0]][pos[1]].bonus
            if bonus is not None:
                value *= bonus.letter_multiplier
                word_mult *= bonus.word_multiplier
        total += value
    return total * word_mult


def _make_word(
    board: Board,
    positions: list[tuple[int, int]],
    letters: dict[tuple[int, int], str],
    new_positions: set[tuple[int, int]],
    direction: str,
) -> Word:
    return Word(
        word="".join(letters[p] for p in positions),
        tiles=tuple(PlacedTile(r, c, letters[(r, c)]) for r, c in positions),
        score=score_word(board, positions, letters, new_positions),
        start_row=positions[0][0],
        start_col=positions[0][1],
        direction=direction,
    )


# ----------------------------------------------------------------------
# Validation
# ----------------------------------------------------------------------

def _check_tiles(board: Board, tiles: Sequence[PlacedTile]) -> str | None:
    # One pass per rule, so precedence does not depend on tile order
    for tile in tiles:
        r, c = tile.row, tile.col
        if not (isinstance(r, int) and isinstance(c, int)) or not board.in_bounds(r, c):
            return f"Tile at ({r}, {c}) is off the board"
        letter = tile.letter.upper() if isinstance(tile.letter, str) else ""
        if len(letter) != 1 or letter not in LETTER_POINTS:
            return f"Invalid letter {tile.letter!r} at ({r}, {c})"

    for tile in tiles:
        cell = board.cells[tile.row][tile.col]
        if not cell.is_playable:
            return f"Cannot place a tile on dead space at ({tile.row}, {tile.col})"
        if cell.is_locked or cell.letter is not None:
            return f"Cell ({tile.row}, {tile.col}) is already occupied"

    seen: set[tuple[int, int]] = set()
    for tile in tiles:
        if (tile.row, tile.col) in seen:
            return f"Two tiles placed on ({tile.row}, {tile.col})"
        seen.add((tile.row, tile.col))
    return None


def _placement_direction(
    tiles: Sequence[PlacedTile], letters: dict[tuple[int, int], str]
) -> str | None:
    rows = {t.row for t in tiles}
    cols = {t.col for t in tiles}
    if len(rows) == 1 and len(cols) > 1:
        return HORIZONTAL
    if len(cols) == 1 and len(rows) > 1:
        return VERTICAL
    if len(rows) > 1:
        return None
    # Single tile: take the axis along which it joins other letters
    tile = tiles[0]
    if len(_run_positions(letters, tile.row, tile.col, HORIZONTAL)) > 1:
        return HORIZONTAL
    if len(_run_positions(letters, tile.row, tile.col, VERTICAL)) > 1:
        return VERTICAL
    return HORIZONTAL


def _start_position(board: Board) -> tuple[int, int]:
    starts = board.start_cells()
    if starts:
        return (starts[0].row, starts[0].col)
    return board.center


def _touches_locked(board: Board, new_positions: Iterable[tuple[int, int]]) -> bool:
    for r, c in new_positions:
        for nr, nc in board.neighbors(r, c):
            if board.cells[nr][nc].is_locked:
                return True
    return False


def validate_placement(
    board: Board,
    tiles: Sequence[PlacedTile],
    is_first_word: bool,
    is_valid_word: WordOracle,
) -> PlacementResult:
    """Validate tentative ``tiles`` against ``board`` and score the words formed.

    Every word the placement forms (the run along the placement line and
    each perpendicular run of two or more letters through a new tile)
    must pass ``is_valid_word``; one illegal word rejects the whole
    placement.
    """
    if not tiles:
        return _reject("Place some tiles first")

    problem = _check_tiles(board, tiles)
    if problem is not None:
        return _reject(problem)

    tiles = [PlacedTile(t.row, t.col, t.letter.upper()) for t in tiles]
    new_positions = {(t.row, t.col) for t in tiles}
    letters: dict[tuple[int, int], str] = {
        (cell.row, cell.col): cell.letter for cell in board if cell.letter is not None
    }
    letters.update({(t.row, t.col): t.letter for t in tiles})

    direction = _placement_direction(tiles, letters)
    if direction is None:
        return _reject("Tiles must be placed in a single row or column")

    # Every cell between the first and last new tile must hold a letter
    dr, dc = _STEP[direction]
    first = min(new_positions)
    last = max(new_positions)
    r, c = first
    while (r, c) != (last[0] + dr, last[1] + dc):
        if (r, c) not in letters:
            return _reject("Tiles must form a continuous line with no gaps")
        r, c = r + dr, c + dc

    primary = _run_positions(letters, first[0], first[1], direction)

    if is_first_word:
        if _start_position(board) not in primary:
            return _reject("First word must cover the center star")
    else:
        extends_locked = any(p not in new_positions for p in primary)
        if not extends_locked and not _touches_locked(board, new_positions):
            return _reject("Word must connect to existing words")

    runs: list[tuple[list[tuple[int, int]], str]] = []
    if len(primary) >= 2:
        runs.append((primary, direction))
    cross = _CROSS[direction]
    for tile in tiles:
        positions = _run_positions(letters, tile.row, tile.col, cross)
        if len(positions) >= 2:
            runs.append((positions, cross))

    if not runs:
        return _reject("Words must be at least 2 letters")

    words = [
        _make_word(board, positions, letters, new_positions, run_dir)
        for positions, run_dir in runs
    ]
    for word in words:
        if not is_valid_word(word.word):
            return _reject(f"'{word.word}' is not a valid word")

    total = sum(w.score for w in words)
    return PlacementResult(valid=True, words=tuple(words), total_score=total)


def apply_placement(board: Board, tiles: Iterable[PlacedTile]) -> Board:
    """Return a new board with ``tiles`` locked in place.

    Call only after ``validate_placement`` accepted the same tiles.
    Raises ValueError if a target cell cannot take a letter.
    """
    tiles = list(tiles)
    for tile in tiles:
        cell = board.get(tile.row, tile.col)
        if cell is None or not cell.is_playable or cell.letter is not None:
            raise ValueError(
                f"cannot apply tile at ({tile.row}, {tile.col}): cell unavailable"
            )
    return board.with_tiles(tiles)
