"""Session state for one player's day: rack bookkeeping, board, score.

Everything here is a value. Each operation returns a new ``RackState``
or ``SessionState`` and leaves its inputs untouched, so callers thread
state through explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from dabble.config import GameConfig
from dabble.game.placement import (
    PlacementResult,
    Word,
    WordOracle,
    apply_placement,
    validate_placement,
)
from dabble.puzzle.board import Board, PlacedTile
from dabble.puzzle.generator import DailyPuzzle

logger = logging.getLogger(__name__)


class TileStatus(Enum):
    AVAILABLE = "available"
    PENDING = "pending"  # on the board, not yet submitted
    LOCKED = "locked"  # consumed by an accepted word


@dataclass(frozen=True)
class RackState:
    letters: tuple[str, ...]
    statuses: tuple[TileStatus, ...]
    # rack index -> where that letter is tentatively placed
    placements: tuple[tuple[int, PlacedTile], ...] = ()

    @classmethod
    def new(cls, letters: tuple[str, ...] | list[str]) -> RackState:
        letters = tuple(letters)
        return cls(letters=letters, statuses=(TileStatus.AVAILABLE,) * len(letters))

    def status(self, index: int) -> TileStatus:
        self._check_index(index)
        return self.statuses[index]

    def indices(self, status: TileStatus) -> list[int]:
        return [i for i, s in enumerate(self.statuses) if s is status]

    @property
    def pending_tiles(self) -> list[PlacedTile]:
        return [tile for _, tile in self.placements]

    @property
    def available_count(self) -> int:
        return len(self.indices(TileStatus.AVAILABLE))

    @property
    def all_locked(self) -> bool:
        return all(s is TileStatus.LOCKED for s in self.statuses)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.letters):
            raise ValueError(f"rack index {index} out of range")

    def _with_status(self, index: int, status: TileStatus) -> tuple[TileStatus, ...]:
        statuses = list(self.statuses)
        statuses[index] = status
        return tuple(statuses)


def place(rack: RackState, index: int, row: int, col: int) -> RackState:
    """Move an available rack letter onto (row, col) as a pending tile."""
    if rack.status(index) is not TileStatus.AVAILABLE:
        raise ValueError(f"rack letter {index} is not available")
    if any((t.row, t.col) == (row, col) for t in rack.pending_tiles):
        raise ValueError(f"a pending tile already sits on ({row}, {col})")
    tile = PlacedTile(row, col, rack.letters[index])
    return replace(
        rack,
        statuses=rack._with_status(index, TileStatus.PENDING),
        placements=rack.placements + ((index, tile),),
    )


def place_letter(rack: RackState, letter: str, row: int, col: int) -> RackState:
    """Place the first available copy of ``letter``."""
    letter = letter.upper()
    for i in rack.indices(TileStatus.AVAILABLE):
        if rack.letters[i] == letter:
            return place(rack, i, row, col)
    raise ValueError(f"no available {letter!r} in the rack")


def remove(rack: RackState, index: int) -> RackState:
    """Return a pending letter to the rack."""
    if rack.status(index) is not TileStatus.PENDING:
        raise ValueError(f"rack letter {index} is not pending")
    return replace(
        rack,
        statuses=rack._with_status(index, TileStatus.AVAILABLE),
        placements=tuple(p for p in rack.placements if p[0] != index),
    )


def remove_at(rack: RackState, row: int, col: int) -> RackState:
    """Return whichever pending letter sits on (row, col)."""
    for index, tile in rack.placements:
        if (tile.row, tile.col) == (row, col):
            return remove(rack, index)
    raise ValueError(f"no pending tile on ({row}, {col})")


def clear(rack: RackState) -> RackState:
    """Return every pending letter to the rack."""
    statuses = tuple(
        TileStatus.AVAILABLE if s is TileStatus.PENDING else s for s in rack.statuses
    )
    return replace(rack, statuses=statuses, placements=())


def lock_pending(rack: RackState) -> RackState:
    statuses = tuple(
        TileStatus.LOCKED if s is TileStatus.PENDING else s for s in rack.statuses
    )
    return replace(rack, statuses=statuses, placements=())


@dataclass(frozen=True)
class SessionState:
    puzzle: DailyPuzzle
    board: Board
    rack: RackState
    words: tuple[Word, ...] = ()
    total_score: int = 0
    all_letters_used: bool = False

    @classmethod
    def start(cls, puzzle: DailyPuzzle) -> SessionState:
        return cls(puzzle=puzzle, board=puzzle.board, rack=RackState.new(puzzle.letters))

    @property
    def is_first_word(self) -> bool:
        return not self.words

    def summary(self) -> dict:
        return {
            "date": self.puzzle.date,
            "words": [{"word": w.word, "score": w.score} for w in self.words],
            "total_score": self.total_score,
            "all_letters_used": self.all_letters_used,
        }


def submit(
    session: SessionState,
    is_valid_word: WordOracle,
    all_letters_bonus: int = GameConfig.all_letters_bonus,
) -> tuple[SessionState, PlacementResult]:
    """Validate the pending tiles and, if accepted, lock them in.

    A rejected submission returns the session unchanged (pending tiles
    stay where they are so the player can adjust them).
    """
    tiles = session.rack.pending_tiles
    result = validate_placement(
        session.board, tiles, session.is_first_word, is_valid_word
    )
    if not result.valid:
        return session, result

    rack = lock_pending(session.rack)
    bonus = 0
    if rack.all_locked and not session.all_letters_used:
        bonus = all_letters_bonus
        logger.info("All letters used on %s: +%d", session.puzzle.date, bonus)

    new_session = replace(
        session,
        board=apply_placement(session.board, tiles),
        rack=rack,
        words=session.words + result.words,
        total_score=session.total_score + result.total_score + bonus,
        all_letters_used=rack.all_locked,
    )
    return new_session, result
