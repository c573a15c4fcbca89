"""Shared test fixtures for dabble."""

import pytest

from dabble.game.dictionary import WordDictionary
from dabble.puzzle.board import Board, BonusType

WORDS = [
    "AT", "TO", "ON", "AN", "CAT", "CATS", "BAT", "TAB", "ACT", "DOG",
]


def make_board(size=9, dead=(), bonuses=None):
    """Open board with START at the center plus optional dead cells/bonuses."""
    playable = [[True] * size for _ in range(size)]
    for r, c in dead:
        playable[r][c] = False
    grid = [[None] * size for _ in range(size)]
    mid = size // 2
    grid[mid][mid] = BonusType.START
    for (r, c), bonus in (bonuses or {}).items():
        grid[r][c] = bonus
    return Board.build(playable, grid)


@pytest.fixture
def empty_board():
    return make_board()


@pytest.fixture
def words():
    return WordDictionary.from_words(WORDS)


@pytest.fixture
def board_factory():
    return make_board
