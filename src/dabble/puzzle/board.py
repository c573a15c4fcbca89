"""Dabble board: an N×N grid of cells with dead space and bonus squares."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator

from dabble.config import LETTER_POINTS

NEIGHBOR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class BonusType(Enum):
    DL = "DL"
    TL = "TL"
    DW = "DW"
    TW = "TW"
    START = "START"  # acts as double word the first time it is covered

    @property
    def letter_multiplier(self) -> int:
        return _MULTIPLIERS[self][0]

    @property
    def word_multiplier(self) -> int:
        return _MULTIPLIERS[self][1]


_MULTIPLIERS: dict[BonusType, tuple[int, int]] = {
    BonusType.DL: (2, 1),
    BonusType.TL: (3, 1),
    BonusType.DW: (1, 2),
    BonusType.TW: (1, 3),
    BonusType.START: (1, 2),
}

_ASCII_LABELS: dict[BonusType, str] = {
    BonusType.DL: "2L",
    BonusType.TL: "3L",
    BonusType.DW: "2W",
    BonusType.TW: "3W",
    BonusType.START: " *",
}


def tile_value(letter: str) -> int:
    """Point value of a letter. Unknown characters are 0."""
    return LETTER_POINTS.get(letter.upper(), 0)


@dataclass(frozen=True)
class PlacedTile:
    """A tentative letter placement, not yet part of the board."""

    row: int
    col: int
    letter: str


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    bonus: BonusType | None = None
    is_playable: bool = True  # False = dead space
    letter: str | None = None
    is_locked: bool = False  # True = part of a previously accepted word

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "bonus": self.bonus.value if self.bonus else None,
            "is_playable": self.is_playable,
            "letter": self.letter,
            "is_locked": self.is_locked,
        }


@dataclass(frozen=True)
class Board:
    """Immutable square grid of cells.

    ``with_tiles`` is the only way to get a board with letters on it; it
    returns a new value and leaves this one untouched.
    """

    cells: tuple[tuple[Cell, ...], ...]
    size: int

    @classmethod
    def build(
        cls,
        playable: list[list[bool]],
        bonuses: list[list[BonusType | None]],
    ) -> Board:
        """Assemble an empty board from a playable mask and bonus grid."""
        size = len(playable)
        cells = tuple(
            tuple(
                Cell(
                    row=r,
                    col=c,
                    bonus=bonuses[r][c] if playable[r][c] else None,
                    is_playable=playable[r][c],
                )
                for c in range(size)
            )
            for r in range(size)
        )
        return cls(cells=cells, size=size)

    @property
    def center(self) -> tuple[int, int]:
        mid = self.size // 2
        return (mid, mid)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Cell | None:
        """Cell at (row, col), or None when off the board."""
        if self.in_bounds(row, col):
            return self.cells[row][col]
        return None

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def neighbors(self, row: int, col: int) -> list[tuple[int, int]]:
        return [
            (row + dr, col + dc)
            for dr, dc in NEIGHBOR_OFFSETS
            if self.in_bounds(row + dr, col + dc)
        ]

    @property
    def is_empty(self) -> bool:
        return all(cell.letter is None for cell in self)

    def start_cells(self) -> list[Cell]:
        return [cell for cell in self if cell.bonus is BonusType.START]

    def playable_mask(self) -> list[list[bool]]:
        return [[cell.is_playable for cell in row] for row in self.cells]

    def with_tiles(self, tiles: Iterable[PlacedTile]) -> Board:
        """Return a new board with ``tiles`` written in and locked."""
        rows = [list(row) for row in self.cells]
        for tile in tiles:
            rows[tile.row][tile.col] = replace(
                rows[tile.row][tile.col],
                letter=tile.letter.upper(),
                is_locked=True,
            )
        return Board(cells=tuple(tuple(row) for row in rows), size=self.size)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_ascii(self) -> str:
        """Render the board as plain text. ``#`` marks dead space."""
        col_hdr = "    " + "".join(f"{c:3d}" for c in range(self.size))
        lines = [col_hdr]
        for r, row in enumerate(self.cells):
            parts: list[str] = []
            for cell in row:
                if not cell.is_playable:
                    parts.append("  #")
                elif cell.letter is not None:
                    parts.append(f"  {cell.letter}")
                elif cell.bonus is not None:
                    parts.append(f" {_ASCII_LABELS[cell.bonus]}")
                else:
                    parts.append("  .")
            lines.append(f" {r:2d} " + "".join(parts))
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "cells": [[cell.to_dict() for cell in row] for row in self.cells],
        }
