"""Bonus square placement.

Categories are placed rarest first (TW, DW, TL, DL). Each pick scores
every legal candidate by how well its distance to the board edge matches
the category's edge preference, then samples among the best five with
weights decaying by 0.6 per rank, so the best cell is likely but not
certain. Picks come in rotated pairs when the board is symmetric.
"""

from __future__ import annotations

import logging
import math

from dabble.config import BONUS_ORDER, BoardConfig, BonusPlacementConfig
from dabble.core.seed import SeededRandom
from dabble.puzzle.board import BonusType
from dabble.puzzle.shape import (
    in_first_half,
    manhattan_from_center,
    neighbors,
    rotated,
)

logger = logging.getLogger(__name__)

_TOP_CANDIDATES = 5
_RANK_DECAY = 0.6

BonusGrid = list[list[BonusType | None]]


def edge_distance(row: int, col: int, size: int) -> int:
    """Steps to the nearest grid edge."""
    return min(row, size - 1 - row, col, size - 1 - col)


def score_position(row: int, col: int, size: int, edge_preference: float) -> float:
    """Blend of edge-closeness and center-closeness, weighted by preference."""
    max_edge = max(size // 2, 1)
    near_edge = 1 - edge_distance(row, col, size) / max_edge
    return near_edge * edge_preference + (1 - near_edge) * (1 - edge_preference)


def _has_adjacent_bonus(row: int, col: int, bonuses: BonusGrid) -> bool:
    size = len(bonuses)
    return any(bonuses[nr][nc] is not None for nr, nc in neighbors(row, col, size))


def _cell_ok(
    row: int,
    col: int,
    playable: list[list[bool]],
    bonuses: BonusGrid,
    rules: BonusPlacementConfig,
) -> bool:
    size = len(playable)
    if not playable[row][col] or bonuses[row][col] is not None:
        return False
    if manhattan_from_center(row, col, size) < rules.min_dist_from_center:
        return False
    if not rules.allow_adjacent and _has_adjacent_bonus(row, col, bonuses):
        return False
    return True


def candidate_positions(
    playable: list[list[bool]],
    bonuses: BonusGrid,
    rules: BonusPlacementConfig,
    symmetric: bool,
) -> list[tuple[int, int]]:
    """Cells where the category may go, in row-major order."""
    size = len(playable)
    mid = size // 2
    positions: list[tuple[int, int]] = []
    for r in range(size):
        for c in range(size):
            if (r, c) == (mid, mid):
                continue
            if symmetric and not in_first_half(r, c, size):
                continue
            if not _cell_ok(r, c, playable, bonuses, rules):
                continue
            if symmetric:
                mr, mc = rotated(r, c, size)
                if not _cell_ok(mr, mc, playable, bonuses, rules):
                    continue
            positions.append((r, c))
    return positions


def pick_weighted(rng: SeededRandom, count: int) -> int:
    """Index in [0, count) with weight 0.6**index. Consumes one draw."""
    weights = [_RANK_DECAY ** i for i in range(count)]
    pick = rng.next() * sum(weights)
    for i, weight in enumerate(weights):
        pick -= weight
        if pick <= 0:
            return i
    return 0


def place_bonuses(
    rng: SeededRandom, playable: list[list[bool]], config: BoardConfig
) -> BonusGrid:
    size = len(playable)
    mid = size // 2
    bonuses: BonusGrid = [[None] * size for _ in range(size)]
    bonuses[mid][mid] = BonusType.START

    for name in BONUS_ORDER:
        count = config.bonus_counts.get(name, 0)
        if count <= 0:
            continue
        rules = config.bonus_placement[name]
        bonus = BonusType[name]
        picks = math.ceil(count / 2) if config.symmetric else count

        placed = 0
        for _ in range(picks):
            candidates = candidate_positions(
                playable, bonuses, rules, config.symmetric
            )
            if not candidates:
                break
            # sorted() is stable, so ties keep row-major order
            ranked = sorted(
                candidates,
                key=lambda pos: score_position(
                    pos[0], pos[1], size, rules.edge_preference
                ),
                reverse=True,
            )
            top = ranked[:_TOP_CANDIDATES]
            r, c = top[pick_weighted(rng, len(top))]
            bonuses[r][c] = bonus
            placed += 1
            if config.symmetric:
                mr, mc = rotated(r, c, size)
                bonuses[mr][mc] = bonus
                if (mr, mc) != (r, c):
                    placed += 1

        if placed < count:
            logger.debug("bonuses: placed %d of %d %s", placed, count, name)

    return bonuses
