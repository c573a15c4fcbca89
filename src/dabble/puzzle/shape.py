"""Board shape generation: carve dead space out of an N×N grid.

Dead cells grow in small clusters from seed points near the corners and
edges. A protected diamond around the center is never carved, and a
final reachability pass kills any pocket cut off from the center, so the
playable region is always one connected piece containing the start cell.
"""

from __future__ import annotations

import logging
import math
from collections import deque

from dabble.config import BoardConfig
from dabble.core.seed import SeededRandom
from dabble.puzzle.board import NEIGHBOR_OFFSETS

logger = logging.getLogger(__name__)

_CORNER_CHANCES = (0.8, 0.6, 0.6)  # (0,0), (0,N-1), (N-1,0)
_EDGE_CHANCE = 0.25
_GROWTH_CHANCE = 0.4
_MAX_CLUSTER = 3


def rotated(row: int, col: int, size: int) -> tuple[int, int]:
    """The 180° rotation of (row, col)."""
    return (size - 1 - row, size - 1 - col)


def in_first_half(row: int, col: int, size: int) -> bool:
    """True for cells that own their rotation under 180° symmetry."""
    mid = size // 2
    return row < mid or (row == mid and col < mid)


def manhattan_from_center(row: int, col: int, size: int) -> int:
    mid = size // 2
    return abs(row - mid) + abs(col - mid)


def neighbors(row: int, col: int, size: int) -> list[tuple[int, int]]:
    return [
        (row + dr, col + dc)
        for dr, dc in NEIGHBOR_OFFSETS
        if 0 <= row + dr < size and 0 <= col + dc < size
    ]


def reachable_from_center(playable: list[list[bool]]) -> list[list[bool]]:
    """BFS over playable cells starting at the center."""
    size = len(playable)
    mid = size // 2
    seen = [[False] * size for _ in range(size)]
    if not playable[mid][mid]:
        return seen
    seen[mid][mid] = True
    queue = deque([(mid, mid)])
    while queue:
        r, c = queue.popleft()
        for nr, nc in neighbors(r, c, size):
            if playable[nr][nc] and not seen[nr][nc]:
                seen[nr][nc] = True
                queue.append((nr, nc))
    return seen


def _seed_points(
    rng: SeededRandom, size: int, symmetric: bool
) -> list[tuple[int, int]]:
    corners = [(0, 0), (0, size - 1), (size - 1, 0)]
    points = [
        pos for pos, chance in zip(corners, _CORNER_CHANCES) if rng.chance(chance)
    ]
    for i in range(1, size - 1):
        for r, c in ((0, i), (i, 0), (size - 1, i), (i, size - 1)):
            if symmetric and not in_first_half(r, c, size):
                continue
            if rng.chance(_EDGE_CHANCE):
                points.append((r, c))
    return rng.shuffle(points)


def generate_board_shape(
    rng: SeededRandom, config: BoardConfig
) -> list[list[bool]]:
    """Return a ``size``×``size`` playable mask (False = dead space)."""
    size = config.size
    symmetric = config.symmetric
    radius = config.center_protection_radius
    playable = [[True] * size for _ in range(size)]

    total = size * size
    target_playable = rng.next_int(
        math.floor(total * config.min_playable_percent),
        math.floor(total * config.max_playable_percent),
    )
    target_dead = total - target_playable
    logger.debug("shape: size=%d target_dead=%d", size, target_dead)

    def protected(r: int, c: int) -> bool:
        return manhattan_from_center(r, c, size) < radius

    def kill(r: int, c: int) -> int:
        cells = {(r, c)}
        if symmetric:
            cells.add(rotated(r, c, size))
        if any(protected(*pos) for pos in cells):
            return 0
        killed = 0
        for kr, kc in cells:
            if playable[kr][kc]:
                playable[kr][kc] = False
                killed += 1
        return killed

    dead = 0
    for sr, sc in _seed_points(rng, size, symmetric):
        if dead >= target_dead:
            break
        if protected(sr, sc) or not playable[sr][sc]:
            continue

        cluster_size = rng.next_int(1, _MAX_CLUSTER)
        cluster = [(sr, sc)]
        visited = {(sr, sc)}
        queue = deque([(sr, sc)])
        while queue and len(cluster) < cluster_size:
            r, c = queue.popleft()
            for nr, nc in neighbors(r, c, size):
                if (nr, nc) in visited:
                    continue
                visited.add((nr, nc))
                if protected(nr, nc) or not playable[nr][nc]:
                    continue
                if symmetric and not in_first_half(nr, nc, size):
                    continue
                if rng.chance(_GROWTH_CHANCE):
                    cluster.append((nr, nc))
                    queue.append((nr, nc))

        for r, c in cluster:
            if playable[r][c]:
                dead += kill(r, c)

    # On even sizes the rotation of a pocket is not always a pocket, so
    # repeat until killing mirrors stops disconnecting anything.
    changed = True
    while changed:
        changed = False
        reached = reachable_from_center(playable)
        for r in range(size):
            for c in range(size):
                if not playable[r][c] or reached[r][c]:
                    continue
                playable[r][c] = False
                dead += 1
                changed = True
                if symmetric:
                    mr, mc = rotated(r, c, size)
                    if playable[mr][mc] and not protected(mr, mc):
                        playable[mr][mc] = False
                        dead += 1

    logger.debug("shape: carved %d dead cells", dead)
    return playable
