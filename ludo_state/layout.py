"""
Grid coordinates for drawing a 15x15 Ludo board.

Rows and columns are 1-based. The four 6x6 corners hold the bases, the 3x3
center holds the goal, and the three-cell-wide arms carry the track and the
home stretches.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .config import config
from .types import BoardCell, CellKind, Color

GRID_SIZE = 15
GOAL_COORD: Tuple[int, int] = (8, 8)

Coord = Tuple[int, int]


def _generate_track() -> Tuple[Coord, ...]:
    cells: List[Coord] = []
    # left arm, top row, heading right from blue's entry
    cells += [(7, c) for c in range(2, 7)]
    # top arm, up the left column, across the top, down the right column
    cells += [(r, 7) for r in range(6, 0, -1)]
    cells += [(1, 8), (1, 9)]
    cells += [(r, 9) for r in range(2, 7)]
    # right arm
    cells += [(7, c) for c in range(10, 16)]
    cells += [(8, 15), (9, 15)]
    cells += [(9, c) for c in range(14, 9, -1)]
    # bottom arm
    cells += [(r, 9) for r in range(10, 16)]
    cells += [(15, 8), (15, 7)]
    cells += [(r, 7) for r in range(14, 9, -1)]
    # left arm, bottom row back to the start
    cells += [(9, c) for c in range(6, 0, -1)]
    cells += [(8, 1), (7, 1)]
    if len(cells) != config.TRACK_LENGTH:
        raise RuntimeError(f"track layout has {len(cells)} cells")
    return tuple(cells)


TRACK_COORDS: Tuple[Coord, ...] = _generate_track()

HOME_COORDS: Dict[Color, Tuple[Coord, ...]] = {
    Color.BLUE: ((8, 2), (8, 3), (8, 4), (8, 5), (8, 6), (8, 7)),
    Color.GREEN: ((2, 8), (3, 8), (4, 8), (5, 8), (6, 8), (7, 8)),
    Color.RED: ((8, 14), (8, 13), (8, 12), (8, 11), (8, 10), (8, 9)),
    Color.YELLOW: ((14, 8), (13, 8), (12, 8), (11, 8), (10, 8), (9, 8)),
}

# top-left corner of each color's 6x6 base
BASE_ORIGINS: Dict[Color, Coord] = {
    Color.BLUE: (1, 1),
    Color.GREEN: (1, 10),
    Color.RED: (10, 10),
    Color.YELLOW: (10, 1),
}

_BASE_SLOTS: Tuple[Coord, ...] = ((2, 2), (2, 4), (4, 2), (4, 4))


def base_coord(color: Color, slot: int) -> Coord:
    r0, c0 = BASE_ORIGINS[color]
    dr, dc = _BASE_SLOTS[slot % len(_BASE_SLOTS)]
    return r0 + dr, c0 + dc


def is_base_area(row: int, col: int) -> bool:
    return (row <= 6 or row >= 10) and (col <= 6 or col >= 10)


def is_center_area(row: int, col: int) -> bool:
    return 7 <= row <= 9 and 7 <= col <= 9


def grid_position(cell: BoardCell, slot: int = 0) -> Coord:
    """Grid coordinate of a logical cell; ``slot`` picks the spot inside a base."""
    if cell.kind is CellKind.TRACK:
        return TRACK_COORDS[cell.index]
    if cell.color is None:
        raise ValueError(f"{cell} has no owner color")
    if cell.kind is CellKind.BASE:
        return base_coord(cell.color, slot)
    return HOME_COORDS[cell.color][cell.index]
