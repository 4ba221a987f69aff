from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .config import config
from .errors import InvariantViolation
from .piece import Piece
from .types import BoardCell, CellKind, Color

_SAFE_CELLS = frozenset(config.SAFE_CELLS)


def entry_cell(color: Color) -> int:
    return config.ENTRY_OFFSETS[int(color)]


def _compute_track_cells() -> Tuple[Tuple[int, ...], ...]:
    # color -> travelled (0..50) -> absolute track index
    return tuple(
        tuple(
            (entry_cell(color) + t) % config.TRACK_LENGTH
            for t in range(config.LAST_TRACK_STEP + 1)
        )
        for color in Color
    )


_TRACK_CELLS = _compute_track_cells()


def track_cell(color: Color, travelled: int) -> int:
    """Absolute track index for a color's travel distance.

    Periodic with the length of the track, so any non-negative distance maps
    onto the cycle.
    """
    if travelled < 0:
        raise InvariantViolation("no track cell for a piece in base", travelled=travelled)
    if travelled <= config.LAST_TRACK_STEP:
        return _TRACK_CELLS[int(color)][travelled]
    return (entry_cell(color) + travelled) % config.TRACK_LENGTH


def home_cell(color: Color, travelled: int) -> int:
    """Index (0..5) in the color's home stretch; 5 is the goal."""
    if not config.HOME_START <= travelled <= config.GOAL:
        raise InvariantViolation(
            "travelled is not on the home stretch", color=color, travelled=travelled
        )
    return travelled - config.HOME_START


def is_safe_cell(index: int) -> bool:
    return index in _SAFE_CELLS


def cell_for(color: Color, travelled: int) -> BoardCell:
    if travelled == config.BASE_TRAVELLED:
        return BoardCell(CellKind.BASE, -1, Color(color))
    if 0 <= travelled <= config.LAST_TRACK_STEP:
        return BoardCell(CellKind.TRACK, track_cell(color, travelled))
    idx = home_cell(color, travelled)
    kind = CellKind.GOAL if travelled == config.GOAL else CellKind.HOME
    return BoardCell(kind, idx, Color(color))


@dataclass(frozen=True, slots=True)
class StepPath:
    """Cells a piece passes through while advancing ``steps`` from ``start``.

    The sequence is lazy and restartable: each iteration recomputes the cells
    from the start position, so a renderer may replay it.
    """

    color: Color
    start: int
    steps: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start + self.steps > config.GOAL:
            raise InvariantViolation(
                "path leaves the board", color=self.color, start=self.start, steps=self.steps
            )

    def __iter__(self) -> Iterator[BoardCell]:
        for t in range(self.start + 1, self.start + self.steps + 1):
            yield cell_for(self.color, t)

    def __len__(self) -> int:
        return self.steps

    @property
    def destination(self) -> int:
        return self.start + self.steps


@dataclass(slots=True)
class Board:
    """Owns piece placement and mapping utilities (no rule logic)."""

    players: Sequence[Sequence[Piece]]  # indexed by Color value
    _tensor_buffer: np.ndarray | None = field(default=None, init=False, repr=False)

    def cell_of(self, piece: Piece) -> BoardCell:
        return cell_for(piece.color, piece.travelled)

    def pieces_of(self, color: Color) -> Sequence[Piece]:
        return self.players[int(color)]

    def occupants(self, index: int, *, exclude: Color | None = None) -> List[Piece]:
        """Active pieces standing on a track cell, other than ``exclude``'s."""
        out: List[Piece] = []
        for color in Color:
            if exclude is not None and color == exclude:
                continue
            for piece in self.players[int(color)]:
                if piece.on_track and track_cell(color, piece.travelled) == index:
                    out.append(piece)
        return out

    def step_path(self, piece: Piece, steps: int) -> StepPath:
        return StepPath(piece.color, piece.travelled, steps)

    def build_tensor(self, out: np.ndarray | None = None) -> np.ndarray:
        """Build a (4, GOAL + 2) occupancy tensor.

        Row per color in turn order, column ``travelled + 1``: column 0 counts
        pieces in base and the last column finished pieces.
        """
        shape = (len(Color), config.GOAL + 2)
        if out is not None:
            board = out
            if board.shape != shape:
                raise ValueError(f"Expected board tensor of shape {shape}")
        else:
            if self._tensor_buffer is None:
                self._tensor_buffer = np.zeros(shape, dtype=np.float32)
            board = self._tensor_buffer

        board.fill(0.0)
        for color in Color:
            row = board[int(color)]
            for piece in self.players[int(color)]:
                row[piece.travelled + 1] += 1.0
        return board

    def track_occupancy(self) -> np.ndarray:
        """(4, 52) counts of active pieces per absolute track cell."""
        grid = np.zeros((len(Color), config.TRACK_LENGTH), dtype=np.int64)
        for color in Color:
            for piece in self.players[int(color)]:
                if piece.on_track:
                    grid[int(color), track_cell(color, piece.travelled)] += 1
        return grid
