from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


class Color(IntEnum):
    """Player colors; the value is the seat in turn order."""

    BLUE = 0
    RED = 1
    GREEN = 2
    YELLOW = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


TURN_ORDER: Tuple[Color, ...] = (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW)


class PieceStatus(Enum):
    IN_BASE = "in_base"
    ACTIVE = "active"
    FINISHED = "finished"


class CellKind(Enum):
    BASE = "base"
    TRACK = "track"
    HOME = "home"  # private home stretch
    GOAL = "goal"  # center triangle, shared by all colors


class TurnPhase(Enum):
    AWAITING_ROLL = "awaiting_roll"
    ROLLED = "rolled"
    AWAITING_SELECTION = "awaiting_selection"
    NO_MOVE_AVAILABLE = "no_move_available"
    MOVING = "moving"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class BoardCell:
    """Logical board cell.

    Track cells carry their absolute index (0..51) and no color. Base, home
    stretch and goal cells belong to a color; home cells are indexed 0..4 and
    the goal is index 5 of every home stretch.
    """

    kind: CellKind
    index: int
    color: Optional[Color] = None

    @property
    def on_track(self) -> bool:
        return self.kind is CellKind.TRACK

    def __str__(self) -> str:
        if self.kind is CellKind.TRACK:
            return f"track[{self.index}]"
        owner = self.color.label if self.color is not None else "?"
        if self.kind is CellKind.HOME:
            return f"{owner} home[{self.index}]"
        return f"{owner} {self.kind.value}"


@dataclass(slots=True)
class Capture:
    color: Color
    index: int
    cell: int  # track index where it happened


@dataclass(slots=True)
class MoveResult:
    color: Color
    piece_index: int
    steps: int
    old_travelled: int
    new_travelled: int
    exited_base: bool = False
    finished: bool = False
    won: bool = False
    captures: List[Capture] = field(default_factory=list)
    extra_turn: bool = False

    @property
    def captured(self) -> bool:
        return bool(self.captures)
