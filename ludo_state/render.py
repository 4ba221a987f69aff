from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import DefaultDict, Dict, List, Optional, Tuple

import numpy as np

from .config import config
from .events import DiceRolled, Event, GameWon, PieceMoved, StatusMessage, TurnChanged
from .game import Game
from .layout import GRID_SIZE, HOME_COORDS, TRACK_COORDS, grid_position, is_base_area, is_center_area
from .types import Color

_LETTERS: Dict[Color, str] = {c: c.name[0] for c in Color}
_SAFE_COORDS = {TRACK_COORDS[i] for i in config.SAFE_CELLS}
_HOME_COORDS = {coord for coords in HOME_COORDS.values() for coord in coords}


@dataclass(slots=True)
class TextBoard:
    """Headless renderer: draws the board as text from engine notifications."""

    game: Game
    step_delay: float = config.STEP_DELAY
    turn: Optional[Color] = field(default=None, init=False)
    dice: int = field(default=0, init=False)
    status: str = field(default="", init=False)
    winner: Optional[Color] = field(default=None, init=False)

    def notify(self, event: Event) -> None:
        if isinstance(event, PieceMoved):
            if not event.final and self.step_delay > 0:
                time.sleep(self.step_delay)
        elif isinstance(event, TurnChanged):
            self.turn = event.color
        elif isinstance(event, DiceRolled):
            self.dice = event.value
        elif isinstance(event, StatusMessage):
            self.status = event.text
        elif isinstance(event, GameWon):
            self.winner = event.color

    def _occupancy(self) -> DefaultDict[Tuple[int, int], List[Color]]:
        cells: DefaultDict[Tuple[int, int], List[Color]] = defaultdict(list)
        grid = self.game.board.track_occupancy()
        for color in Color:
            for index in np.flatnonzero(grid[int(color)]):
                cells[TRACK_COORDS[index]].extend([color] * int(grid[int(color), index]))
        # base, home stretch and goal are drawn per piece
        for player in self.game.players:
            for piece in player.pieces:
                if piece.on_track:
                    continue
                coord = grid_position(self.game.board.cell_of(piece), slot=piece.index)
                cells[coord].append(piece.color)
        return cells

    @staticmethod
    def _glyph(coord: Tuple[int, int], colors: List[Color]) -> str:
        if colors:
            first = _LETTERS[colors[0]]
            if len(colors) == 1:
                return first + " "
            if all(c == colors[0] for c in colors):
                return f"{first}{len(colors)}"
            return first + "+"
        if coord in _SAFE_COORDS:
            return "* "
        if coord in _HOME_COORDS:
            return "= "
        if is_base_area(*coord) or is_center_area(*coord):
            return "  "
        return ". "

    def render(self) -> str:
        cells = self._occupancy()
        lines = []
        for r in range(1, GRID_SIZE + 1):
            row = "".join(self._glyph((r, c), cells.get((r, c), [])) for c in range(1, GRID_SIZE + 1))
            lines.append(row.rstrip())
        turn = self.turn.label if self.turn is not None else "-"
        lines.append(f"turn: {turn}  dice: {self.dice or '-'}")
        if self.status:
            lines.append(self.status)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
