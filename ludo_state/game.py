from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from .board import Board, is_safe_cell, track_cell
from .config import config
from .errors import InvariantViolation
from .events import EventBus, GameWon, PieceMoved
from .moves import can_move, check_dice, valid_moves
from .player import Player
from .types import Capture, Color, MoveResult


@dataclass(slots=True)
class Game:
    """Piece state for all four colors plus move execution and capture rules.

    Turn order, dice and bonus turns are handled by the TurnMachine; the
    Game only knows how to validate and apply a single move.
    """

    bus: EventBus = field(default_factory=EventBus)
    players: List[Player] = field(init=False)
    board: Board = field(init=False)
    winner: Optional[Color] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.players = [Player(color=c) for c in Color]
        self.board = Board(players=[p.pieces for p in self.players])
        self.check()

    def check(self) -> None:
        if len(self.players) != len(Color):
            raise InvariantViolation("a game needs one player per color", count=len(self.players))
        for color, player in zip(Color, self.players):
            if player.color is not color:
                raise InvariantViolation("players out of color order", seat=color, color=player.color)
            player.check()

    def player(self, color: Color) -> Player:
        return self.players[int(color)]

    def reset(self) -> None:
        for player in self.players:
            player.reset()
        self.winner = None

    @property
    def over(self) -> bool:
        return self.winner is not None

    # --- Rules ---
    def legal_moves(self, color: Color, dice: int) -> Tuple[int, ...]:
        return valid_moves(self.player(color), dice)

    # --- Applying a move ---
    def apply_move(self, color: Color, piece_index: int, steps: int) -> MoveResult:
        check_dice(steps)
        color = Color(color)
        player = self.player(color)
        piece = player.piece(piece_index)
        if self.over:
            raise InvariantViolation("game is already won", winner=self.winner)
        if not can_move(piece, steps):
            raise InvariantViolation("piece cannot move", piece=str(piece), steps=steps)

        result = MoveResult(
            color=color,
            piece_index=piece_index,
            steps=steps,
            old_travelled=piece.travelled,
            new_travelled=piece.travelled,
        )

        if piece.in_base:
            # exit always lands on the entry cell, which is safe
            piece.place(0)
            result.exited_base = True
            self.bus.emit(PieceMoved(color, piece_index, self.board.cell_of(piece)))
        else:
            path = self.board.step_path(piece, steps)
            for i, cell in enumerate(path, start=1):
                piece.place(piece.travelled + 1)
                self.bus.emit(PieceMoved(color, piece_index, cell, final=i == steps))

        result.new_travelled = piece.travelled

        if piece.finished:
            result.finished = True
            if player.has_won():
                result.won = True
                self.winner = color
                logger.info(f"{color.label} has all pieces home and wins")
                self.bus.emit(GameWon(color))
        elif piece.travelled <= config.LAST_TRACK_STEP:
            result.captures = self._resolve_captures(color, piece.travelled)

        result.extra_turn = (
            steps == config.EXIT_BASE_ROLL or result.captured or result.finished
        )
        logger.debug(
            f"{color.label}#{piece_index}: {result.old_travelled} -> {result.new_travelled}"
            f" (captures={len(result.captures)}, extra_turn={result.extra_turn})"
        )
        return result

    def _resolve_captures(self, color: Color, travelled: int) -> List[Capture]:
        landed = track_cell(color, travelled)
        if is_safe_cell(landed):
            return []
        captures: List[Capture] = []
        for victim in self.board.occupants(landed, exclude=color):
            victim.send_to_base()
            captures.append(Capture(color=victim.color, index=victim.index, cell=landed))
            logger.info(f"{color.label} captured {victim.color.label}#{victim.index} on cell {landed}")
            self.bus.emit(PieceMoved(victim.color, victim.index, self.board.cell_of(victim)))
        return captures
