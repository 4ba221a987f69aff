"""
Turn and dice state machine.

One roll or one selection is processed per call, to completion. Inputs that
are not acceptable in the current state (rolling out of turn, picking a piece
that was not offered, anything after the game is won) are ignored and the
call returns False.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from loguru import logger

from .config import config
from .dice import Dice
from .events import DiceRolled, EventBus, StatusMessage, Subscriber, TurnChanged
from .game import Game
from .moves import check_dice
from .types import TURN_ORDER, Color, MoveResult, TurnPhase


@dataclass(slots=True)
class TurnState:
    current: int = 0  # index into TURN_ORDER
    dice_value: int = 0  # 0 = not rolled yet
    move_pending: bool = False
    consecutive_sixes: int = 0
    phase: TurnPhase = TurnPhase.AWAITING_ROLL
    valid_moves: Tuple[int, ...] = ()
    winner: Optional[Color] = None

    @property
    def color(self) -> Color:
        return TURN_ORDER[self.current]


@dataclass(slots=True)
class RollOutcome:
    """What a single accepted roll led to."""

    color: Color
    value: int
    valid_moves: Tuple[int, ...] = ()
    forfeited: bool = False
    result: Optional[MoveResult] = None  # set once the move is applied
    extra_turn: bool = False


def _default_dice() -> Dice:
    return Dice(seed=config.DICE_SEED)


@dataclass(slots=True)
class TurnMachine:
    game: Game = field(default_factory=Game)
    dice: Dice = field(default_factory=_default_dice)
    auto_select: bool = config.AUTO_SELECT_SINGLE_MOVE
    state: TurnState = field(default_factory=TurnState)
    last_roll: Optional[RollOutcome] = field(default=None, init=False)
    _busy: bool = field(default=False, init=False, repr=False)

    @property
    def bus(self) -> EventBus:
        return self.game.bus

    @property
    def current_color(self) -> Color:
        return self.state.color

    @property
    def over(self) -> bool:
        return self.state.phase is TurnPhase.GAME_OVER

    def subscribe(self, subscriber: Subscriber) -> Subscriber:
        return self.bus.subscribe(subscriber)

    def announce(self) -> None:
        """Publish the current turn, e.g. right after a renderer subscribes."""
        color = self.state.color
        self.bus.emit(TurnChanged(color))
        self.bus.emit(DiceRolled(self.state.dice_value))
        self._status(f"{color.label}'s turn")

    def reset(self) -> bool:
        """Start a fresh game. Refused while a roll or move is resolving."""
        if self._busy:
            return self._reject("reset while a move is resolving")
        self.game.reset()
        self.state = TurnState()
        self.last_roll = None
        logger.debug("engine reset")
        self.announce()
        return True

    # --- Inputs ---
    def request_roll(self, color: Color | None = None) -> bool:
        """Draw a value from the dice and process it, if a roll is acceptable now."""
        if not self._accepts_roll(color):
            return False
        return self._process_roll(self.dice.roll())

    def roll(self, value: int, color: Color | None = None) -> bool:
        """Process an externally drawn dice value."""
        check_dice(value)
        if not self._accepts_roll(color):
            return False
        return self._process_roll(value)

    def select_piece(self, color: Color, index: int) -> bool:
        s = self.state
        if self._busy:
            return self._reject("selection while a move is resolving")
        if s.phase is not TurnPhase.AWAITING_SELECTION or not s.move_pending:
            return self._reject(f"selection in phase {s.phase.value}")
        if color != s.color:
            return self._reject(f"selection for {color!r} during {s.color.label}'s turn")
        if index not in s.valid_moves:
            return self._reject(f"piece {index} is not among {s.valid_moves}")
        self._busy = True
        try:
            self._move(index)
        finally:
            self._busy = False
        return True

    # --- Transitions ---
    def _accepts_roll(self, color: Color | None) -> bool:
        s = self.state
        if self._busy:
            return self._reject("roll while a move is resolving")
        if s.phase is not TurnPhase.AWAITING_ROLL or s.move_pending:
            return self._reject(f"roll in phase {s.phase.value}")
        if color is not None and color != s.color:
            return self._reject(f"roll by {color!r} during {s.color.label}'s turn")
        return True

    def _process_roll(self, value: int) -> bool:
        self._busy = True
        try:
            self._on_rolled(value)
        finally:
            self._busy = False
        return True

    def _on_rolled(self, value: int) -> None:
        s = self.state
        color = s.color
        s.dice_value = value
        s.phase = TurnPhase.ROLLED
        self.last_roll = RollOutcome(color=color, value=value)
        logger.debug(f"{color.label} rolled {value}")
        self.bus.emit(DiceRolled(value))

        if value == config.EXIT_BASE_ROLL:
            s.consecutive_sixes += 1
            if s.consecutive_sixes >= config.MAX_CONSECUTIVE_SIXES:
                logger.info(f"{color.label} rolled {s.consecutive_sixes} sixes in a row, turn forfeited")
                self.last_roll.forfeited = True
                self._status(f"{color.label} rolled {s.consecutive_sixes} 6s! Turn lost.")
                self._next_turn()
                return
        else:
            s.consecutive_sixes = 0

        moves = self.game.legal_moves(color, value)
        self.last_roll.valid_moves = moves

        if not moves:
            s.phase = TurnPhase.NO_MOVE_AVAILABLE
            if value == config.EXIT_BASE_ROLL:
                self.last_roll.extra_turn = True
                s.phase = TurnPhase.AWAITING_ROLL
                self._status("No moves, but rolled 6! Roll again.")
            else:
                self._status(f"No moves for {color.label}.")
                self._next_turn()
            return

        if len(moves) == 1 and self.auto_select:
            logger.debug(f"auto-moving {color.label}#{moves[0]}")
            self._move(moves[0])
            return

        s.valid_moves = moves
        s.move_pending = True
        s.phase = TurnPhase.AWAITING_SELECTION
        self._status(f"{color.label}'s turn - move a piece")

    def _move(self, index: int) -> None:
        s = self.state
        color = s.color
        s.move_pending = False
        s.valid_moves = ()
        s.phase = TurnPhase.MOVING

        result = self.game.apply_move(color, index, s.dice_value)
        if self.last_roll is not None:
            self.last_roll.result = result
            self.last_roll.extra_turn = result.extra_turn and not result.won

        if result.won:
            s.phase = TurnPhase.GAME_OVER
            s.winner = color
            self._status(f"{color.label} wins!")
            return

        if not result.extra_turn:
            self._next_turn()
            return

        s.phase = TurnPhase.AWAITING_ROLL
        if result.exited_base:
            self._status("Moved out! Roll again.")
        elif result.finished:
            self._status("Piece finished! Bonus roll.")
        elif result.captured:
            self._status("Cut opponent! Bonus roll.")
        else:
            self._status("Rolled 6! Roll again.")

    def _next_turn(self) -> None:
        s = self.state
        s.current = (s.current + 1) % len(TURN_ORDER)
        s.dice_value = 0
        s.consecutive_sixes = 0
        s.move_pending = False
        s.valid_moves = ()
        s.phase = TurnPhase.AWAITING_ROLL
        self.announce()

    def _status(self, text: str) -> None:
        self.bus.emit(StatusMessage(text))

    def _reject(self, reason: str) -> bool:
        logger.debug(f"ignored input: {reason}")
        return False
