from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from loguru import logger

from .config import config
from .dice import Dice
from .errors import LudoEngineError
from .selectors import FirstMoveSelector, Selector
from .turn import TurnMachine
from .types import Color, TurnPhase


@dataclass(slots=True)
class SimulationResult:
    winner: Optional[Color]
    rolls: int = 0
    moves: int = 0
    captures: int = 0
    forfeits: int = 0
    finished: Dict[Color, int] = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return self.winner is not None


@dataclass(slots=True)
class Simulator:
    """Drives a TurnMachine headlessly: rolls for whoever is up and picks pieces with selectors."""

    machine: TurnMachine = field(default_factory=TurnMachine)
    selectors: Dict[Color, Selector] = field(default_factory=dict)
    max_rolls: int = config.MAX_TURNS

    @classmethod
    def seeded(cls, seed: Optional[int], selector: Selector | None = None) -> "Simulator":
        machine = TurnMachine(dice=Dice(seed=seed))
        chosen = selector if selector is not None else FirstMoveSelector()
        return cls(machine=machine, selectors={c: chosen for c in Color})

    def selector_for(self, color: Color) -> Selector:
        selector = self.selectors.get(color)
        if selector is None:
            selector = self.selectors[color] = FirstMoveSelector()
        return selector

    def step(self, result: SimulationResult) -> None:
        """Play one roll (and the selection it needs) for the current player."""
        machine = self.machine
        color = machine.current_color
        if not machine.request_roll(color):
            raise LudoEngineError(f"roll refused for {color.label} in phase {machine.state.phase.value}")
        result.rolls += 1

        if machine.state.phase is TurnPhase.AWAITING_SELECTION:
            choice = self.selector_for(color).select(color, machine.state.valid_moves)
            if not machine.select_piece(color, choice):
                raise LudoEngineError(f"selector picked an illegal piece {choice} for {color.label}")

        outcome = machine.last_roll
        if outcome is None:
            return
        if outcome.forfeited:
            result.forfeits += 1
        if outcome.result is not None:
            result.moves += 1
            result.captures += len(outcome.result.captures)

    def run(self, on_roll: Callable[[SimulationResult], None] | None = None) -> SimulationResult:
        result = SimulationResult(winner=None)
        while not self.machine.over and result.rolls < self.max_rolls:
            self.step(result)
            if on_roll is not None:
                on_roll(result)

        result.winner = self.machine.state.winner
        # last column of the occupancy tensor counts finished pieces
        tensor = self.machine.game.board.build_tensor()
        result.finished = {color: int(tensor[int(color), -1]) for color in Color}
        if result.winner is None:
            logger.warning(f"no winner after {result.rolls} rolls")
        else:
            logger.info(
                f"{result.winner.label} won after {result.rolls} rolls"
                f" ({result.moves} moves, {result.captures} captures, {result.forfeits} forfeits)"
            )
        return result
