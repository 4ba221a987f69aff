"""
Ludo rules engine.
Tracks pieces, dice, turn order, captures and wins; rendering is left to
observers subscribed to the engine's event bus.
"""

from .board import Board, StepPath, cell_for, home_cell, is_safe_cell, track_cell
from .config import config
from .dice import Dice
from .errors import InvariantViolation, LudoEngineError
from .events import (
    DiceRolled,
    EventBus,
    EventRecorder,
    GameObserver,
    GameWon,
    PieceMoved,
    StatusMessage,
    TurnChanged,
)
from .game import Game
from .moves import valid_moves
from .piece import Piece
from .player import Player
from .simulator import SimulationResult, Simulator
from .turn import RollOutcome, TurnMachine, TurnState
from .types import (
    TURN_ORDER,
    BoardCell,
    Capture,
    CellKind,
    Color,
    MoveResult,
    PieceStatus,
    TurnPhase,
)

__all__ = [
    "Board",
    "BoardCell",
    "Capture",
    "CellKind",
    "Color",
    "config",
    "Dice",
    "DiceRolled",
    "EventBus",
    "EventRecorder",
    "Game",
    "GameObserver",
    "GameWon",
    "InvariantViolation",
    "LudoEngineError",
    "MoveResult",
    "Piece",
    "PieceMoved",
    "PieceStatus",
    "Player",
    "RollOutcome",
    "SimulationResult",
    "Simulator",
    "StatusMessage",
    "StepPath",
    "TURN_ORDER",
    "TurnChanged",
    "TurnMachine",
    "TurnPhase",
    "TurnState",
    "cell_for",
    "home_cell",
    "is_safe_cell",
    "track_cell",
    "valid_moves",
]
