from __future__ import annotations

from typing import Tuple

from .config import config
from .piece import Piece
from .player import Player


def check_dice(dice_value: int) -> None:
    if not config.DICE_MIN <= dice_value <= config.DICE_MAX:
        raise ValueError(
            f"dice value must be between {config.DICE_MIN} and {config.DICE_MAX}, got {dice_value}"
        )


def can_move(piece: Piece, dice_value: int) -> bool:
    if piece.finished:
        return False
    if piece.in_base:
        return dice_value == config.EXIT_BASE_ROLL
    # exact count needed for the goal; jumping over anyone is fine
    return piece.travelled + dice_value <= config.GOAL


def valid_moves(player: Player, dice_value: int) -> Tuple[int, ...]:
    """Indices of the pieces ``player`` may move with ``dice_value``, ascending."""
    check_dice(dice_value)
    return tuple(p.index for p in player.pieces if can_move(p, dice_value))
