from __future__ import annotations

from dataclasses import dataclass, field

from .config import config
from .errors import InvariantViolation
from .piece import Piece
from .types import Color


@dataclass(slots=True)
class Player:
    color: Color
    pieces: list[Piece] = field(init=False)

    def __post_init__(self) -> None:
        self.color = Color(self.color)
        self.pieces = [
            Piece(color=self.color, index=i) for i in range(config.PIECES_PER_PLAYER)
        ]

    def check(self) -> None:
        if len(self.pieces) != config.PIECES_PER_PLAYER:
            raise InvariantViolation(
                "wrong number of pieces", color=self.color, count=len(self.pieces)
            )
        for i, piece in enumerate(self.pieces):
            if piece.color is not self.color or piece.index != i:
                raise InvariantViolation(
                    "piece does not belong to this seat", color=self.color, piece=str(piece)
                )
            piece.check()

    def piece(self, index: int) -> Piece:
        if not 0 <= index < len(self.pieces):
            raise InvariantViolation("no such piece", color=self.color, index=index)
        return self.pieces[index]

    def finished_count(self) -> int:
        return sum(1 for p in self.pieces if p.finished)

    def has_won(self) -> bool:
        return self.finished_count() == config.PIECES_PER_PLAYER

    def reset(self) -> None:
        for piece in self.pieces:
            piece.send_to_base()

    def travelled(self) -> list[int]:
        return [p.travelled for p in self.pieces]
