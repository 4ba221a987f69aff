from dataclasses import dataclass

from .config import config
from .errors import InvariantViolation
from .types import Color, PieceStatus


@dataclass(slots=True)
class Piece:
    """Lightweight piece model. Holds state only.

    Rule logic (eligibility, captures, finishing) lives in the validator and
    the executor; cell mapping is done by Board utilities.
    """

    color: Color
    index: int  # 0..3 per player, stable for the whole game
    status: PieceStatus = PieceStatus.IN_BASE
    travelled: int = -1  # -1 = base; 0..50 track; 51..56 home stretch, 56 = goal

    def __post_init__(self) -> None:
        self.check()

    def check(self) -> None:
        """Raise InvariantViolation unless status and travelled agree."""
        t = self.travelled
        if not config.BASE_TRAVELLED <= t <= config.GOAL:
            raise InvariantViolation(
                "travelled out of range", color=self.color, index=self.index, travelled=t
            )
        expected = (
            PieceStatus.IN_BASE
            if t == config.BASE_TRAVELLED
            else PieceStatus.FINISHED
            if t == config.GOAL
            else PieceStatus.ACTIVE
        )
        if self.status is not expected:
            raise InvariantViolation(
                "status does not match travelled",
                color=self.color,
                index=self.index,
                status=self.status,
                travelled=t,
            )

    @property
    def in_base(self) -> bool:
        return self.status is PieceStatus.IN_BASE

    @property
    def active(self) -> bool:
        return self.status is PieceStatus.ACTIVE

    @property
    def finished(self) -> bool:
        return self.status is PieceStatus.FINISHED

    @property
    def on_track(self) -> bool:
        return self.active and self.travelled <= config.LAST_TRACK_STEP

    def place(self, travelled: int) -> None:
        """Put the piece at ``travelled`` and derive its status from it."""
        if not config.BASE_TRAVELLED <= travelled <= config.GOAL:
            raise InvariantViolation(
                "travelled out of range", color=self.color, index=self.index, travelled=travelled
            )
        if travelled == config.BASE_TRAVELLED:
            status = PieceStatus.IN_BASE
        elif travelled == config.GOAL:
            status = PieceStatus.FINISHED
        else:
            status = PieceStatus.ACTIVE
        self.status = status
        self.travelled = travelled
        self.check()

    def send_to_base(self) -> None:
        self.place(config.BASE_TRAVELLED)

    def __str__(self) -> str:
        return f"{self.color.label}#{self.index}({self.status.value} at {self.travelled})"
