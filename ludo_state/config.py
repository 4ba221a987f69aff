import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(slots=True)
class Config:
    # --- Constants ---
    TRACK_LENGTH: int = 52
    HOME_STRETCH_SIZE: int = 6  # 51..56, last one is the goal
    PIECES_PER_PLAYER: int = 4
    NUM_PLAYERS: int = 4
    EXIT_BASE_ROLL: int = 6
    DICE_MIN: int = 1
    DICE_MAX: int = 6

    # Travelled encoding: -1 = base, 0..50 track, 51..56 home stretch
    BASE_TRAVELLED: int = -1

    # Track indices, identical for every color
    SAFE_CELLS: list[int] = field(
        default_factory=lambda: [0, 8, 13, 21, 26, 34, 39, 47]
    )
    # Entry offsets indexed by Color value: blue, red, green, yellow
    ENTRY_OFFSETS: list[int] = field(default_factory=lambda: [0, 26, 13, 39])

    # --- Runtime settings ---
    AUTO_SELECT_SINGLE_MOVE: bool = _env_flag("AUTO_SELECT_SINGLE_MOVE", "1")
    MAX_CONSECUTIVE_SIXES: int = int(os.getenv("MAX_CONSECUTIVE_SIXES", 3))
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 1000))
    STEP_DELAY: float = float(os.getenv("STEP_DELAY", 0.0))
    DICE_SEED: int | None = _env_optional_int("DICE_SEED")

    # Derived (populated in __post_init__ due to slots)
    LAST_TRACK_STEP: int = 0
    HOME_START: int = 0
    GOAL: int = 0

    def __post_init__(self):
        # Track covers travelled 0..50, the cell before the color's entry is never reached
        self.LAST_TRACK_STEP = self.TRACK_LENGTH - 2
        self.HOME_START = self.LAST_TRACK_STEP + 1
        self.GOAL = self.HOME_START + self.HOME_STRETCH_SIZE - 1

        if len(self.ENTRY_OFFSETS) != self.NUM_PLAYERS:
            raise ValueError("ENTRY_OFFSETS must hold one offset per player")
        if any(not 0 <= cell < self.TRACK_LENGTH for cell in self.SAFE_CELLS):
            raise ValueError("SAFE_CELLS must be track indices")
        if self.MAX_CONSECUTIVE_SIXES < 1:
            raise ValueError("MAX_CONSECUTIVE_SIXES must be at least 1")
        if self.MAX_TURNS < 1:
            raise ValueError("MAX_TURNS must be positive")
        if self.STEP_DELAY < 0:
            raise ValueError("STEP_DELAY cannot be negative")


config = Config()
