from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Optional

from loguru import logger

from .config import config
from .moves import check_dice


@dataclass(slots=True)
class Dice:
    """Six-sided dice with an optional queue of forced values.

    Forced values are consumed first, which lets a debugging session or a
    test script a sequence of rolls without touching the RNG.
    """

    seed: Optional[int] = None
    rng: random.Random = field(init=False, repr=False)
    _forced: Deque[int] = field(default_factory=deque, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def force(self, *values: int) -> None:
        for value in values:
            check_dice(value)
        self._forced.extend(values)

    def force_all(self, values: Iterable[int]) -> None:
        self.force(*values)

    @property
    def pending(self) -> int:
        return len(self._forced)

    def roll(self) -> int:
        if self._forced:
            value = self._forced.popleft()
            logger.debug(f"forced roll {value}")
            return value
        return self.rng.randint(config.DICE_MIN, config.DICE_MAX)

    def reseed(self, seed: Optional[int]) -> None:
        self.seed = seed
        self.rng.seed(seed)
        self._forced.clear()
