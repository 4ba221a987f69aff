from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Protocol, Sequence, Type

from .types import Color


class Selector(Protocol):
    """Picks one of the offered piece indices for a seat."""

    def select(self, color: Color, options: Sequence[int]) -> int:
        ...


@dataclass(slots=True)
class FirstMoveSelector:
    def select(self, color: Color, options: Sequence[int]) -> int:
        return options[0]


@dataclass(slots=True)
class RandomSelector:
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def select(self, color: Color, options: Sequence[int]) -> int:
        return self.rng.choice(list(options))


SELECTORS: Dict[str, Type] = {
    "first": FirstMoveSelector,
    "random": RandomSelector,
}


def create(name: str, seed: int | None = None) -> Selector:
    key = name.strip().lower()
    if key not in SELECTORS:
        raise KeyError(f"Unknown selector '{name}', expected one of {sorted(SELECTORS)}")
    if key == "random":
        return RandomSelector(seed=seed)
    return SELECTORS[key]()
