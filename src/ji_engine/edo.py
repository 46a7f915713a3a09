"""Temperaments made by equal divisions of the octave (EDO)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .interval import Approximate12EdoInterval, approximate_cents


@dataclass(frozen=True)
class Edo:
    """Divides the octave into `divisions` equal steps."""

    divisions: int

    def __post_init__(self) -> None:
        if self.divisions < 1:
            raise ValueError(f"an EDO needs at least one division, got {self.divisions}")

    def interval(self, steps: int) -> "EdoInterval":
        return EdoInterval(self.divisions, steps)

    def intervals(self) -> Iterator["EdoInterval"]:
        """Every step from the unison up to and including the octave."""
        for steps in range(self.divisions + 1):
            yield self.interval(steps)


@dataclass(frozen=True)
class EdoInterval:
    """An interval of `steps` steps in a `divisions`-EDO.

    Carries the division count by value; `cents` is computed once here.
    """

    divisions: int
    steps: int
    cents: float = field(init=False)

    def __post_init__(self) -> None:
        if self.divisions < 1:
            raise ValueError(f"an EDO needs at least one division, got {self.divisions}")
        object.__setattr__(self, "cents", 1200.0 * self.steps / self.divisions)

    @property
    def edo(self) -> Edo:
        return Edo(self.divisions)

    def to_approximate_12_edo_interval(self) -> Approximate12EdoInterval:
        return approximate_cents(self.cents)

    def frequency(self, root_hz: float) -> float:
        return root_hz * 2.0 ** (self.steps / self.divisions)

    def __str__(self) -> str:
        return f"{self.steps}/{self.divisions}"
