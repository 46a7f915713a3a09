"""Conversion between JI ratios and approximations of 12-EDO (cent-based) intervals."""
from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple

from .ratio import Ratio


class IntervalLookupError(LookupError):
    """A rounded cents value did not land on one of the twelve named degrees."""


class TwelveEdoInterval(Enum):
    PerfectUnison = 0
    MinorSecond = 1
    MajorSecond = 2
    MinorThird = 3
    MajorThird = 4
    PerfectFourth = 5
    AugmentedFourth = 6
    PerfectFifth = 7
    MinorSixth = 8
    MajorSixth = 9
    MinorSeventh = 10
    MajorSeventh = 11

    @property
    def steps(self) -> int:
        return self.value

    @classmethod
    def from_steps(cls, steps: int) -> "TwelveEdoInterval":
        try:
            return cls(steps)
        except ValueError:
            raise IntervalLookupError(f"no 12-EDO interval for degree {steps}") from None

    def frequency(self, root_hz: float) -> float:
        return root_hz * 2.0 ** (self.value / 12.0)


class Approximate12EdoInterval(NamedTuple):
    """Nearest 12-EDO interval and the signed difference from it, in cents."""

    interval: TwelveEdoInterval
    cents: float

    def __str__(self) -> str:
        return f"({self.interval.name}, {self.cents!r})"


def _round_half_away(x: float) -> int:
    if x >= 0:
        return math.floor(x + 0.5)
    return math.ceil(x - 0.5)


def approximate_cents(cents: float) -> Approximate12EdoInterval:
    """Round `cents` to the nearest 100 and name the resulting degree.

    The degree is the truncated remainder of the rounded step count by 12, so
    a negative cents value yields a negative degree and raises
    IntervalLookupError rather than being folded onto a guessed name.
    """
    et_steps = _round_half_away(cents / 100.0)
    degree = int(math.fmod(et_steps, 12))
    interval = TwelveEdoInterval.from_steps(degree)
    return Approximate12EdoInterval(interval, cents - et_steps * 100.0)


def approximate_ratio(ratio: Ratio) -> Approximate12EdoInterval:
    """Approximate the octave-reduced ratio, so the name is always within one octave.

    >>> approximate_ratio(Ratio(3, 2)).interval
    <TwelveEdoInterval.PerfectFifth: 7>
    """
    return approximate_cents(ratio.normalize().cents())


UNISON = Ratio(1, 1)
MAJOR_SECOND = Ratio(9, 8)
MAJOR_THIRD = Ratio(5, 4)
PERFECT_FOURTH = Ratio(4, 3)
PERFECT_FIFTH = Ratio(3, 2)
MAJOR_SIXTH = Ratio(5, 3)
MAJOR_SEVENTH = Ratio(15, 8)
OCTAVE = Ratio(2, 1)
SYNTONIC_COMMA = Ratio(81, 80)
