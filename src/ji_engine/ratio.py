"""Exact ratios of integers, the intervals of just intonation.

A Ratio is always stored in lowest terms. Arithmetic is exact integer
arithmetic checked against a selectable integer width: results that would
not fit raise RatioOverflowError instead of wrapping, and callers that need
deep lattices or large exponents pick a wider IntWidth (or BIG).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .math_utils import greatest_prime_factor, reduce

if TYPE_CHECKING:  # pragma: no cover
    from .interval import Approximate12EdoInterval


class RatioOverflowError(OverflowError):
    """An integer produced by ratio arithmetic does not fit the chosen width."""


class IntWidth(Enum):
    I8 = 8
    I16 = 16
    I32 = 32
    I64 = 64
    I128 = 128
    BIG = 0  # unbounded Python int

    @property
    def bounds(self) -> Optional[Tuple[int, int]]:
        if self is IntWidth.BIG:
            return None
        half = 1 << (self.value - 1)
        return -half, half - 1

    def fits(self, value: int) -> bool:
        b = self.bounds
        return b is None or b[0] <= value <= b[1]

    def check(self, value: int, what: str = "value") -> int:
        if not self.fits(value):
            # Huge ints cannot be rendered as decimal text, so report the size
            raise RatioOverflowError(f"{what} ({value.bit_length()} bits) does not fit in {self.name}")
        return value

    def checked_pow(self, base: int, exp: int, what: str = "value") -> int:
        """base ** exp, failing before the power is computed when it cannot fit."""
        if self is not IntWidth.BIG and abs(base) >= 2 and exp >= self.value:
            raise RatioOverflowError(f"{what} {base}**{exp} does not fit in {self.name}")
        return self.check(base ** exp, what)

    @classmethod
    def parse(cls, text: Union[str, int, "IntWidth"]) -> "IntWidth":
        """Accept 'i64', 'I64', '64', 64 or 'big'."""
        if isinstance(text, IntWidth):
            return text
        raw = str(text).strip().lower()
        if raw in {"big", "bigint", "unbounded"}:
            return cls.BIG
        if raw.startswith("i"):
            raw = raw[1:]
        try:
            bits = int(raw)
            return cls(bits)
        except ValueError:
            raise ValueError(f"unknown integer width '{text}'") from None

    @staticmethod
    def wider(a: "IntWidth", b: "IntWidth") -> "IntWidth":
        if a is IntWidth.BIG or b is IntWidth.BIG:
            return IntWidth.BIG
        return a if a.value >= b.value else b


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


@dataclass(frozen=True, repr=False)
class Ratio:
    """A ratio of two integers, reduced to lowest terms on construction.

    The sign convention is not normalized: Ratio(3, -6) is stored as 1/-2.

    >>> Ratio(5, 10)
    Ratio(1, 2)
    >>> Ratio(3, 2) * Ratio(9, 8)
    Ratio(27, 16)
    """

    numer: int
    denom: int
    width: IntWidth = field(default=IntWidth.I32, compare=False)

    def __post_init__(self) -> None:
        width = IntWidth.parse(self.width)
        numer = width.check(_require_int(self.numer, "numer"), "numerator")
        denom = width.check(_require_int(self.denom, "denom"), "denominator")
        numer, denom = reduce(numer, denom)
        object.__setattr__(self, "numer", numer)
        object.__setattr__(self, "denom", denom)
        object.__setattr__(self, "width", width)

    @classmethod
    def parse(cls, text: str, width: IntWidth = IntWidth.I32) -> "Ratio":
        """Parse 'N/D' (e.g. '3/2'). Anything else raises ValueError."""
        parts = str(text).strip().split("/")
        if len(parts) != 2:
            raise ValueError(f"expected a ratio like '3/2', got '{text}'")
        try:
            numer = int(parts[0])
            denom = int(parts[1])
        except ValueError:
            raise ValueError(f"expected a ratio like '3/2', got '{text}'") from None
        return cls(numer, denom, width)

    def with_width(self, width: IntWidth) -> "Ratio":
        return Ratio(self.numer, self.denom, IntWidth.parse(width))

    # -- arithmetic ---------------------------------------------------------

    def _coerce(self, other: object) -> Optional["Ratio"]:
        if isinstance(other, Ratio):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Ratio(other, 1, self.width)
        return None

    def __mul__(self, other: object) -> "Ratio":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        width = IntWidth.wider(self.width, rhs.width)
        numer = width.check(self.numer * rhs.numer, "numerator product")
        denom = width.check(self.denom * rhs.denom, "denominator product")
        return Ratio(numer, denom, width)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "Ratio":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return rhs._divided_into(self)

    def __rtruediv__(self, other: object) -> "Ratio":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return self._divided_into(lhs)

    def _divided_into(self, lhs: "Ratio") -> "Ratio":
        width = IntWidth.wider(lhs.width, self.width)
        numer = width.check(lhs.numer * self.denom, "numerator product")
        denom = width.check(lhs.denom * self.numer, "denominator product")
        return Ratio(numer, denom, width)

    def __neg__(self) -> "Ratio":
        return self.complement()

    def __pow__(self, exp: int) -> "Ratio":
        if isinstance(exp, bool) or not isinstance(exp, int):
            return NotImplemented
        return self.pow(exp)

    def __float__(self) -> float:
        return self.numer / self.denom

    def _require_positive(self, op: str) -> None:
        if self.numer == 0 or (self.numer > 0) != (self.denom > 0):
            raise ValueError(f"cannot {op} non-positive ratio {self}")

    # -- interval operations ------------------------------------------------

    def normalize(self) -> "Ratio":
        """Octave-reduce into [1, 2).

        Doubles the numerator while the value is below 1, or the denominator
        while it is at least 2, reducing after every step.

        >>> Ratio(1, 2).normalize()
        Ratio(1, 1)
        >>> Ratio(9, 4).normalize()
        Ratio(9, 8)
        """
        self._require_positive("normalize")
        r = self
        while True:
            n, d = abs(r.numer), abs(r.denom)
            if n < d:
                r = Ratio(r.width.check(r.numer * 2, "numerator"), r.denom, r.width)
            elif n >= 2 * d:
                r = Ratio(r.numer, r.width.check(r.denom * 2, "denominator"), r.width)
            else:
                return r

    def complement(self) -> "Ratio":
        """The ratio that multiplied by this one gives 2/1, octave-reduced.

        >>> Ratio(3, 2).complement()
        Ratio(4, 3)
        """
        return (Ratio(2, 1, self.width) / self).normalize()

    def pow(self, exp: int) -> "Ratio":
        """Integral power, octave-reduced; negative powers go through complement().

        >>> Ratio(3, 2).pow(2)
        Ratio(9, 8)
        >>> Ratio(3, 2).pow(-2)
        Ratio(16, 9)
        """
        if exp == 0:
            return Ratio(1, 1, self.width)
        if exp < 0:
            return self.complement().pow(-exp)
        w = self.width
        numer = w.checked_pow(self.numer, exp, "numerator power")
        denom = w.checked_pow(self.denom, exp, "denominator power")
        return Ratio(numer, denom, w).normalize()

    def limit(self) -> int:
        """Prime limit: the largest prime factor of numerator or denominator."""
        return max(
            greatest_prime_factor(abs(self.numer)),
            greatest_prime_factor(abs(self.denom)),
        )

    def cents(self) -> float:
        self._require_positive("take cents of")
        return 1200.0 * (math.log2(abs(self.numer)) - math.log2(abs(self.denom)))

    def frequency(self, root_hz: float) -> float:
        return root_hz * float(self)

    def to_approximate_equal_tempered_interval(self) -> "Approximate12EdoInterval":
        from .interval import approximate_ratio

        return approximate_ratio(self)

    def __str__(self) -> str:
        return f"{self.numer}/{self.denom}"

    def __repr__(self) -> str:
        return f"Ratio({self.numer}, {self.denom})"
