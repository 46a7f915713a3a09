from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..math_utils import sign_preserving_mod


class DimensionBounds:
    """Rule for wrapping an index along one lattice dimension."""

    def resolve_index(self, index: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass(frozen=True)
class Infinite(DimensionBounds):
    """No bounding; the dimension extends forever in both directions."""

    def resolve_index(self, index: int) -> int:
        return index


@dataclass(frozen=True)
class LengthBounded(DimensionBounds):
    """The dimension covers [0, n); indexing at n gives the value at 0.

    A negative n wraps the other way: with n = -2, index 1 resolves to -1.
    """

    n: int

    def __post_init__(self) -> None:
        if self.n == 0:
            raise ValueError("LengthBounded needs a nonzero length")

    def resolve_index(self, index: int) -> int:
        return sign_preserving_mod(index, self.n)


@dataclass(frozen=True)
class RangeBounded(DimensionBounds):
    """The dimension covers the inclusive range [low, high].

    RangeBounded(0, 2) has three positions while LengthBounded(2) has two.
    The index is shifted by |low| before wrapping and shifted back after.
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.high - self.low + 1 == 0:
            raise ValueError(f"RangeBounded({self.low}, {self.high}) has a zero-length range")

    def resolve_index(self, index: int) -> int:
        modulo = self.high - self.low + 1
        abs_low = abs(self.low)
        return sign_preserving_mod(index + abs_low, modulo) - abs_low


INFINITE = Infinite()


def bounds_from_dict(d: Optional[Dict[str, Any]]) -> DimensionBounds:
    """Build a policy from config JSON: {"kind": "infinite"|"length"|"range", ...}."""
    if not d:
        return INFINITE
    kind = str(d.get("kind", "infinite")).lower()
    if kind == "infinite":
        return INFINITE
    try:
        if kind == "length":
            return LengthBounded(int(d["n"]))
        if kind == "range":
            return RangeBounded(int(d["low"]), int(d["high"]))
    except KeyError as exc:
        raise ValueError(f"'{kind}' bounds missing key {exc}") from None
    except TypeError as exc:
        raise ValueError(f"'{kind}' bounds need integer limits: {exc}") from None
    raise ValueError(f"unknown bounds kind '{kind}'")
