"""Construct and index n-dimensional lattices of just intonation intervals.

Each dimension is a generating ratio (say 3/2) with its own wrapping rule;
a point in the lattice is the product of every dimension's ratio raised to
that dimension's (resolved) index.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from ..ratio import IntWidth, Ratio
from .bounds import (
    INFINITE,
    DimensionBounds,
    Infinite,
    LengthBounded,
    RangeBounded,
    bounds_from_dict,
)
from .dimension import LatticeDimension

logger = logging.getLogger(__name__)

__all__ = [
    "DimensionBounds",
    "INFINITE",
    "Infinite",
    "LengthBounded",
    "RangeBounded",
    "Lattice",
    "LatticeDimension",
    "bounds_from_dict",
]


@dataclass(frozen=True)
class Lattice:
    dimensions: List[LatticeDimension] = field(default_factory=list)

    @classmethod
    def from_ratios(cls, ratios: Iterable[Ratio], bounds: DimensionBounds = INFINITE) -> "Lattice":
        return cls([LatticeDimension(r, bounds) for r in ratios])

    def __len__(self) -> int:
        return len(self.dimensions)

    def at(self, indices: Sequence[int]) -> Ratio:
        """Ratio at the given point.

        Dimensions and indices pair up positionally; whichever is longer is
        truncated, so extra indices or extra dimensions are ignored.
        """
        if len(indices) != len(self.dimensions):
            logger.debug(
                "lattice of %d dimensions indexed with %d indices; extra entries ignored",
                len(self.dimensions),
                len(indices),
            )
        width = self.dimensions[0].ratio.width if self.dimensions else IntWidth.I32
        result = Ratio(1, 1, width)
        for dim, index in zip(self.dimensions, indices):
            result = result * dim.at(index)
        logger.debug("lattice.at(%s) -> %s", list(indices), result)
        return result

    def at_many(self, index_lists: Iterable[Sequence[int]]) -> List[Ratio]:
        return [self.at(ix) for ix in index_lists]
