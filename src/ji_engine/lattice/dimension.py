from __future__ import annotations

from dataclasses import dataclass

from ..ratio import Ratio
from .bounds import INFINITE, DimensionBounds


@dataclass(frozen=True)
class LatticeDimension:
    """One generating interval of a lattice and the wrapping rule for its indices."""

    ratio: Ratio
    bounds: DimensionBounds = INFINITE

    def at(self, index: int) -> Ratio:
        return self.ratio.pow(self.bounds.resolve_index(index))
