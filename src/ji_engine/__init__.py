"""
Just-intonation toolkit: exact interval ratios, 12-EDO approximations,
EDO temperaments, n-dimensional ratio lattices, and tonality diamonds.

Also contains a MIDI renderer for hearing ratios as dyads, and the
`ji-engine` CLI.
"""

from .diamond import Diamond
from .edo import Edo, EdoInterval
from .interval import Approximate12EdoInterval, IntervalLookupError, TwelveEdoInterval
from .lattice import (
    INFINITE,
    Infinite,
    Lattice,
    LatticeDimension,
    LengthBounded,
    RangeBounded,
)
from .ratio import IntWidth, Ratio, RatioOverflowError

__all__ = [
    "Approximate12EdoInterval",
    "Diamond",
    "Edo",
    "EdoInterval",
    "INFINITE",
    "Infinite",
    "IntWidth",
    "IntervalLookupError",
    "Lattice",
    "LatticeDimension",
    "LengthBounded",
    "RangeBounded",
    "Ratio",
    "RatioOverflowError",
    "TwelveEdoInterval",
]
