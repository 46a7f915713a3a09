"""Tonality diamonds built from a list of odd-limit identities.

matrix[i][j] is identities[j] over identities[i], octave-reduced, so row i is
the utonal/otonal crossing for identity i and the diagonal is all 1/1. The
display walks the matrix diagonal by diagonal: otonalities on top, the unison
diagonal as the widest middle row, utonalities below.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from .ratio import IntWidth, Ratio

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class Diamond:
    def __init__(self, identities: Iterable[int], width: IntWidth = IntWidth.I32) -> None:
        ids = [int(i) for i in identities]
        bad = [i for i in ids if i < 1]
        if bad:
            raise ValueError(f"diamond identities must be positive integers, got {bad}")
        self.identities: List[int] = ids
        self.width = IntWidth.parse(width)

    def __repr__(self) -> str:
        return f"Diamond({self.identities})"

    def generate(self) -> List[List[Ratio]]:
        matrix = [
            [Ratio(n, d, self.width).normalize() for n in self.identities]
            for d in self.identities
        ]
        logger.debug("generated %dx%d diamond for %s", len(matrix), len(matrix), self.identities)
        return matrix

    def index_coordinates(self) -> List[List[Coordinate]]:
        """Matrix coordinates in display order, one list per printed row.

        For n identities there are 2n-1 rows. The first n walk the diagonals
        (0, i), (1, i+1), ... from the top-right corner in to the main
        diagonal; the remaining n-1 walk the mirrored diagonals (i, 0),
        (i+1, 1), ... out to the bottom-left corner.
        """
        if not self.identities:
            return []
        top = len(self.identities) - 1
        rows: List[List[Coordinate]] = []
        for i in range(top, -1, -1):
            rows.append([(k, i + k) for k in range(top - i + 1)])
        for i in range(1, top + 1):
            rows.append([(i + k, k) for k in range(top - i + 1)])
        return rows

    def _row_text(self, row: Sequence[Coordinate], matrix: List[List[Ratio]]) -> str:
        prefix = "\t" * (len(self.identities) - len(row))
        return prefix + "\t\t".join(str(matrix[a][b]) for a, b in row)

    def display(self) -> str:
        matrix = self.generate()
        return "\n\n".join(self._row_text(row, matrix) for row in self.index_coordinates())

    def __str__(self) -> str:
        return self.display()
