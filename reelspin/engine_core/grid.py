"""
Reel Grid - Fixed-size dense container of landed symbols.

Cells are stored in one flat tuple indexed by absolute cell index
(row * reel_count + reel), which is the same numbering paylines use.
The extent is fixed at construction and every cell is populated.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Sequence

from ..spec_schema.machine_spec import Symbol


class ReelGrid:
    """Immutable reel_count x row_count grid of symbols."""

    __slots__ = ("_reel_count", "_row_count", "_cells")

    def __init__(self, reel_count: int, row_count: int, cells: Iterable[Symbol]):
        cells = tuple(cells)
        if reel_count < 1 or row_count < 1:
            raise ValueError(f"Grid must be at least 1x1, got {reel_count}x{row_count}")
        if len(cells) != reel_count * row_count:
            raise ValueError(
                f"Grid {reel_count}x{row_count} needs {reel_count * row_count} cells, "
                f"got {len(cells)}"
            )
        if any(cell is None for cell in cells):
            raise ValueError("Grid cells must all be populated")
        self._reel_count = reel_count
        self._row_count = row_count
        self._cells = cells

    @classmethod
    def from_reels(cls, reels: Sequence[Sequence[Symbol]]) -> ReelGrid:
        """Build from a reel-major nested sequence: reels[reel][row]."""
        reel_count = len(reels)
        row_count = len(reels[0]) if reels else 0
        if any(len(reel) != row_count for reel in reels):
            raise ValueError("All reels must have the same number of rows")
        cells = [
            reels[reel][row]
            for row in range(row_count)
            for reel in range(reel_count)
        ]
        return cls(reel_count, row_count, cells)

    @property
    def reel_count(self) -> int:
        return self._reel_count

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def shape(self) -> tuple[int, int]:
        return self._reel_count, self._row_count

    def contains(self, reel: int, row: int) -> bool:
        return 0 <= reel < self._reel_count and 0 <= row < self._row_count

    def __getitem__(self, key: tuple[int, int]) -> Symbol:
        reel, row = key
        if not self.contains(reel, row):
            raise IndexError(f"Cell ({reel}, {row}) outside {self._reel_count}x{self._row_count} grid")
        return self._cells[row * self._reel_count + reel]

    def symbol_at(self, position: int) -> Symbol:
        """Symbol at an absolute cell index."""
        if not 0 <= position < len(self._cells):
            raise IndexError(f"Position {position} outside grid of {len(self._cells)} cells")
        return self._cells[position]

    def reel(self, reel: int) -> tuple[Symbol, ...]:
        """Symbols on one reel, top to bottom."""
        if not 0 <= reel < self._reel_count:
            raise IndexError(f"Reel {reel} out of range")
        return self._cells[reel::self._reel_count]

    def row(self, row: int) -> tuple[Symbol, ...]:
        """Symbols on one row, left to right."""
        if not 0 <= row < self._row_count:
            raise IndexError(f"Row {row} out of range")
        start = row * self._reel_count
        return self._cells[start:start + self._reel_count]

    def rows(self) -> list[tuple[Symbol, ...]]:
        return [self.row(r) for r in range(self._row_count)]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other):
        if not isinstance(other, ReelGrid):
            return NotImplemented
        return self.shape == other.shape and self._cells == other._cells

    def __hash__(self):
        return hash((self.shape, self._cells))

    def __repr__(self):
        return f"ReelGrid({self._reel_count}x{self._row_count})"

    def render(self) -> str:
        """Plain-text rendering, one row per line."""
        width = max((len(s.name) for s in self._cells), default=1)
        return "\n".join(
            " | ".join(s.name.ljust(width) for s in row)
            for row in self.rows()
        )
