"""
Reel Generator - Draws one symbol per cell.

Every cell is an independent uniform draw over the full symbol set:
no weights, no reel strips. Draw order is reel-major, row-minor, so the
n-th provider call always lands on the same cell:

    call 0 -> (reel 0, row 0), call 1 -> (reel 0, row 1), ...
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import SpecValidationError
from ..spec_schema.machine_spec import MachineSpec, Symbol
from .grid import ReelGrid
from .random_provider import RandomProvider


@dataclass
class ReelGenerator:
    """Fills a fresh grid from a random provider."""
    spec: MachineSpec
    random_provider: RandomProvider

    def generate(self) -> ReelGrid:
        symbols = self.spec.symbols
        if not symbols:
            raise SpecValidationError(["Cannot generate reels: symbols must not be empty"])

        reel_count = self.spec.reel_count
        row_count = self.spec.row_count
        reels: list[list[Symbol]] = []
        for _reel in range(reel_count):
            column = []
            for _row in range(row_count):
                index = self.random_provider.next(len(symbols))
                column.append(symbols[index])
            reels.append(column)

        return ReelGrid.from_reels(reels)
