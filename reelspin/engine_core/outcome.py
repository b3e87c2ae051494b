"""
Spin Outcome - The immutable record of one resolved spin.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable

from ..spec_schema.machine_spec import Symbol
from .grid import ReelGrid


@dataclass(frozen=True)
class PaylineMatch:
    """
    A winning payline.

    matched_positions is the leading slice of the payline's positions
    covered by the run, in the payline's own order.
    """
    payline_index: int
    symbol: Symbol
    match_count: int
    payout: int
    matched_positions: tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "matched_positions", tuple(self.matched_positions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "payline_index": self.payline_index,
            "symbol_id": self.symbol.symbol_id,
            "symbol_name": self.symbol.name,
            "match_count": self.match_count,
            "payout": self.payout,
            "matched_positions": list(self.matched_positions),
        }


@dataclass(frozen=True, init=False)
class SpinOutcome:
    """Grid plus winning paylines. total_payout is computed on construction."""
    grid: ReelGrid
    matches: tuple[PaylineMatch, ...]
    total_payout: int

    def __init__(self, grid: ReelGrid, matches: Iterable[PaylineMatch] = ()):
        matches = tuple(matches)
        object.__setattr__(self, "grid", grid)
        object.__setattr__(self, "matches", matches)
        object.__setattr__(self, "total_payout", sum(m.payout for m in matches))

    @property
    def is_win(self) -> bool:
        return self.total_payout > 0

    @property
    def winning_positions(self) -> tuple[int, ...]:
        """Every matched cell index, match by match. May contain repeats."""
        return tuple(p for m in self.matches for p in m.matched_positions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid": [[s.symbol_id for s in row] for row in self.grid.rows()],
            "matches": [m.to_dict() for m in self.matches],
            "total_payout": self.total_payout,
            "is_win": self.is_win,
        }
