"""
Payline Evaluator - Scores paylines against a landed grid.

For each payline:
1. Resolve positions to cells, skipping any outside the grid
2. Take the symbol on the first resolved cell
3. Extend the run while following cells hold the same symbol
4. Pay symbol.value * run length if the run reaches min_match_count

Only the leading run counts. A line that opens on a loser and has a long
run further along does not win. Paylines are independent, and the same
cell may be part of several winning lines.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Sequence

from ..spec_schema.machine_spec import MachineSpec, Symbol
from .grid import ReelGrid
from .outcome import PaylineMatch

logger = logging.getLogger(__name__)


@dataclass
class PaylineEvaluator:
    """Evaluates every active payline of a spec."""
    spec: MachineSpec

    def evaluate(self, grid: ReelGrid) -> tuple[PaylineMatch, ...]:
        """Return the winning paylines in configured order."""
        matches = []
        for index, positions in enumerate(self.spec.active_paylines):
            match = self.evaluate_payline(index, positions, grid)
            if match is not None:
                matches.append(match)
        return tuple(matches)

    def evaluate_payline(
        self,
        payline_index: int,
        positions: Sequence[int],
        grid: ReelGrid,
    ) -> PaylineMatch | None:
        """Evaluate one payline. Returns None when it does not pay."""
        if not positions:
            return None

        symbols, resolved = self._extract_symbols(payline_index, positions, grid)
        if not symbols:
            return None

        match_count = self._leading_run(symbols)
        if match_count < self.spec.min_match_count:
            return None

        first = symbols[0]
        base = self.base_payout(first, match_count)
        return PaylineMatch(
            payline_index=payline_index,
            symbol=first,
            match_count=match_count,
            payout=self.apply_multipliers(base, first, match_count),
            matched_positions=tuple(resolved[:match_count]),
        )

    def _extract_symbols(
        self,
        payline_index: int,
        positions: Sequence[int],
        grid: ReelGrid,
    ) -> tuple[list[Symbol], list[int]]:
        symbols: list[Symbol] = []
        resolved: list[int] = []
        for position in positions:
            # Negative positions would wrap under floor division
            if position < 0:
                logger.debug("Payline %d: skipping negative position %d", payline_index, position)
                continue
            reel, row = self.spec.position_to_cell(position)
            if not grid.contains(reel, row):
                logger.debug(
                    "Payline %d: skipping position %d outside the grid", payline_index, position
                )
                continue
            symbols.append(grid[reel, row])
            resolved.append(position)
        return symbols, resolved

    @staticmethod
    def _leading_run(symbols: Sequence[Symbol]) -> int:
        first = symbols[0]
        count = 1
        for symbol in symbols[1:]:
            if not first.same_symbol(symbol):
                break
            count += 1
        return count

    @staticmethod
    def base_payout(symbol: Symbol, match_count: int) -> int:
        return symbol.value * match_count

    def apply_multipliers(self, base_payout: int, symbol: Symbol, match_count: int) -> int:
        """Line multiplier hook. No multipliers are defined, so this is a pass-through."""
        return base_payout
