"""
Pytest fixtures for ReelSpin tests.
"""

import pytest

from ..spec_schema import MachineSpec, Payline, Symbol, default_machine_spec
from ..engine_core import SlotEngine, SequenceRandomProvider


@pytest.fixture
def symbols() -> tuple[Symbol, ...]:
    """Five distinct symbols A-E with distinct values."""
    return (
        Symbol(0, "A", 10),
        Symbol(1, "B", 20),
        Symbol(2, "C", 30),
        Symbol(3, "D", 40),
        Symbol(4, "E", 50),
    )


@pytest.fixture
def five_by_three_spec(symbols) -> MachineSpec:
    """5x3 machine, min match 3, the three row paylines."""
    return MachineSpec(
        reel_count=5,
        row_count=3,
        min_match_count=3,
        symbols=symbols,
        paylines=(
            Payline((0, 1, 2, 3, 4)),
            Payline((5, 6, 7, 8, 9)),
            Payline((10, 11, 12, 13, 14)),
        ),
        name="test_5x3",
    )


@pytest.fixture
def middle_row_spec(symbols) -> MachineSpec:
    """5x3 machine with a single middle-row payline."""
    return MachineSpec(
        reel_count=5,
        row_count=3,
        min_match_count=3,
        symbols=symbols,
        paylines=(Payline((5, 6, 7, 8, 9)),),
        name="middle_row",
    )


@pytest.fixture
def classic_spec() -> MachineSpec:
    return default_machine_spec()


def draws_for_rows(rows: list[list[int]]) -> list[int]:
    """
    Convert a row-major picture of symbol indices into provider draws.

    Reels are drawn reel-major, row-minor, so the n-th draw fills
    (reel n // row_count, row n % row_count).
    """
    row_count = len(rows)
    reel_count = len(rows[0])
    return [rows[row][reel] for reel in range(reel_count) for row in range(row_count)]


@pytest.fixture
def make_engine():
    """Factory: engine over a spec with a fixed draw sequence."""
    def _make(spec: MachineSpec, draws: list[int], cycle: bool = False) -> SlotEngine:
        return SlotEngine(spec, SequenceRandomProvider(draws, cycle=cycle))
    return _make
