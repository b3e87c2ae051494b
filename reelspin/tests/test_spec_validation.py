"""
Tests for machine spec schema and validation.

Tests:
- Symbol identity equality
- MachineSpec construction and cell mapping
- Validation errors and warnings
- Loading from dicts and JSON files
"""

import json

import pytest

from ..spec_schema import (
    MachineSpec,
    Payline,
    Symbol,
    SpecValidationError,
    default_machine_spec,
    ensure_valid,
    load_spec,
    validate_spec,
)


class TestSymbol:
    """Tests for symbol identity."""

    def test_equality_ignores_name_and_value(self):
        """Same id means same symbol, whatever the name or value."""
        assert Symbol(1, "Bell", 30) == Symbol(1, "Other", 99)

    def test_different_ids_differ_even_if_lookalike(self):
        """Same name and value but different id are different symbols."""
        a = Symbol(1, "Bell", 30)
        b = Symbol(2, "Bell", 30)
        assert a != b
        assert not a.same_symbol(b)

    def test_hash_follows_id(self):
        assert len({Symbol(1, "x", 1), Symbol(1, "y", 2), Symbol(2, "x", 1)}) == 2

    def test_immutable(self):
        symbol = Symbol(1, "Bell", 30)
        with pytest.raises(AttributeError):
            symbol.value = 40


class TestMachineSpec:
    """Tests for MachineSpec construction."""

    def test_lists_become_tuples(self, symbols):
        spec = MachineSpec(5, 3, 3, list(symbols), [[0, 1, 2]])
        assert isinstance(spec.symbols, tuple)
        assert spec.paylines == (Payline((0, 1, 2)),)

    def test_position_to_cell(self, five_by_three_spec):
        """Cell index p maps to (p % reels, p // reels)."""
        spec = five_by_three_spec
        assert spec.position_to_cell(0) == (0, 0)
        assert spec.position_to_cell(7) == (2, 1)
        assert spec.position_to_cell(14) == (4, 2)
        assert spec.cell_to_position(2, 1) == 7

    def test_inactive_paylines_excluded(self, symbols):
        spec = MachineSpec(
            5, 3, 3, symbols,
            [Payline((0, 1, 2)), Payline((5, 6, 7), active=False), Payline((10, 11, 12))],
        )
        assert spec.active_paylines == ((0, 1, 2), (10, 11, 12))

    def test_default_spec_matches_classic_layout(self):
        spec = default_machine_spec()
        assert (spec.reel_count, spec.row_count, spec.min_match_count) == (5, 3, 3)
        assert [s.name for s in spec.symbols] == [
            "Cherry", "Lemon", "Orange", "Plum", "Bell", "Bar", "Seven",
        ]
        assert spec.get_symbol(6).value == 100
        assert spec.active_paylines[0] == (5, 6, 7, 8, 9)
        assert len(spec.active_paylines) == 5

    def test_round_trip_through_dict(self):
        spec = default_machine_spec()
        assert MachineSpec.from_dict(spec.to_dict()) == spec


class TestValidation:
    """Tests for validate_spec."""

    def test_default_spec_is_valid(self):
        result = validate_spec(default_machine_spec())
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.parametrize(
        "reels,rows,min_match,message",
        [
            (0, 3, 1, "reel_count"),
            (5, 0, 3, "row_count"),
            (5, 3, 0, "min_match_count"),
            (3, 3, 4, "min_match_count must be <= reel_count"),
        ],
    )
    def test_bad_geometry(self, symbols, reels, rows, min_match, message):
        result = validate_spec(MachineSpec(reels, rows, min_match, symbols))
        assert not result.valid
        assert any(message in e for e in result.errors)

    def test_empty_symbols(self):
        result = validate_spec(MachineSpec(5, 3, 3, ()))
        assert not result.valid
        assert "symbols must not be empty" in result.errors

    def test_duplicate_symbol_ids(self):
        result = validate_spec(MachineSpec(5, 3, 3, (Symbol(1, "a", 1), Symbol(1, "b", 2))))
        assert any("Duplicate symbol id 1" in e for e in result.errors)

    def test_negative_value(self):
        result = validate_spec(MachineSpec(5, 3, 3, (Symbol(1, "a", -5),)))
        assert any("negative value" in e for e in result.errors)

    def test_payline_warnings(self, symbols):
        spec = MachineSpec(5, 3, 3, symbols, [[0, 1, 99], [], [0, 1]])
        result = validate_spec(spec)
        assert result.valid
        assert any("outside the grid" in w for w in result.warnings)
        assert any("has no positions" in w for w in result.warnings)
        assert any("can never win" in w for w in result.warnings)

    def test_ensure_valid_raises_with_all_errors(self):
        with pytest.raises(SpecValidationError) as exc_info:
            ensure_valid(MachineSpec(0, 0, 3, ()))
        assert len(exc_info.value.errors) >= 3

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_valid(MachineSpec(5, 3, 3, ()))


class TestLoading:
    """Tests for loading specs from dicts and files."""

    def test_from_dict_accepts_bare_and_object_paylines(self):
        spec = MachineSpec.from_dict({
            "reel_count": 3,
            "row_count": 1,
            "min_match_count": 2,
            "symbols": [{"id": 0, "name": "A", "value": 5}],
            "paylines": [[0, 1, 2], {"positions": [2, 1, 0], "active": False, "name": "back"}],
        })
        assert spec.paylines[0].positions == (0, 1, 2)
        assert spec.paylines[1].name == "back"
        assert spec.active_paylines == ((0, 1, 2),)

    def test_from_dict_collects_type_errors(self):
        with pytest.raises(SpecValidationError) as exc_info:
            MachineSpec.from_dict({
                "reel_count": "five",
                "row_count": 3,
                "min_match_count": 3,
                "symbols": [{"id": "x"}],
                "paylines": [["a"]],
            })
        errors = exc_info.value.errors
        assert any("reel_count" in e for e in errors)
        assert any("symbols[0].id" in e for e in errors)
        assert any("paylines[0]" in e for e in errors)

    @pytest.mark.parametrize("active", ["false", 0, None])
    def test_payline_active_must_be_bool(self, active):
        """A mistyped flag is an error, not a silently active payline."""
        with pytest.raises(SpecValidationError) as exc_info:
            MachineSpec.from_dict({
                "reel_count": 3,
                "row_count": 1,
                "min_match_count": 2,
                "symbols": [{"id": 0, "name": "A", "value": 5}],
                "paylines": [[0, 1, 2], {"positions": [2, 1, 0], "active": active}],
            })
        assert exc_info.value.errors == [
            f"paylines[1]: payline 'active' must be true or false, got {active!r}"
        ]

    def test_load_spec_from_file(self, tmp_path):
        path = tmp_path / "machine.json"
        path.write_text(json.dumps(default_machine_spec().to_dict()))
        assert load_spec(path) == default_machine_spec()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(SpecValidationError) as exc_info:
            load_spec(tmp_path / "nope.json")
        assert "not found" in exc_info.value.errors[0]

    def test_load_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SpecValidationError) as exc_info:
            load_spec(path)
        assert "Invalid JSON" in exc_info.value.errors[0]

    def test_load_invalid_spec(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({
            "reel_count": 5, "row_count": 3, "min_match_count": 3, "symbols": [],
        }))
        with pytest.raises(SpecValidationError):
            load_spec(path)
