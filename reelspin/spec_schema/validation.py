"""
Spec Validation - Checks that a machine spec can be spun.

Validates that:
1. Grid geometry is positive
2. The minimum match fits on a reel row (1 <= M <= reel_count)
3. The symbol set is non-empty, with unique ids and non-negative values
4. Paylines are sane (warnings only, the evaluator tolerates bad positions)
"""

from __future__ import annotations
from dataclasses import dataclass
import json
import logging
from pathlib import Path

from ..errors import SpecValidationError
from .machine_spec import MachineSpec

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_spec(spec: MachineSpec) -> ValidationResult:
    """
    Validate a machine specification.

    Returns ValidationResult with errors and warnings.
    Use ensure_valid() to raise instead.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if spec.reel_count < 1:
        errors.append("reel_count must be >= 1")
    if spec.row_count < 1:
        errors.append("row_count must be >= 1")
    if spec.min_match_count < 1:
        errors.append("min_match_count must be >= 1")
    elif spec.reel_count >= 1 and spec.min_match_count > spec.reel_count:
        errors.append("min_match_count must be <= reel_count")

    if not spec.symbols:
        errors.append("symbols must not be empty")

    seen_ids: set[int] = set()
    for symbol in spec.symbols:
        if symbol.symbol_id in seen_ids:
            errors.append(f"Duplicate symbol id {symbol.symbol_id}")
        seen_ids.add(symbol.symbol_id)
        if symbol.value < 0:
            errors.append(f"Symbol '{symbol.name}' has negative value {symbol.value}")

    # Geometry errors make position checks meaningless
    if spec.reel_count >= 1 and spec.row_count >= 1:
        for index, payline in enumerate(spec.paylines):
            warnings.extend(_check_payline(spec, index, payline.positions))

    if not spec.active_paylines:
        warnings.append("No active paylines - every spin will lose")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _check_payline(spec: MachineSpec, index: int, positions: tuple[int, ...]) -> list[str]:
    warnings = []
    if not positions:
        warnings.append(f"Payline {index} has no positions")
        return warnings

    out_of_range = [p for p in positions if not 0 <= p < spec.cell_count]
    if out_of_range:
        warnings.append(
            f"Payline {index} has positions outside the grid: {out_of_range}"
        )
    if len(positions) < spec.min_match_count:
        warnings.append(
            f"Payline {index} is shorter than min_match_count and can never win"
        )
    return warnings


def ensure_valid(spec: MachineSpec) -> MachineSpec:
    """Raise SpecValidationError if the spec has errors; log warnings."""
    result = validate_spec(spec)
    if not result.valid:
        raise SpecValidationError(result.errors)
    for warning in result.warnings:
        logger.warning("Spec '%s': %s", spec.name, warning)
    return spec


def load_spec(path: str | Path) -> MachineSpec:
    """
    Load and validate a machine spec from a JSON file.

    Raises:
        SpecValidationError: file missing, malformed JSON, or invalid spec.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SpecValidationError([f"Spec file not found: {path}"])
    except json.JSONDecodeError as e:
        raise SpecValidationError(
            [f"Invalid JSON in {path}: {e.msg} (line {e.lineno}, col {e.colno})"]
        )

    spec = ensure_valid(MachineSpec.from_dict(data))
    logger.info("Loaded spec '%s' from %s", spec.name, path)
    return spec
