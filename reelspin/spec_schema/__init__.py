"""Machine specification schema - symbols, paylines, geometry."""

from .machine_spec import MachineSpec, Payline, Symbol, default_machine_spec
from .validation import (
    ValidationResult,
    validate_spec,
    ensure_valid,
    load_spec,
    SpecValidationError,
)

__all__ = [
    "MachineSpec",
    "Payline",
    "Symbol",
    "default_machine_spec",
    "ValidationResult",
    "validate_spec",
    "ensure_valid",
    "load_spec",
    "SpecValidationError",
]
