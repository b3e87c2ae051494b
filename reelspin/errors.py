"""
Errors raised by the engine and its outer surfaces.

Everything derives from ReelSpinError so callers can catch the family,
while each error also subclasses the builtin it conceptually is
(ValueError for bad configuration, RuntimeError for lifecycle misuse).
"""


class ReelSpinError(Exception):
    """Base class for all reelspin errors."""


class SpecValidationError(ReelSpinError, ValueError):
    """Raised when a machine spec is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Spec validation failed with {len(errors)} error(s): " + "; ".join(errors)
        )


class SpinInProgressError(ReelSpinError, RuntimeError):
    """Raised when a spin is requested while another one is running."""

    def __init__(self, message: str = "Cannot spin while another spin is in progress"):
        super().__init__(message)


class RandomSourceExhausted(ReelSpinError, RuntimeError):
    """Raised when a fixed-sequence random provider runs out of values."""
