"""
Calculation errors.

All errors subclass ValueError so API handlers can map them to 400 responses.
"""

from typing import Optional


class CalculationError(ValueError):
    """Base class for errors raised by the calculators."""


class InvalidMeasurement(CalculationError):
    """A required measurement is missing, non-positive, or unsupported by a formula."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class UnsupportedCategory(CalculationError):
    """A category standard with no matching reference table was requested."""

    def __init__(self, standard: str):
        self.standard = standard
        super().__init__(
            f"Unsupported category standard '{standard}'. "
            "Expected one of: ace, nih, acsm"
        )
