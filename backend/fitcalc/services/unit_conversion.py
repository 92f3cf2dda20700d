"""
Unit conversion helpers.

Converts lengths (cm <-> inches) and weights (kg <-> lbs). The public
conversions round to one decimal place, matching what a user sees in a form;
the unrounded helpers are for formulas that need exact metric values.
"""

from typing import Union

from fitcalc.domain.errors import InvalidMeasurement
from fitcalc.domain.measurements import UnitSystem

CM_PER_INCH = 2.54
LBS_PER_KG = 2.20462

UnitLike = Union[UnitSystem, str]


def convert_measurement(value: float, from_unit: UnitLike, kind: str = "length") -> float:
    """
    Convert a measurement into the other unit system.

    Args:
        value: The value to convert
        from_unit: Unit the value is in ("cm", "inches", "kg", "lbs",
            "metric" or "imperial")
        kind: "length" or "weight"

    Returns:
        Converted value rounded to one decimal place

    Raises:
        InvalidMeasurement: If the unit or kind is unknown
    """
    system = UnitSystem.parse(from_unit)

    if kind == "weight":
        if system is UnitSystem.METRIC:
            converted = value * LBS_PER_KG
        else:
            converted = value / LBS_PER_KG
    elif kind == "length":
        if system is UnitSystem.METRIC:
            converted = value / CM_PER_INCH
        else:
            converted = value * CM_PER_INCH
    else:
        raise InvalidMeasurement(
            f"Unknown conversion type '{kind}'. Use 'length' or 'weight'",
            field="kind",
        )

    return round(converted, 1)


def convert_length(value: float, from_system: UnitLike) -> float:
    """Convert a length to the other unit system (cm <-> inches)."""
    return convert_measurement(value, from_system, "length")


def convert_weight(value: float, from_system: UnitLike) -> float:
    """Convert a weight to the other unit system (kg <-> lbs)."""
    return convert_measurement(value, from_system, "weight")


def height_unit(unit: UnitLike) -> str:
    return UnitSystem.parse(unit).length_unit


def weight_unit(unit: UnitLike) -> str:
    return UnitSystem.parse(unit).weight_unit


def length_to_cm(value: float, unit_system: UnitSystem) -> float:
    return value if unit_system is UnitSystem.METRIC else value * CM_PER_INCH


def length_to_inches(value: float, unit_system: UnitSystem) -> float:
    return value / CM_PER_INCH if unit_system is UnitSystem.METRIC else value


def length_to_m(value: float, unit_system: UnitSystem) -> float:
    return length_to_cm(value, unit_system) / 100.0


def weight_to_kg(value: float, unit_system: UnitSystem) -> float:
    return value if unit_system is UnitSystem.METRIC else value / LBS_PER_KG


def kg_to_weight(value_kg: float, unit_system: UnitSystem) -> float:
    """Express a kilogram value in the weight unit of a unit system."""
    return value_kg if unit_system is UnitSystem.METRIC else value_kg * LBS_PER_KG
