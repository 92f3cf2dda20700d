"""
Body composition analytics.

Derives fat mass, lean mass, ideal body fat and goal weights from a body fat
percentage. Weight-based results are returned as Mass values in the weight
unit of the caller's unit system (kg for metric, lbs for imperial).

The BMI-based estimate is an independent cross-check of a Navy reading.
The two may disagree and are reported side by side, never reconciled.
"""

import logging
from typing import Optional, Union

from fitcalc.domain.errors import InvalidMeasurement
from fitcalc.domain.measurements import (
    BodyCompositionReport,
    Gender,
    Mass,
    UnitSystem,
    WeightRange,
)
from fitcalc.domain.reference_tables import IDEAL_BODY_FAT
from fitcalc.services.body_fat_calculator import BodyFatCalculator
from fitcalc.services.unit_conversion import kg_to_weight, length_to_m, weight_to_kg

logger = logging.getLogger(__name__)

# Reference BMI and healthy body fat bounds used for the ideal weight range
REFERENCE_BMI = {Gender.MALE: 22.5, Gender.FEMALE: 21.5}
HEALTHY_BODY_FAT = {Gender.MALE: (8.0, 19.0), Gender.FEMALE: (21.0, 32.0)}


def _mass(value: float, unit_system: UnitSystem) -> Mass:
    return Mass(value=round(value, 1), unit=unit_system.weight_unit)


def _check_weight(weight: float) -> None:
    if weight is None or weight <= 0:
        raise InvalidMeasurement("Weight must be a positive value", field="weight")


def _check_height(height: float) -> None:
    if height is None or height <= 0:
        raise InvalidMeasurement("Height must be a positive value", field="height")


def _check_body_fat(body_fat_percentage: float, field: str = "body_fat_percentage") -> None:
    if body_fat_percentage is None or not 0 <= body_fat_percentage < 100:
        raise InvalidMeasurement(
            "Body fat percentage must be at least 0 and below 100", field=field
        )


def ideal_body_fat(age: float, gender: Union[Gender, str]) -> float:
    """
    Ideal body fat percentage for an age, by linear interpolation.

    Ages below 20 use the 20-year value and ages above 55 the 55-year value;
    the table is never extrapolated.

    Args:
        age: Age in years (fractional ages are interpolated)
        gender: "male" or "female"

    Returns:
        Ideal body fat percentage rounded to 1 decimal place
    """
    points = IDEAL_BODY_FAT[Gender.parse(gender)]
    first, last = points[0], points[-1]

    if age <= first.age:
        return first.ideal_body_fat
    if age >= last.age:
        return last.ideal_body_fat

    for lower, upper in zip(points, points[1:]):
        if lower.age <= age <= upper.age:
            slope = (upper.ideal_body_fat - lower.ideal_body_fat) / (upper.age - lower.age)
            return round(lower.ideal_body_fat + (age - lower.age) * slope, 1)

    return last.ideal_body_fat


def fat_mass(
    weight: float, body_fat_percentage: float, unit_system: Union[UnitSystem, str]
) -> Mass:
    """Fat mass = weight × body fat / 100."""
    _check_weight(weight)
    _check_body_fat(body_fat_percentage)
    return _mass(weight * body_fat_percentage / 100.0, UnitSystem.parse(unit_system))


def lean_mass(
    weight: float, body_fat_percentage: float, unit_system: Union[UnitSystem, str]
) -> Mass:
    """Lean mass = weight × (1 - body fat / 100)."""
    _check_weight(weight)
    _check_body_fat(body_fat_percentage)
    return _mass(weight * (1 - body_fat_percentage / 100.0), UnitSystem.parse(unit_system))


def bmi_based_body_fat(
    weight: float,
    height: float,
    age: float,
    gender: Union[Gender, str],
    unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
) -> float:
    """
    Estimate body fat percentage from BMI (Deurenberg).

    Formula: (1.20 × BMI) + (0.23 × age) - (10.8 × gender) - 5.4,
    where gender is 1 for men and 0 for women.

    Args:
        weight: Weight in kg or lbs
        height: Height in cm or inches
        age: Age in years
        gender: "male" or "female"
        unit_system: Unit system of weight and height

    Returns:
        Body fat percentage rounded to 1 decimal place (not clamped)

    Raises:
        InvalidMeasurement: If weight, height or age is not positive
    """
    gender = Gender.parse(gender)
    unit_system = UnitSystem.parse(unit_system)
    _check_weight(weight)
    _check_height(height)
    if age is None or age <= 0:
        raise InvalidMeasurement("Age must be a positive value", field="age")

    height_m = length_to_m(height, unit_system)
    bmi = weight_to_kg(weight, unit_system) / (height_m * height_m)
    gender_factor = 1 if gender is Gender.MALE else 0

    return round(1.20 * bmi + 0.23 * age - 10.8 * gender_factor - 5.4, 1)


def weight_at_lean_mass(
    weight: float,
    current_body_fat: float,
    target_body_fat: float,
    unit_system: Union[UnitSystem, str],
) -> Mass:
    """Total weight at a target body fat, holding current lean mass constant."""
    _check_weight(weight)
    _check_body_fat(current_body_fat, field="current_body_fat")
    _check_body_fat(target_body_fat, field="target_body_fat")

    lean = weight * (1 - current_body_fat / 100.0)
    return _mass(lean / (1 - target_body_fat / 100.0), UnitSystem.parse(unit_system))


def fat_to_lose(
    weight: float,
    current_body_fat: float,
    age: float,
    gender: Union[Gender, str],
    unit_system: Union[UnitSystem, str],
) -> Mass:
    """
    Fat mass to lose to reach the ideal body fat for an age.

    Lean mass is held constant: the ideal weight is lean / (1 - ideal / 100),
    and the answer is the current fat mass minus the fat mass at that weight.
    Zero when already at or below the ideal.
    """
    unit_system = UnitSystem.parse(unit_system)
    _check_weight(weight)
    _check_body_fat(current_body_fat, field="current_body_fat")

    ideal = ideal_body_fat(age, gender)
    if current_body_fat <= ideal:
        return _mass(0.0, unit_system)

    current_fat = weight * (current_body_fat / 100.0)
    lean = weight * (1 - current_body_fat / 100.0)
    ideal_weight = lean / (1 - ideal / 100.0)
    ideal_fat = ideal_weight * (ideal / 100.0)

    return _mass(current_fat - ideal_fat, unit_system)


def ideal_weight_by_fat(
    weight: float,
    current_body_fat: float,
    age: float,
    gender: Union[Gender, str],
    unit_system: Union[UnitSystem, str],
) -> Mass:
    """Weight at the ideal body fat for an age, keeping current lean mass."""
    ideal = ideal_body_fat(age, gender)
    return weight_at_lean_mass(weight, current_body_fat, ideal, unit_system)


def ideal_weight_range(
    height: float,
    gender: Union[Gender, str],
    unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
) -> WeightRange:
    """
    Healthy weight range for a height.

    A reference weight is taken at BMI 22.5 (men) or 21.5 (women) and scaled
    by the healthy body fat bounds: 8-19% for men, 21-32% for women.
    """
    gender = Gender.parse(gender)
    unit_system = UnitSystem.parse(unit_system)
    _check_height(height)

    height_m = length_to_m(height, unit_system)
    reference_kg = REFERENCE_BMI[gender] * height_m * height_m
    healthy_min, healthy_max = HEALTHY_BODY_FAT[gender]

    low_kg = reference_kg / (1 - healthy_min / 100.0)
    high_kg = reference_kg / (1 - healthy_max / 100.0)

    return WeightRange(
        low=_mass(kg_to_weight(low_kg, unit_system), unit_system),
        high=_mass(kg_to_weight(high_kg, unit_system), unit_system),
    )


def weight_at_body_fat(
    height: float,
    body_fat_percentage: float,
    gender: Union[Gender, str],
    unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
) -> Mass:
    """Weight at a body fat percentage, taking the reference-BMI weight as lean mass."""
    gender = Gender.parse(gender)
    unit_system = UnitSystem.parse(unit_system)
    _check_height(height)
    _check_body_fat(body_fat_percentage)

    height_m = length_to_m(height, unit_system)
    lean_kg = REFERENCE_BMI[gender] * height_m * height_m
    actual_kg = lean_kg / (1 - body_fat_percentage / 100.0)

    return _mass(kg_to_weight(actual_kg, unit_system), unit_system)


def analyze_body_composition(
    gender: Union[Gender, str],
    weight: float,
    body_fat_percentage: float,
    age: float,
    unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    height: Optional[float] = None,
) -> BodyCompositionReport:
    """
    Build the full composition report for one body fat reading.

    The BMI-based estimate and ideal weight range need a height; without one
    they are left empty.
    """
    gender = Gender.parse(gender)
    unit_system = UnitSystem.parse(unit_system)

    bmi_estimate = None
    weight_range = None
    if height is not None:
        bmi_estimate = bmi_based_body_fat(weight, height, age, gender, unit_system)
        weight_range = ideal_weight_range(height, gender, unit_system)

    report = BodyCompositionReport(
        body_fat_percentage=body_fat_percentage,
        category=BodyFatCalculator.body_fat_category(body_fat_percentage, gender),
        fat_mass=fat_mass(weight, body_fat_percentage, unit_system),
        lean_mass=lean_mass(weight, body_fat_percentage, unit_system),
        bmi_body_fat_percentage=bmi_estimate,
        ideal_body_fat_percentage=ideal_body_fat(age, gender),
        fat_to_lose=fat_to_lose(weight, body_fat_percentage, age, gender, unit_system),
        ideal_weight_by_fat=ideal_weight_by_fat(
            weight, body_fat_percentage, age, gender, unit_system
        ),
        ideal_weight_range=weight_range,
    )
    logger.debug(
        f"[BODY_COMPOSITION] {gender.value} bf={body_fat_percentage}% "
        f"ideal={report.ideal_body_fat_percentage}% navy/bmi={body_fat_percentage}/{bmi_estimate}"
    )
    return report
