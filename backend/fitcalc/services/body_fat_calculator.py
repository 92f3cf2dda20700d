"""
Body fat calculator service.

Implements the U.S. Navy circumference method for body fat percentage.
Measurements may be given in centimeters or inches; each unit system has
its own published coefficients, so no conversion is needed before calculating.
"""

import logging
import math
from typing import Optional, Union

from fitcalc.domain.errors import InvalidMeasurement
from fitcalc.domain.measurements import Gender, UnitSystem

logger = logging.getLogger(__name__)

MIN_BODY_FAT = 0.0
MAX_BODY_FAT = 60.0


def _require_positive(value: Optional[float], field: str) -> float:
    if value is None:
        raise InvalidMeasurement(f"{field.capitalize()} measurement is required", field=field)
    if value <= 0:
        raise InvalidMeasurement(f"{field.capitalize()} must be a positive value", field=field)
    return value


class BodyFatCalculator:
    """Service for calculating body fat percentage with the Navy method."""

    @staticmethod
    def calculate_navy_body_fat(
        gender: Union[Gender, str],
        height: float,
        waist: float,
        neck: float,
        hip: Optional[float] = None,
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    ) -> float:
        """
        Calculate body fat percentage using U.S. Navy method.

        Args:
            gender: "male" or "female"
            height: Height (cm or inches)
            waist: Waist circumference at the navel
            neck: Neck circumference below the larynx
            hip: Hip circumference at the widest point (required for women)
            unit_system: "metric"/"cm" or "imperial"/"inches"

        Returns:
            Body fat percentage clamped to 0-60, rounded to 1 decimal place

        Raises:
            InvalidMeasurement: If a measurement is missing or non-positive, or the
                waist/neck/hip combination leaves the logarithm undefined
        """
        gender = Gender.parse(gender)
        unit_system = UnitSystem.parse(unit_system)

        height = _require_positive(height, "height")
        waist = _require_positive(waist, "waist")
        neck = _require_positive(neck, "neck")

        if gender is Gender.MALE:
            circumference = waist - neck
            if circumference <= 0:
                raise InvalidMeasurement(
                    "Waist must be greater than neck circumference", field="waist"
                )
        else:
            if hip is None:
                raise InvalidMeasurement("Hip measurement is required for women", field="hip")
            hip = _require_positive(hip, "hip")
            circumference = waist + hip - neck
            if circumference <= 0:
                raise InvalidMeasurement(
                    "Waist plus hip must be greater than neck circumference", field="neck"
                )

        if unit_system is UnitSystem.METRIC:
            if gender is Gender.MALE:
                # 495 / (1.0324 - 0.19077×log10(waist - neck) + 0.15456×log10(height)) - 450
                density = (
                    1.0324
                    - 0.19077 * math.log10(circumference)
                    + 0.15456 * math.log10(height)
                )
            else:
                # 495 / (1.29579 - 0.35004×log10(waist + hip - neck) + 0.22100×log10(height)) - 450
                density = (
                    1.29579
                    - 0.35004 * math.log10(circumference)
                    + 0.22100 * math.log10(height)
                )
            if density <= 0:
                raise InvalidMeasurement(
                    "Measurements are outside the range supported by the Navy formula"
                )
            bfp = 495 / density - 450
        else:
            if gender is Gender.MALE:
                # 86.010×log10(waist - neck) - 70.041×log10(height) + 36.76
                bfp = (
                    86.010 * math.log10(circumference)
                    - 70.041 * math.log10(height)
                    + 36.76
                )
            else:
                # 163.205×log10(waist + hip - neck) - 97.684×log10(height) - 78.387
                bfp = (
                    163.205 * math.log10(circumference)
                    - 97.684 * math.log10(height)
                    - 78.387
                )

        # Values outside 0-60% are measurement error, not physiology
        clamped = max(MIN_BODY_FAT, min(MAX_BODY_FAT, bfp))
        if clamped != bfp:
            logger.debug(f"[BODY_FAT] Raw Navy estimate {bfp:.2f}% clamped to {clamped}%")

        return round(clamped, 1)

    @staticmethod
    def body_fat_category(body_fat_percentage: float, gender: Union[Gender, str]) -> str:
        """Quick label shown next to a Navy result."""
        gender = Gender.parse(gender)
        if gender is Gender.MALE:
            thresholds = ((6, "Essential Fat"), (14, "Athletic"), (18, "Fitness"), (25, "Average"))
        else:
            thresholds = ((16, "Essential Fat"), (21, "Athletic"), (25, "Fitness"), (32, "Average"))

        for upper, label in thresholds:
            if body_fat_percentage < upper:
                return label
        return "Obese"
