"""
Body fat category lookup across ACE, NIH/Gallagher and ACSM standards.
"""

import logging
from typing import List, Optional, Union

from fitcalc.domain.measurements import (
    CategoryMatch,
    CategoryStandard,
    Gender,
    UnitSystem,
)
from fitcalc.domain.reference_tables import AGE_BANDS, bands_for
from fitcalc.services.body_composition_service import weight_at_lean_mass

logger = logging.getLogger(__name__)


def age_band_for(age: float, standard: Union[CategoryStandard, str]) -> Optional[str]:
    """
    Map an age to the age band label used by a standard's tables.

    Returns None for ACE (no age bands) and for ages outside the table.
    """
    standard = CategoryStandard.parse(standard)
    for label, first, last in AGE_BANDS.get(standard, ()):
        if age >= first and (last is None or age < last + 1):
            return label
    return None


def lookup_categories(
    value: float,
    gender: Union[Gender, str],
    standard: Union[CategoryStandard, str],
    age_band: Optional[str] = None,
    weight: Optional[float] = None,
    current_body_fat: Optional[float] = None,
    unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
) -> List[CategoryMatch]:
    """
    List a standard's categories, flagging the one containing value.

    Args:
        value: Body fat percentage to classify
        gender: "male" or "female"
        standard: "ace", "nih" or "acsm"
        age_band: Age band label, e.g. "20-39" (NIH) or "60+" (ACSM); ignored for ACE
        weight: Current weight, to estimate the weight at each band's boundaries
            (skipped when the body fat is outside 0-100)
        current_body_fat: Body fat at that weight (defaults to value)
        unit_system: Unit system of weight

    Returns:
        Bands in table order. Empty when the age band is not in the table.
        No band is flagged when value is below the lowest band's minimum.

    Raises:
        UnsupportedCategory: If the standard is unknown
    """
    gender = Gender.parse(gender)
    standard = CategoryStandard.parse(standard)
    unit_system = UnitSystem.parse(unit_system)

    bands = bands_for(standard, gender, age_band)
    if not bands:
        logger.debug(
            f"[CATEGORIES] No {standard.value} table for {gender.value} age band {age_band!r}"
        )
        return []

    if current_body_fat is None:
        current_body_fat = value
    # Boundary weights need a body fat that leaves some lean mass
    estimate_weights = weight is not None and 0 <= current_body_fat < 100

    matches = []
    for band in bands:
        weight_at_min = weight_at_max = None
        if estimate_weights:
            weight_at_min = weight_at_lean_mass(
                weight, current_body_fat, band.min_percent, unit_system
            )
            if band.max_percent is not None:
                weight_at_max = weight_at_lean_mass(
                    weight, current_body_fat, band.max_percent, unit_system
                )

        matches.append(
            CategoryMatch(
                label=band.label,
                min_percent=band.min_percent,
                max_percent=band.max_percent,
                is_current=band.contains(value),
                weight_at_min=weight_at_min,
                weight_at_max=weight_at_max,
            )
        )

    return matches
