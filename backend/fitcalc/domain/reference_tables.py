"""
Fixed reference data for body composition.

- Ideal body fat by age (Jackson & Pollock), 5-year steps from 20 to 55.
- Body fat categories from three standards:
  ACE (by gender), NIH/Gallagher (gender x 3 age bands) and
  ACSM (gender x 5 age bands).

Published ranges are inclusive whole percentages ("8-20%"). They are stored
as half-open bands [min, max) with max set to the next whole percent, so a
reading of exactly 20.0% is still inside an "8-20%" band.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from fitcalc.domain.measurements import (
    AgeBodyFatReferencePoint,
    CategoryBand,
    CategoryStandard,
    Gender,
)


def _points(*pairs) -> Tuple[AgeBodyFatReferencePoint, ...]:
    return tuple(
        AgeBodyFatReferencePoint(age=age, ideal_body_fat=bf) for age, bf in pairs
    )


def _bands(*rows) -> Tuple[CategoryBand, ...]:
    return tuple(
        CategoryBand(label=label, min_percent=low, max_percent=high)
        for label, low, high in rows
    )


IDEAL_BODY_FAT = MappingProxyType(
    {
        Gender.MALE: _points(
            (20, 8.5), (25, 10.5), (30, 12.7), (35, 13.7),
            (40, 15.3), (45, 16.4), (50, 18.9), (55, 20.9),
        ),
        Gender.FEMALE: _points(
            (20, 17.7), (25, 18.4), (30, 19.3), (35, 21.5),
            (40, 22.2), (45, 22.9), (50, 25.2), (55, 26.3),
        ),
    }
)

# Age bands as (label, first age, last age or None when open-ended)
NIH_AGE_BANDS = (("20-39", 20, 39), ("40-59", 40, 59), ("60-79", 60, 79))
ACSM_AGE_BANDS = (
    ("20-29", 20, 29),
    ("30-39", 30, 39),
    ("40-49", 40, 49),
    ("50-59", 50, 59),
    ("60+", 60, None),
)

ACE_CATEGORIES = MappingProxyType(
    {
        Gender.MALE: _bands(
            ("Essential Fat", 2, 6),
            ("Athletes", 6, 14),
            ("Fitness", 14, 18),
            ("Average", 18, 25),
            ("Obese", 25, None),
        ),
        Gender.FEMALE: _bands(
            ("Essential Fat", 10, 14),
            ("Athletes", 14, 21),
            ("Fitness", 21, 25),
            ("Average", 25, 32),
            ("Obese", 32, None),
        ),
    }
)

NIH_CATEGORIES = MappingProxyType(
    {
        Gender.MALE: MappingProxyType(
            {
                "20-39": _bands(
                    ("Underfat", 0, 8),
                    ("Healthy", 8, 21),
                    ("Overfat", 21, 26),
                    ("Obese", 26, None),
                ),
                "40-59": _bands(
                    ("Underfat", 0, 11),
                    ("Healthy", 11, 22),
                    ("Overfat", 22, 29),
                    ("Obese", 29, None),
                ),
                "60-79": _bands(
                    ("Underfat", 0, 13),
                    ("Healthy", 13, 25),
                    ("Overfat", 25, 30),
                    ("Obese", 30, None),
                ),
            }
        ),
        Gender.FEMALE: MappingProxyType(
            {
                "20-39": _bands(
                    ("Underfat", 0, 21),
                    ("Healthy", 21, 34),
                    ("Overfat", 34, 40),
                    ("Obese", 40, None),
                ),
                "40-59": _bands(
                    ("Underfat", 0, 23),
                    ("Healthy", 23, 35),
                    ("Overfat", 35, 41),
                    ("Obese", 41, None),
                ),
                "60-79": _bands(
                    ("Underfat", 0, 24),
                    ("Healthy", 24, 37),
                    ("Overfat", 37, 43),
                    ("Obese", 43, None),
                ),
            }
        ),
    }
)

ACSM_CATEGORIES = MappingProxyType(
    {
        Gender.MALE: MappingProxyType(
            {
                "20-29": _bands(
                    ("Excellent", 0, 11),
                    ("Good", 11, 15),
                    ("Average", 15, 19),
                    ("Below Average", 19, 23),
                    ("Poor", 23, None),
                ),
                "30-39": _bands(
                    ("Excellent", 0, 12),
                    ("Good", 12, 16),
                    ("Average", 16, 20),
                    ("Below Average", 20, 24),
                    ("Poor", 24, None),
                ),
                "40-49": _bands(
                    ("Excellent", 0, 14),
                    ("Good", 14, 18),
                    ("Average", 18, 22),
                    ("Below Average", 22, 26),
                    ("Poor", 26, None),
                ),
                "50-59": _bands(
                    ("Excellent", 0, 15),
                    ("Good", 15, 19),
                    ("Average", 19, 23),
                    ("Below Average", 23, 27),
                    ("Poor", 27, None),
                ),
                "60+": _bands(
                    ("Excellent", 0, 16),
                    ("Good", 16, 20),
                    ("Average", 20, 24),
                    ("Below Average", 24, 28),
                    ("Poor", 28, None),
                ),
            }
        ),
        Gender.FEMALE: MappingProxyType(
            {
                "20-29": _bands(
                    ("Excellent", 0, 16),
                    ("Good", 16, 20),
                    ("Average", 20, 24),
                    ("Below Average", 24, 28),
                    ("Poor", 28, None),
                ),
                "30-39": _bands(
                    ("Excellent", 0, 17),
                    ("Good", 17, 21),
                    ("Average", 21, 25),
                    ("Below Average", 25, 29),
                    ("Poor", 29, None),
                ),
                "40-49": _bands(
                    ("Excellent", 0, 19),
                    ("Good", 19, 23),
                    ("Average", 23, 27),
                    ("Below Average", 27, 31),
                    ("Poor", 31, None),
                ),
                "50-59": _bands(
                    ("Excellent", 0, 22),
                    ("Good", 22, 26),
                    ("Average", 26, 30),
                    ("Below Average", 30, 34),
                    ("Poor", 34, None),
                ),
                "60+": _bands(
                    ("Excellent", 0, 23),
                    ("Good", 23, 27),
                    ("Average", 27, 31),
                    ("Below Average", 31, 35),
                    ("Poor", 35, None),
                ),
            }
        ),
    }
)

AGE_BANDS: Mapping[CategoryStandard, tuple] = MappingProxyType(
    {
        CategoryStandard.NIH: NIH_AGE_BANDS,
        CategoryStandard.ACSM: ACSM_AGE_BANDS,
    }
)


def bands_for(
    standard: CategoryStandard, gender: Gender, age_band: Optional[str] = None
) -> Tuple[CategoryBand, ...]:
    """
    Return the ordered bands of a standard.

    ACE ignores the age band. For NIH and ACSM an age band missing from the
    table yields an empty tuple rather than an error.
    """
    if standard is CategoryStandard.ACE:
        return ACE_CATEGORIES[gender]
    table = NIH_CATEGORIES if standard is CategoryStandard.NIH else ACSM_CATEGORIES
    if age_band is None:
        return ()
    return table[gender].get(age_band, ())
