"""
Measurement domain types.

Enumerations for the selections a user makes (gender, unit system, formula,
category standard) and the immutable value objects returned by the calculators.
Nothing here carries identity beyond a single calculation call.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from fitcalc.domain.errors import InvalidMeasurement, UnsupportedCategory


class Gender(str, Enum):
    """Selects formula coefficients and reference tables."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Union["Gender", str]) -> "Gender":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidMeasurement(
                "Gender must be 'male' or 'female'", field="gender"
            ) from None


class UnitSystem(str, Enum):
    """Metric (cm, kg) or imperial (inches, lbs) measurements."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, value: Union["UnitSystem", str]) -> "UnitSystem":
        """
        Resolve a unit system from a system name or a concrete unit.

        The calculators historically used different spellings: the body fat
        calculator speaks in "cm"/"inches", BMI and BMR in "metric"/"imperial".
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in _UNIT_ALIASES:
            return _UNIT_ALIASES[key]
        raise InvalidMeasurement(
            f"Unknown unit '{value}'. Use metric, imperial, cm, inches, kg or lbs",
            field="unit_system",
        )

    @property
    def length_unit(self) -> str:
        return "cm" if self is UnitSystem.METRIC else "inches"

    @property
    def weight_unit(self) -> str:
        return "kg" if self is UnitSystem.METRIC else "lbs"


_UNIT_ALIASES = {
    "metric": UnitSystem.METRIC,
    "cm": UnitSystem.METRIC,
    "kg": UnitSystem.METRIC,
    "imperial": UnitSystem.IMPERIAL,
    "inches": UnitSystem.IMPERIAL,
    "in": UnitSystem.IMPERIAL,
    "lbs": UnitSystem.IMPERIAL,
    "lb": UnitSystem.IMPERIAL,
}


class CategoryStandard(str, Enum):
    """Published body fat classification standards."""

    ACE = "ace"
    NIH = "nih"
    ACSM = "acsm"

    @classmethod
    def parse(cls, value: Union["CategoryStandard", str]) -> "CategoryStandard":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedCategory(str(value)) from None


class OneRepMaxFormula(str, Enum):
    BRZYCKI = "brzycki"
    EPLEY = "epley"
    LOMBARDI = "lombardi"


class HeartRateFormula(str, Enum):
    TRADITIONAL = "traditional"
    TANAKA = "tanaka"


class ActivityLevel(str, Enum):
    """Activity levels for TDEE, see ACTIVITY_MULTIPLIERS."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"


# Value objects


class Mass(BaseModel):
    """A weight rounded to one decimal place, with its unit suffix."""

    model_config = ConfigDict(frozen=True)

    value: float
    unit: str

    def __str__(self) -> str:
        return f"{self.value:.1f} {self.unit}"


class AgeBodyFatReferencePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int
    ideal_body_fat: float


class CategoryBand(BaseModel):
    """
    A labelled body fat range.

    Bands are half-open [min, max). A band whose minimum is 0 also accepts
    values below zero, and a band without a maximum is unbounded above.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    min_percent: float
    max_percent: Optional[float] = None

    def contains(self, value: float) -> bool:
        if self.max_percent is None:
            return value >= self.min_percent
        if self.min_percent == 0:
            return value < self.max_percent
        return self.min_percent <= value < self.max_percent


class CategoryMatch(BaseModel):
    """A band from a lookup, flagged when it contains the looked-up value."""

    model_config = ConfigDict(frozen=True)

    label: str
    min_percent: float
    max_percent: Optional[float] = None
    is_current: bool = False
    # Estimated weight at the band's boundary body fat values, lean mass held constant
    weight_at_min: Optional[Mass] = None
    weight_at_max: Optional[Mass] = None


class WeightRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: Mass
    high: Mass

    def __str__(self) -> str:
        return f"{self.low.value:.1f} - {self.high.value:.1f} {self.low.unit}"


class BodyCompositionReport(BaseModel):
    """Everything derived from one body fat reading."""

    model_config = ConfigDict(frozen=True)

    body_fat_percentage: float
    category: str
    fat_mass: Mass
    lean_mass: Mass
    bmi_body_fat_percentage: Optional[float] = Field(
        None, description="BMI-based estimate, reported alongside and never reconciled"
    )
    ideal_body_fat_percentage: float
    fat_to_lose: Mass
    ideal_weight_by_fat: Mass
    ideal_weight_range: Optional[WeightRange] = None


class HeartRateZone(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    min_bpm: int
    max_bpm: int
    description: str


class TrainingLoad(BaseModel):
    """A working weight as a share of one-rep max."""

    model_config = ConfigDict(frozen=True)

    percent: int
    weight: float
    reps: str
    goal: str


class BodyFrame(BaseModel):
    model_config = ConfigDict(frozen=True)

    ratio: float
    frame_size: str
