"""
Formula library for the general fitness calculators.

BMI, BMR/TDEE (Mifflin-St Jeor), one-rep max, maximum heart rate and zones,
body frame size and the chest-to-waist, waist-to-hip and waist-to-height ratios.
All methods are pure; unit systems are passed explicitly.
"""

import math
from typing import List, Optional, Union

from fitcalc.domain.errors import InvalidMeasurement
from fitcalc.domain.measurements import (
    ActivityLevel,
    BodyFrame,
    Gender,
    HeartRateFormula,
    HeartRateZone,
    OneRepMaxFormula,
    TrainingLoad,
    UnitSystem,
)
from fitcalc.services.unit_conversion import (
    length_to_cm,
    length_to_inches,
    weight_to_kg,
)

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

# (lower and upper share of max heart rate, name, description)
HEART_RATE_ZONES = (
    (0.5, 0.6, "Zone 1 - Recovery", "Very light activity, helps recovery"),
    (0.6, 0.7, "Zone 2 - Aerobic", "Light exercise, improves general endurance"),
    (0.7, 0.8, "Zone 3 - Endurance", "Moderate exercise, improves aerobic fitness"),
    (0.8, 0.9, "Zone 4 - Threshold", "Hard exercise, increases maximum performance"),
    (0.9, 1.0, "Zone 5 - Anaerobic", "Maximum effort, enhances sprint performance"),
)

TRAINING_LOADS = (
    (95, "2-3", "Power/Strength"),
    (85, "5-6", "Strength"),
    (75, "8-10", "Strength/Hypertrophy"),
    (65, "12-15", "Hypertrophy/Endurance"),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _require_positive(**values: Optional[float]) -> None:
    for field, value in values.items():
        if value is None or value <= 0:
            name = field.replace("_", " ").capitalize()
            raise InvalidMeasurement(f"{name} must be a positive value", field=field)


class FormulaCalculator:
    """Stateless calculators backing each tab of the app."""

    # BMI

    @staticmethod
    def calculate_bmi(
        weight: float,
        height: float,
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    ) -> float:
        """
        Calculate Body Mass Index.

        Metric: weight (kg) / height (m)². Imperial: 703 × weight (lbs) / height (in)².

        Returns:
            BMI rounded to 1 decimal place
        """
        unit_system = UnitSystem.parse(unit_system)
        _require_positive(weight=weight, height=height)

        if unit_system is UnitSystem.METRIC:
            height_m = height / 100.0
            bmi = weight / (height_m * height_m)
        else:
            bmi = 703 * weight / (height * height)

        return round(bmi, 1)

    @staticmethod
    def bmi_category(bmi: float) -> str:
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal weight"
        if bmi < 30:
            return "Overweight"
        return "Obese"

    @staticmethod
    def weight_for_bmi(
        height: float,
        bmi: float,
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    ) -> int:
        """Whole-number weight that gives a BMI at a height."""
        unit_system = UnitSystem.parse(unit_system)
        _require_positive(height=height, bmi=bmi)

        if unit_system is UnitSystem.METRIC:
            return _round_half_up(bmi * (height / 100.0) ** 2)
        return _round_half_up(bmi * height ** 2 / 703)

    # BMR / TDEE

    @staticmethod
    def calculate_bmr(
        weight: float,
        height: float,
        age: float,
        gender: Union[Gender, str],
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    ) -> int:
        """
        Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

        Men:   10 × weight + 6.25 × height - 5 × age + 5
        Women: 10 × weight + 6.25 × height - 5 × age - 161

        Imperial inputs are converted to kg and cm first.

        Returns:
            Calories per day, rounded to a whole number
        """
        gender = Gender.parse(gender)
        unit_system = UnitSystem.parse(unit_system)
        _require_positive(weight=weight, height=height, age=age)

        weight_kg = weight_to_kg(weight, unit_system)
        height_cm = length_to_cm(height, unit_system)
        bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
        bmr += 5 if gender is Gender.MALE else -161

        return _round_half_up(bmr)

    @staticmethod
    def calculate_tdee(bmr: float, activity_level: Union[ActivityLevel, str]) -> int:
        """Total daily energy expenditure: BMR times the activity multiplier."""
        try:
            level = ActivityLevel(activity_level)
        except ValueError:
            raise InvalidMeasurement(
                f"Unknown activity level '{activity_level}'", field="activity_level"
            ) from None
        return _round_half_up(bmr * ACTIVITY_MULTIPLIERS[level])

    # One-rep max

    @staticmethod
    def calculate_one_rep_max(
        weight: float,
        reps: int,
        formula: Union[OneRepMaxFormula, str] = OneRepMaxFormula.BRZYCKI,
    ) -> float:
        """
        Estimate the one-rep max from a set taken to failure.

        Brzycki:  weight × 36 / (37 - reps)
        Epley:    weight × (1 + 0.0333 × reps)
        Lombardi: weight × reps^0.1

        Raises:
            InvalidMeasurement: If weight is not positive or reps is outside 1-36
        """
        _require_positive(weight=weight)
        if reps is None or not 1 <= reps <= 36:
            raise InvalidMeasurement("Reps must be between 1 and 36", field="reps")
        try:
            formula = OneRepMaxFormula(formula)
        except ValueError:
            raise InvalidMeasurement(
                f"Unknown one-rep max formula '{formula}'", field="formula"
            ) from None

        if formula is OneRepMaxFormula.EPLEY:
            orm = weight * (1 + 0.0333 * reps)
        elif formula is OneRepMaxFormula.LOMBARDI:
            orm = weight * math.pow(reps, 0.1)
        else:
            orm = weight * (36 / (37 - reps))

        return round(orm, 2)

    @staticmethod
    def training_loads(one_rep_max: float) -> List[TrainingLoad]:
        """Working weights at 95/85/75/65% of a one-rep max."""
        return [
            TrainingLoad(
                percent=percent,
                weight=round(one_rep_max * percent / 100.0, 1),
                reps=reps,
                goal=goal,
            )
            for percent, reps, goal in TRAINING_LOADS
        ]

    # Heart rate

    @staticmethod
    def calculate_max_heart_rate(
        age: float,
        formula: Union[HeartRateFormula, str] = HeartRateFormula.TRADITIONAL,
    ) -> int:
        """
        Estimate maximum heart rate.

        Traditional: 220 - age. Tanaka: 208 - 0.7 × age.
        """
        _require_positive(age=age)
        try:
            formula = HeartRateFormula(formula)
        except ValueError:
            raise InvalidMeasurement(
                f"Unknown heart rate formula '{formula}'", field="formula"
            ) from None

        if formula is HeartRateFormula.TANAKA:
            return _round_half_up(208 - 0.7 * age)
        return _round_half_up(220 - age)

    @staticmethod
    def heart_rate_zones(max_heart_rate: int) -> List[HeartRateZone]:
        """Five training zones in 10% steps from 50% to 100% of max heart rate."""
        zones = []
        for low, high, name, description in HEART_RATE_ZONES:
            zones.append(
                HeartRateZone(
                    name=name,
                    min_bpm=_round_half_up(max_heart_rate * low),
                    max_bpm=_round_half_up(max_heart_rate * high),
                    description=description,
                )
            )
        return zones

    # Body frame and ratios

    @staticmethod
    def calculate_body_frame(
        height: float,
        wrist: float,
        gender: Union[Gender, str],
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    ) -> BodyFrame:
        """
        Body frame size from r = height / wrist circumference (both in inches).

        Men:   Small r > 10.4, Medium 9.6-10.4, Large r < 9.6
        Women: Small r > 11,   Medium 10.1-11,  Large r < 10.1
        """
        gender = Gender.parse(gender)
        unit_system = UnitSystem.parse(unit_system)
        _require_positive(height=height, wrist=wrist)

        r = length_to_inches(height, unit_system) / length_to_inches(wrist, unit_system)

        if gender is Gender.MALE:
            small, medium = 10.4, 9.6
        else:
            small, medium = 11.0, 10.1

        if r > small:
            frame_size = "Small"
        elif r >= medium:
            frame_size = "Medium"
        else:
            frame_size = "Large"

        return BodyFrame(ratio=round(r, 2), frame_size=frame_size)

    @staticmethod
    def calculate_chest_to_waist_ratio(chest: float, waist: float) -> float:
        _require_positive(chest=chest, waist=waist)
        return round(chest / waist, 2)

    @staticmethod
    def chest_to_waist_category(ratio: float, gender: Union[Gender, str]) -> str:
        if Gender.parse(gender) is Gender.MALE:
            athletic, fit = 1.4, 1.2
        else:
            athletic, fit = 1.3, 1.15

        if ratio >= athletic:
            return "Athletic/Bodybuilder"
        if ratio >= fit:
            return "Fit/Average"
        return "Below Average"

    @staticmethod
    def calculate_waist_to_hip_ratio(waist: float, hip: float) -> float:
        # Same unit for both circumferences, so no conversion is needed
        _require_positive(waist=waist, hip=hip)
        return round(waist / hip, 2)

    @staticmethod
    def waist_to_hip_category(ratio: float, gender: Union[Gender, str]) -> str:
        """Health risk from a waist-to-hip ratio rounded to 2 decimals."""
        if Gender.parse(gender) is Gender.MALE:
            low, moderate = 0.9, 0.99
        else:
            low, moderate = 0.8, 0.89

        if ratio < low:
            return "Low health risk"
        if ratio <= moderate:
            return "Moderate health risk"
        return "High health risk"

    @staticmethod
    def calculate_waist_to_height_ratio(waist: float, height: float) -> float:
        _require_positive(waist=waist, height=height)
        return round(waist / height, 2)

    @staticmethod
    def waist_to_height_category(ratio: float) -> str:
        if ratio < 0.4:
            return "Underweight possible"
        if ratio < 0.5:
            return "Healthy"
        if ratio < 0.6:
            return "Overweight"
        return "Obese"
