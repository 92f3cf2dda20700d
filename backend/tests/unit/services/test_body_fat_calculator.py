"""
Unit tests for BodyFatCalculator service.

Tests the Navy method in both unit systems, clamping and input validation.
"""

import pytest
from fitcalc.domain.errors import InvalidMeasurement
from fitcalc.services.body_fat_calculator import BodyFatCalculator


class TestNavyBodyFatCalculation:
    """Tests for Navy body fat percentage calculation."""

    def test_male_metric_pinned_value(self):
        """180 cm / 85 cm waist / 38 cm neck gives 16.1%."""
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="male",
            height=180.0,
            waist=85.0,
            neck=38.0,
            unit_system="cm",
        )
        assert bfp == 16.1

    def test_female_metric_valid(self):
        """Valid female measurements with hip return the metric estimate."""
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="female",
            height=165.0,
            waist=75.0,
            neck=35.0,
            hip=95.0,
            unit_system="metric",
        )
        assert bfp == pytest.approx(25.9, abs=0.1)

    def test_male_imperial_matches_metric(self):
        """The same subject in inches lands on (almost) the same result."""
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="male",
            height=70.9,
            waist=33.5,
            neck=15.0,
            unit_system="inches",
        )
        assert bfp == pytest.approx(16.1, abs=0.1)

    def test_female_imperial_valid(self):
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="female",
            height=65.0,
            waist=29.5,
            neck=13.8,
            hip=37.4,
            unit_system="imperial",
        )
        assert 15 < bfp < 35

    def test_hip_ignored_for_men(self):
        """Hip does not change a male result."""
        without_hip = BodyFatCalculator.calculate_navy_body_fat(
            gender="male", height=180.0, waist=85.0, neck=38.0
        )
        with_hip = BodyFatCalculator.calculate_navy_body_fat(
            gender="male", height=180.0, waist=85.0, neck=38.0, hip=100.0
        )
        assert without_hip == with_hip

    def test_female_hip_may_be_smaller_than_waist(self):
        """Only waist + hip - neck has to be positive."""
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="female",
            height=165.0,
            waist=90.0,
            neck=35.0,
            hip=85.0,
        )
        assert 0 <= bfp <= 60

    def test_clamped_to_zero(self):
        """Waist barely above neck gives a negative raw value, clamped to 0."""
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="male",
            height=200.0,
            waist=40.0,
            neck=39.0,
        )
        assert bfp == 0.0

    def test_clamped_to_sixty(self):
        """Extreme imperial measurements are clamped to 60."""
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="male",
            height=50.0,
            waist=200.0,
            neck=10.0,
            unit_system="imperial",
        )
        assert bfp == 60.0

    @pytest.mark.parametrize("height", [150.0, 175.0, 200.0])
    @pytest.mark.parametrize("waist,neck", [(60.0, 35.0), (85.0, 38.0), (130.0, 45.0), (41.0, 40.0)])
    def test_male_results_always_in_range(self, height, waist, neck):
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="male", height=height, waist=waist, neck=neck
        )
        assert 0 <= bfp <= 60

    def test_result_has_one_decimal(self):
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender="female", height=170.0, waist=80.0, neck=33.0, hip=100.0
        )
        assert round(bfp, 1) == bfp

    def test_invalid_gender(self):
        """Raises InvalidMeasurement (a ValueError) for unsupported gender."""
        with pytest.raises(ValueError, match="Gender must be 'male' or 'female'"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="invalid",
                height=180.0,
                waist=90.0,
                neck=40.0,
            )

    def test_unknown_unit(self):
        with pytest.raises(InvalidMeasurement, match="Unknown unit"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="male",
                height=180.0,
                waist=90.0,
                neck=40.0,
                unit_system="furlongs",
            )

    @pytest.mark.parametrize(
        "height,waist,neck,field",
        [
            (-180.0, 90.0, 40.0, "height"),
            (0.0, 90.0, 40.0, "height"),
            (180.0, -90.0, 40.0, "waist"),
            (180.0, 90.0, 0.0, "neck"),
        ],
    )
    def test_non_positive_values(self, height, waist, neck, field):
        with pytest.raises(InvalidMeasurement, match="must be a positive value") as exc_info:
            BodyFatCalculator.calculate_navy_body_fat(
                gender="male", height=height, waist=waist, neck=neck
            )
        assert exc_info.value.field == field

    def test_missing_measurement(self):
        with pytest.raises(InvalidMeasurement, match="Neck measurement is required"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="male", height=180.0, waist=90.0, neck=None
            )

    def test_waist_not_greater_than_neck(self):
        """Raises InvalidMeasurement when waist <= neck instead of returning NaN."""
        with pytest.raises(InvalidMeasurement, match="Waist must be greater than neck"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="male",
                height=180.0,
                waist=40.0,
                neck=40.0,
            )

        with pytest.raises(InvalidMeasurement, match="Waist must be greater than neck"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="male",
                height=180.0,
                waist=35.0,
                neck=40.0,
            )

    def test_female_missing_hip(self):
        with pytest.raises(InvalidMeasurement, match="Hip measurement is required for women"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="female",
                height=165.0,
                waist=75.0,
                neck=35.0,
                hip=None,
            )

    def test_female_negative_hip(self):
        with pytest.raises(InvalidMeasurement, match="Hip must be a positive value"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="female",
                height=165.0,
                waist=75.0,
                neck=35.0,
                hip=-95.0,
            )

    def test_female_waist_plus_hip_not_greater_than_neck(self):
        with pytest.raises(InvalidMeasurement, match="Waist plus hip must be greater than neck"):
            BodyFatCalculator.calculate_navy_body_fat(
                gender="female",
                height=165.0,
                waist=10.0,
                neck=25.0,
                hip=10.0,
            )


class TestBodyFatCategory:
    """Tests for the quick category label."""

    @pytest.mark.parametrize(
        "bfp,label",
        [
            (5.9, "Essential Fat"),
            (6.0, "Athletic"),
            (17.9, "Fitness"),
            (24.9, "Average"),
            (25.0, "Obese"),
        ],
    )
    def test_male_labels(self, bfp, label):
        assert BodyFatCalculator.body_fat_category(bfp, "male") == label

    @pytest.mark.parametrize(
        "bfp,label",
        [
            (15.9, "Essential Fat"),
            (16.0, "Athletic"),
            (21.0, "Fitness"),
            (31.9, "Average"),
            (32.0, "Obese"),
        ],
    )
    def test_female_labels(self, bfp, label):
        assert BodyFatCalculator.body_fat_category(bfp, "female") == label
