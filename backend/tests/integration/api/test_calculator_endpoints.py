"""
Integration tests for the general calculator endpoints.

Tests request validation, unit preference handling and stored inputs.
"""

from fitcalc.services.preference_service import PreferenceService, StorageKey


class TestBmiEndpoint:
    """Tests for POST /api/v1/calculators/bmi."""

    def test_metric(self, client):
        response = client.post(
            "/api/v1/calculators/bmi",
            json={"weight": 80, "height": 180, "unit_system": "metric"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bmi"] == 24.7
        assert data["category"] == "Normal weight"
        assert data["healthy_weight_min"] == 60
        assert data["healthy_weight_max"] == 81
        assert data["weight_unit"] == "kg"

    def test_stores_inputs_and_result(self, client, test_db):
        client.post(
            "/api/v1/calculators/bmi",
            json={"weight": 80, "height": 180, "unit_system": "metric"},
        )

        preferences = PreferenceService(test_db)
        assert preferences.get(StorageKey.HEIGHT) == 180
        assert preferences.get(StorageKey.WEIGHT) == 80
        assert preferences.get(StorageKey.BMI_RESULT) == 24.7

    def test_unit_preference_carries_over(self, client):
        """A unit chosen on one calculator applies to the next request without one."""
        client.post(
            "/api/v1/calculators/bmi",
            json={"weight": 176, "height": 71, "unit_system": "inches"},
        )
        response = client.post(
            "/api/v1/calculators/bmi", json={"weight": 176, "height": 71}
        )

        assert response.status_code == 200
        assert response.json()["unit_system"] == "imperial"
        assert response.json()["weight_unit"] == "lbs"

    def test_unknown_unit(self, client):
        response = client.post(
            "/api/v1/calculators/bmi",
            json={"weight": 80, "height": 180, "unit_system": "stone"},
        )

        assert response.status_code == 400
        assert "Unknown unit" in response.json()["detail"]

    def test_non_positive_weight_rejected(self, client):
        response = client.post(
            "/api/v1/calculators/bmi", json={"weight": 0, "height": 180}
        )
        assert response.status_code == 422


class TestBmrEndpoint:
    """Tests for POST /api/v1/calculators/bmr."""

    def test_bmr_and_tdee(self, client):
        response = client.post(
            "/api/v1/calculators/bmr",
            json={
                "weight": 80,
                "height": 180,
                "age": 30,
                "gender": "male",
                "activity_level": "moderately_active",
                "unit_system": "metric",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bmr"] == 1780
        assert data["tdee"] == 2759
        assert data["activity_level"] == "moderately_active"

    def test_invalid_gender(self, client):
        response = client.post(
            "/api/v1/calculators/bmr",
            json={"weight": 80, "height": 180, "age": 30, "gender": "other"},
        )
        assert response.status_code == 422


class TestOneRepMaxEndpoint:
    """Tests for POST /api/v1/calculators/one-rep-max."""

    def test_epley_with_training_loads(self, client, test_db):
        response = client.post(
            "/api/v1/calculators/one-rep-max",
            json={"weight": 100, "reps": 10, "formula": "epley"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["one_rep_max"] == 133.3
        assert len(data["training_loads"]) == 4
        assert data["training_loads"][0]["percent"] == 95

        assert PreferenceService(test_db).get(StorageKey.FORMULA) == "epley"

    def test_reps_out_of_range(self, client):
        response = client.post(
            "/api/v1/calculators/one-rep-max", json={"weight": 100, "reps": 40}
        )
        assert response.status_code == 422


class TestHeartRateEndpoint:
    """Tests for POST /api/v1/calculators/max-heart-rate."""

    def test_tanaka(self, client):
        response = client.post(
            "/api/v1/calculators/max-heart-rate",
            json={"age": 30, "formula": "tanaka"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["max_heart_rate"] == 187
        assert len(data["zones"]) == 5


class TestBodyFrameAndRatios:
    """Tests for the body frame and ratio endpoints."""

    def test_body_frame(self, client):
        response = client.post(
            "/api/v1/calculators/body-frame",
            json={"height": 180, "wrist": 18, "gender": "male", "unit_system": "metric"},
        )

        assert response.status_code == 200
        assert response.json() == {"ratio": 10.0, "frame_size": "Medium"}

    def test_chest_to_waist(self, client):
        response = client.post(
            "/api/v1/calculators/chest-to-waist",
            json={"chest": 112, "waist": 80, "gender": "male"},
        )
        assert response.json() == {"ratio": 1.4, "category": "Athletic/Bodybuilder"}

    def test_waist_to_hip(self, client):
        response = client.post(
            "/api/v1/calculators/waist-to-hip",
            json={"waist": 85, "hip": 100, "gender": "female"},
        )
        assert response.json() == {"ratio": 0.85, "category": "Moderate health risk"}

    def test_waist_to_height(self, client):
        response = client.post(
            "/api/v1/calculators/waist-to-height",
            json={"waist": 85, "height": 180},
        )
        assert response.json() == {"ratio": 0.47, "category": "Healthy"}


class TestConversionEndpoint:
    """Tests for POST /api/v1/conversions."""

    def test_length(self, client):
        response = client.post(
            "/api/v1/conversions", json={"value": 100, "from_unit": "cm"}
        )

        assert response.status_code == 200
        assert response.json() == {"value": 39.4, "unit": "inches"}

    def test_weight(self, client):
        response = client.post(
            "/api/v1/conversions",
            json={"value": 176.4, "from_unit": "lbs", "kind": "weight"},
        )
        assert response.json() == {"value": 80.0, "unit": "kg"}

    def test_unknown_kind(self, client):
        response = client.post(
            "/api/v1/conversions",
            json={"value": 1, "from_unit": "cm", "kind": "volume"},
        )
        assert response.status_code == 400


class TestUnitPreferenceOnRejection:
    """A rejected calculation leaves the shared unit preference untouched."""

    def test_rejected_body_frame(self, client, test_db):
        PreferenceService(test_db).set_unit_system("imperial")

        response = client.post(
            "/api/v1/calculators/body-frame",
            json={"height": 180, "wrist": 18, "gender": "male", "unit_system": "kilofeet"},
        )

        assert response.status_code == 400
        assert PreferenceService(test_db).get(StorageKey.UNIT_PREFERENCE) == "imperial"

    def test_accepted_body_frame_stores_unit(self, client, test_db):
        response = client.post(
            "/api/v1/calculators/body-frame",
            json={"height": 70.87, "wrist": 7.087, "gender": "male", "unit_system": "in"},
        )

        assert response.status_code == 200
        assert PreferenceService(test_db).get(StorageKey.UNIT_PREFERENCE) == "imperial"
