"""
Integration tests for preference endpoints.
"""


class TestPreferenceEndpoints:
    """Tests for /api/v1/preferences."""

    def test_list_defaults(self, client):
        response = client.get("/api/v1/preferences")

        assert response.status_code == 200
        data = response.json()
        assert data["fitCalc.unitPreference"] == "metric"
        assert data["fitCalc.gender"] == "male"
        assert data["fitCalc.height"] is None

    def test_set_and_get(self, client):
        response = client.put("/api/v1/preferences/fitCalc.height", json={"value": 172.5})
        assert response.status_code == 200

        response = client.get("/api/v1/preferences/fitCalc.height")
        assert response.json() == {"key": "fitCalc.height", "value": 172.5}

    def test_unit_preference_standardized(self, client):
        response = client.put(
            "/api/v1/preferences/fitCalc.unitPreference", json={"value": "inches"}
        )

        assert response.status_code == 200
        assert response.json()["value"] == "imperial"

    def test_invalid_unit_preference(self, client):
        response = client.put(
            "/api/v1/preferences/fitCalc.unitPreference", json={"value": "stone"}
        )
        assert response.status_code == 400

    def test_unknown_key(self, client):
        response = client.get("/api/v1/preferences/fitCalc.favoriteColor")
        assert response.status_code == 404

        response = client.put("/api/v1/preferences/fitCalc.favoriteColor", json={"value": 1})
        assert response.status_code == 404

    def test_clear(self, client):
        client.put("/api/v1/preferences/fitCalc.age", json={"value": 30})
        client.put("/api/v1/preferences/fitCalc.gender", json={"value": "female"})

        response = client.delete("/api/v1/preferences")
        assert response.json() == {"deleted": 2}

        response = client.get("/api/v1/preferences/fitCalc.gender")
        assert response.json()["value"] == "male"
