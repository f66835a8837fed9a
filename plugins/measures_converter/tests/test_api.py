from app import create_app


def _client():
    app = create_app("TestingConfig")
    return app.test_client()


def test_categories_endpoint_lists_units_and_defaults():
    client = _client()
    response = client.get("/api/measures_converter/categories")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    categories = {item["key"]: item for item in payload["data"]["categories"]}
    assert set(categories) == {"length", "weight"}
    assert categories["length"]["base_unit"] == "m"
    assert categories["weight"]["units"][0] == "grams (g)"
    assert categories["weight"]["defaults"] == {
        "from_unit": "grams (g)",
        "to_unit": "kilograms (kg)",
    }


def test_units_endpoint_rejects_unknown_category():
    client = _client()
    response = client.get("/api/measures_converter/units/volume")
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "measures.invalid_category"


def test_units_endpoint_returns_metadata():
    client = _client()
    response = client.get("/api/measures_converter/units/length")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert [unit["symbol"] for unit in data["units"]][:3] == ["mm", "cm", "m"]


def test_convert_endpoint_success():
    client = _client()
    response = client.post(
        "/api/measures_converter/convert",
        json={
            "category": "length",
            "from_unit": "meters (m)",
            "to_unit": "feet (ft)",
            "value": "1",
        },
    )
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["data"]["formatted"] == "3.28084"
    assert payload["data"]["summary"] == "1 meters (m) = 3.28084 feet (ft)"
    assert response.headers.get("X-Request-ID")


def test_convert_endpoint_accepts_numeric_value():
    client = _client()
    response = client.post(
        "/api/measures_converter/convert",
        json={
            "category": "weight",
            "from_unit": "pounds (lb)",
            "to_unit": "kilograms (kg)",
            "value": 10,
        },
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["formatted"] == "4.535924"


def test_convert_endpoint_reports_field_errors():
    client = _client()
    cases = {
        "": "measures.empty_input",
        "abc": "measures.not_a_number",
        "-5": "measures.negative_value",
    }
    for raw, code in cases.items():
        response = client.post(
            "/api/measures_converter/convert",
            json={
                "category": "length",
                "from_unit": "meters (m)",
                "to_unit": "feet (ft)",
                "value": raw,
            },
        )
        assert response.status_code == 400
        error = response.get_json()["error"]
        assert error["code"] == code
        assert error["details"] == {"field": "value"}


def test_convert_endpoint_rejects_bad_unit():
    client = _client()
    response = client.post(
        "/api/measures_converter/convert",
        json={
            "category": "length",
            "from_unit": "meters (m)",
            "to_unit": "pounds (lb)",
            "value": "1",
        },
    )
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "measures.invalid_unit"


def test_convert_endpoint_rejects_malformed_payload():
    client = _client()
    response = client.post(
        "/api/measures_converter/convert",
        json={"category": "length", "value": "1", "unexpected": True},
    )
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "measures.invalid_request"


def test_validate_endpoint():
    client = _client()
    response = client.post("/api/measures_converter/validate", json={"value": "3.5"})
    assert response.status_code == 200
    assert response.get_json()["data"]["value"] == 3.5

    response = client.post("/api/measures_converter/validate", json={"value": "1e5"})
    assert response.status_code == 400
    assert response.get_json()["error"]["message"] == "Enter a valid number"


def test_swap_endpoint():
    client = _client()
    response = client.post(
        "/api/measures_converter/swap",
        json={"from_unit": "meters (m)", "to_unit": "feet (ft)"},
    )
    assert response.status_code == 200
    assert response.get_json()["data"] == {
        "from_unit": "feet (ft)",
        "to_unit": "meters (m)",
    }


def test_convert_endpoint_rejects_boolean_value():
    client = _client()
    response = client.post(
        "/api/measures_converter/convert",
        json={
            "category": "length",
            "from_unit": "meters (m)",
            "to_unit": "feet (ft)",
            "value": True,
        },
    )
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "measures.invalid_request"


def test_validate_endpoint_rejects_boolean_value():
    client = _client()
    response = client.post("/api/measures_converter/validate", json={"value": False})
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "measures.invalid_request"
