def test_oversized_request_is_rejected(client):
    response = client.post(
        "/api/timetable/generate",
        content=b"x" * 1_000_001,
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 413
    assert response.json()["details"] == {"max_bytes": 1_000_000}


def test_validation_errors_use_standard_shape(client):
    response = client.post("/api/timetable/generate", json={"inputs": {"courses": [{"slots": -1}]}})
    assert response.status_code == 422
    assert "detail" in response.json()
