def test_health(flask_env):
    client = flask_env.app.test_client()
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_reconstruct_endpoint_returns_secret(flask_env, make_document):
    client = flask_env.app.test_client()
    secret = 2**255 + 19
    document = make_document([secret, 5, -8], [4, 1, 9, 2], k=3)
    document["bad"] = {"value": "1", "base": 10}

    response = client.post("/api/reconstruct", json=document)
    assert response.status_code == 200

    payload = response.get_json()
    assert payload["secret"] == str(secret)
    assert payload["threshold"] == 3
    assert payload["available"] == 4
    assert payload["points_used"] == ["1", "2", "4"]
    assert payload["skipped"][0]["key"] == "bad"
    assert payload["skipped"][0]["kind"] == "malformed_point"


def test_reconstruct_truncate_mode(flask_env):
    client = flask_env.app.test_client()
    document = {
        "keys": {"k": 3},
        "1": {"value": "1", "base": 10},
        "2": {"value": "4", "base": 10},
        "4": {"value": "16", "base": 10},
    }

    assert client.post("/api/reconstruct", json=document).get_json()["secret"] == "0"
    truncated = client.post("/api/reconstruct?mode=truncate", json=document)
    assert truncated.get_json()["secret"] == "-1"


def test_reconstruct_rejects_non_json(flask_env):
    client = flask_env.app.test_client()
    response = client.post("/api/reconstruct", data="no es json", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["kind"] == "input_unreadable"


def test_reconstruct_rejects_non_object(flask_env):
    client = flask_env.app.test_client()
    response = client.post("/api/reconstruct", json=[1, 2, 3])

    assert response.status_code == 400
    assert response.get_json()["kind"] == "input_unreadable"


def test_reconstruct_fatal_errors_are_422(flask_env):
    client = flask_env.app.test_client()

    missing_k = client.post("/api/reconstruct", json={"1": {"value": "1", "base": 10}})
    assert missing_k.status_code == 422
    assert missing_k.get_json()["kind"] == "missing_threshold"

    few = client.post(
        "/api/reconstruct",
        json={"keys": {"k": 2}, "1": {"value": "1", "base": 10}},
    )
    assert few.status_code == 422
    assert few.get_json()["kind"] == "insufficient_points"
    assert "error" in few.get_json()

    duplicate = client.post(
        "/api/reconstruct",
        json={"keys": {"k": 2}, "1": {"value": "1", "base": 10}, "+1": {"value": "2", "base": 10}},
    )
    assert duplicate.status_code == 422
    assert duplicate.get_json()["kind"] == "degenerate_geometry"


def test_rate_limit(limited_flask_env):
    client = limited_flask_env.app.test_client()

    for _ in range(3):
        assert client.get("/api/health").status_code == 200

    limited_response = client.get("/api/health")
    assert limited_response.status_code == 429
    assert "error" in limited_response.get_json()


def test_reconstruct_secret_longer_than_4300_digits(flask_env, encode):
    client = flask_env.app.test_client()
    secret = 16**4000 + 1
    document = {"keys": {"k": 1}, "1": {"value": encode(secret, 16), "base": 16}}

    response = client.post("/api/reconstruct", json=document)

    assert response.status_code == 200
    assert response.get_json()["secret"] == str(secret)
