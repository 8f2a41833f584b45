def test_node(client, origin):
    response = client.get("/api/mesh/node", params=origin)
    assert response.status_code == 200
    body = response.json()
    assert body["meshcode"] == 54401027
    assert body["latitude"] == {"first": 54, "second": 1, "third": 2}
    assert body["longitude"] == {"first": 40, "second": 0, "third": 7}

    response = client.get("/api/mesh/node", params={**origin, "unit": "FIVE"})
    assert response.json()["meshcode"] == 54401005


def test_node_out_of_range(client):
    response = client.get("/api/mesh/node", params={"latitude": 36.0, "longitude": 99.0})
    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "out_of_range"
    assert response.json()["detail"]["field"] == "degree (longitude)"


def test_node_rejects_unknown_unit(client, origin):
    response = client.get("/api/mesh/node", params={**origin, "unit": "TEN"})
    assert response.status_code == 422


def test_meshcode(client):
    response = client.get("/api/mesh/meshcode/54401005")
    assert response.status_code == 200
    body = response.json()
    assert abs(body["point"]["latitude"] - 36.0833333333) < 1e-9
    assert body["point"]["longitude"] == 140.0625
    assert body["is_unit"] == {"ONE": True, "FIVE": True}

    assert client.get("/api/mesh/meshcode/54401027").json()["is_unit"]["FIVE"] is False
    assert client.get("/api/mesh/meshcode/10810000").status_code == 400


def test_cell(client, origin):
    response = client.get("/api/mesh/cell", params=origin)
    assert response.status_code == 200
    body = response.json()
    assert [body[k] for k in ("south_west", "south_east", "north_west", "north_east")] == [
        54401027,
        54401028,
        54401037,
        54401038,
    ]
    assert abs(body["position"]["x"] - 0.0284033333) < 1e-9
    assert abs(body["position"]["y"] - 0.452975) < 1e-9


def test_is_meshcode(client):
    assert client.get("/api/mesh/is-meshcode/54401027").json()["valid"] is True
    assert client.get("/api/mesh/is-meshcode/10000800").json()["valid"] is False
    assert client.get("/api/mesh/is-meshcode/-1").json()["valid"] is False
