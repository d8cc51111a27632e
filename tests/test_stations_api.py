"""
Station endpoints: CRUD, nearest station and the places index
"""


def station_payload(name, lng=38.7993, lat=8.9942, **extra):
    payload = {"name": name, "location": {"type": "Point", "coordinates": [lng, lat]}}
    payload.update(extra)
    return payload


class TestStationCrud:
    """Create, read, update and delete"""

    def test_create_station_canonicalizes_name(self, test_client):
        response = test_client.post("/stations", json=station_payload("Bole", connected_routes=["Megenagna"]))
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Bole Station"
        assert data["location"]["coordinates"] == [38.7993, 8.9942]
        assert data["connected_routes"] == ["Megenagna"]

    def test_create_duplicate_station(self, test_client):
        assert test_client.post("/stations", json=station_payload("Bole")).status_code == 201
        response = test_client.post("/stations", json=station_payload("Bole Station"))
        assert response.status_code == 409

    def test_create_requires_name_and_coordinates(self, test_client):
        assert test_client.post("/stations", json=station_payload("   ")).status_code == 400
        response = test_client.post("/stations", json={"name": "Bole", "location": {"coordinates": [38.79]}})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid station data"

    def test_list_and_get_station(self, test_client):
        created = test_client.post("/stations", json=station_payload("Piassa", 38.7519, 9.0376)).json()

        listing = test_client.get("/stations")
        assert listing.status_code == 200
        assert [s["name"] for s in listing.json()["stations"]] == ["Piassa Station"]

        response = test_client.get(f"/stations/{created['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Piassa Station"

    def test_get_station_bad_id(self, test_client):
        response = test_client.get("/stations/not-a-number")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid ID format"

    def test_get_missing_station(self, test_client):
        assert test_client.get("/stations/999").status_code == 404

    def test_update_station(self, test_client):
        created = test_client.post("/stations", json=station_payload("Mexico")).json()

        response = test_client.put(f"/stations/{created['id']}", json=station_payload("Mexico Square", 38.745, 9.01))
        assert response.status_code == 200
        assert response.json()["message"] == "Station updated successfully"

        station = test_client.get(f"/stations/{created['id']}").json()
        assert station["name"] == "Mexico Square Station"
        assert station["location"]["coordinates"] == [38.745, 9.01]

    def test_update_missing_station(self, test_client):
        assert test_client.put("/stations/999", json=station_payload("Mexico")).status_code == 404

    def test_delete_station(self, test_client):
        created = test_client.post("/stations", json=station_payload("Stadium")).json()

        response = test_client.delete(f"/stations/{created['id']}")
        assert response.status_code == 200
        assert test_client.get(f"/stations/{created['id']}").status_code == 404

    def test_delete_referenced_station_conflicts(self, test_client, add_route):
        created = test_client.post("/stations", json=station_payload("Arat Kilo")).json()
        add_route("Megenagna", "Piassa", 30.0, intermediates=["Arat Kilo"])

        response = test_client.delete(f"/stations/{created['id']}")
        assert response.status_code == 409
        assert test_client.get(f"/stations/{created['id']}").status_code == 200

    def test_delete_station_referenced_by_unsuffixed_name(self, test_client, add_route):
        created = test_client.post("/stations", json=station_payload("Merkato")).json()
        add_route("Piassa", "Merkato", 10.0, raw=True)

        assert test_client.delete(f"/stations/{created['id']}").status_code == 409


class TestNearestStation:
    """Nearest-station search"""

    def test_nearest_station(self, test_client, sample_network):
        response = test_client.get("/nearest-station", params={"lat": 9.0380, "lng": 38.7520})
        assert response.status_code == 200
        data = response.json()
        assert data["station"]["name"] == "Piassa Station"
        assert 0 <= data["distance_meters"] < 100

    def test_missing_coordinates(self, test_client, sample_network):
        assert test_client.get("/nearest-station", params={"lat": 9.03}).status_code == 400
        assert test_client.get("/nearest-station").status_code == 400

    def test_no_stations(self, test_client):
        response = test_client.get("/nearest-station", params={"lat": 9.03, "lng": 38.75})
        assert response.status_code == 404


def test_places_keyed_by_display_name(test_client, add_station):
    add_station("Bole", 38.7993, 8.9942, connected=["Megenagna Station"])
    add_station("Piassa", 38.7519, 9.0376)

    response = test_client.get("/places")
    assert response.status_code == 200
    places = response.json()["places"]
    assert set(places) == {"Bole", "Piassa"}
    assert places["Bole"] == {
        "stations": ["Bole Station"],
        "location": [38.7993, 8.9942],
        "connected": ["Megenagna Station"],
    }
