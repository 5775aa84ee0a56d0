"""
Asset endpoint tests.

Run: pytest gridops/test_assets.py -v
"""

import pytest


class TestAssetCrud:
    def test_create_and_get_round_trip(self, client, signup):
        headers = signup("alice")
        created = client.post("/api/asset", json={"name": "Turbine-TR-505"}, headers=headers)
        assert created.status_code == 200
        asset = created.json()["data"]
        assert asset["name"] == "Turbine-TR-505"
        assert asset["id"]
        assert asset["belongsToId"]
        assert asset["createdAt"] and asset["updatedAt"]

        fetched = client.get(f"/api/asset/{asset['id']}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["data"] == asset

    def test_list_in_creation_order(self, client, signup):
        headers = signup("alice")
        for name in ["Gen-1", "Gen-2", "Gen-3"]:
            client.post("/api/asset", json={"name": name}, headers=headers)
        response = client.get("/api/asset", headers=headers)
        assert [a["name"] for a in response.json()["data"]] == ["Gen-1", "Gen-2", "Gen-3"]

    def test_owner_is_never_taken_from_body(self, client, signup):
        alice = signup("alice")
        bob = signup("bob")
        bob_id = client.post("/api/asset", json={"name": "Bob-1"}, headers=bob).json()["data"]["belongsToId"]

        created = client.post("/api/asset", json={"name": "Gen-1", "belongsToId": bob_id}, headers=alice)
        assert created.status_code == 200
        assert created.json()["data"]["belongsToId"] != bob_id
        assert client.get("/api/asset", headers=bob).json()["data"][0]["name"] == "Bob-1"
        assert len(client.get("/api/asset", headers=bob).json()["data"]) == 1

    def test_update_name(self, client, signup):
        headers = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=headers).json()["data"]
        updated = client.put(f"/api/asset/{asset['id']}", json={"name": "Gen-1B"}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["data"]["name"] == "Gen-1B"
        assert updated.json()["data"]["createdAt"] == asset["createdAt"]

    @pytest.mark.parametrize("body", [{}, {"name": None}])
    def test_empty_update_returns_current(self, client, signup, body):
        headers = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=headers).json()["data"]
        response = client.put(f"/api/asset/{asset['id']}", json=body, headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Gen-1"

    def test_delete_returns_deleted_entity(self, client, signup):
        headers = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=headers).json()["data"]
        deleted = client.delete(f"/api/asset/{asset['id']}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json()["data"]["id"] == asset["id"]
        assert client.get(f"/api/asset/{asset['id']}", headers=headers).status_code == 404

    def test_delete_cascades_to_records_and_tasks(self, client, signup):
        headers = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=headers).json()["data"]
        record = client.post(
            "/api/maintenance",
            json={"title": "Inspect", "body": "n/a", "assetId": asset["id"]},
            headers=headers,
        ).json()["data"]
        client.post(
            "/api/task",
            json={"name": "Check oil", "description": "ok", "maintenanceRecordId": record["id"]},
            headers=headers,
        )

        assert client.delete(f"/api/asset/{asset['id']}", headers=headers).status_code == 200
        assert client.get("/api/maintenance", headers=headers).json()["data"] == []
        assert client.get("/api/task", headers=headers).json()["data"] == []


class TestAssetValidation:
    @pytest.mark.parametrize("body", [
        {},
        {"name": ""},
        {"name": "   "},
        {"name": 42},
        {"name": "x" * 256},
    ])
    def test_invalid_create(self, client, signup, body):
        response = client.post("/api/asset", json=body, headers=signup("alice"))
        assert response.status_code == 400
        assert response.json() == {"message": "invalid input"}

    def test_name_is_trimmed(self, client, signup):
        response = client.post("/api/asset", json={"name": "  Gen-1  "}, headers=signup("alice"))
        assert response.json()["data"]["name"] == "Gen-1"

    def test_invalid_update(self, client, signup):
        headers = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=headers).json()["data"]
        response = client.put(f"/api/asset/{asset['id']}", json={"name": ""}, headers=headers)
        assert response.status_code == 400

    def test_unknown_id(self, client, signup):
        response = client.get("/api/asset/does-not-exist", headers=signup("alice"))
        assert response.status_code == 404
        assert response.json() == {"message": "Asset not found"}
