"""
Integration tests for /api/contacts.
"""


class TestContactRoutes:
    def test_crud(self, sync_client):
        r = sync_client.post("/api/contacts", json={"name": "Ana", "phone_number": "555-1", "relationship": "family"})
        assert r.status_code == 201
        c = r.json()
        assert c["is_frequent"] is False and c["last_contacted_at"] is None

        r = sync_client.patch(f"/api/contacts/{c['id']}", json={"is_frequent": True})
        assert r.json()["is_frequent"] is True
        assert r.json()["name"] == "Ana"

        assert sync_client.delete(f"/api/contacts/{c['id']}").status_code == 204
        assert sync_client.get(f"/api/contacts/{c['id']}").status_code == 404

    def test_list_and_frequent(self, sync_client):
        for name, frequent in (("Zed", True), ("Amy", False), ("Bo", True)):
            sync_client.post("/api/contacts", json={"name": name, "phone_number": "1", "is_frequent": frequent})
        assert [c["name"] for c in sync_client.get("/api/contacts").json()] == ["Amy", "Bo", "Zed"]
        assert [c["name"] for c in sync_client.get("/api/contacts/frequent").json()] == ["Bo", "Zed"]

    def test_mark_contacted_moves_to_front(self, sync_client):
        ids = {}
        for name in ("Bo", "Zed"):
            ids[name] = sync_client.post("/api/contacts", json={"name": name, "phone_number": "1",
                                                                "is_frequent": True}).json()["id"]
        r = sync_client.post(f"/api/contacts/{ids['Zed']}/contacted")
        assert r.status_code == 200
        assert r.json()["last_contacted_at"] is not None
        assert [c["name"] for c in sync_client.get("/api/contacts/frequent").json()] == ["Zed", "Bo"]

    def test_validation(self, sync_client):
        assert sync_client.post("/api/contacts", json={"name": "", "phone_number": "1"}).status_code == 422
        assert sync_client.post("/api/contacts/missing/contacted").status_code == 404
