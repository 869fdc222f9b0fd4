from promptlib import __version__


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "db": "ok"}

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "promptlib-api"
    assert v.json().get("version") == __version__


def test_health_reports_closed_store(client, store):
    store.close()
    r = client.get("/health")
    assert r.status_code == 500
    assert r.json()["detail"] == "Database unavailable"


def test_categories(client):
    r = client.get("/api/categories")
    assert r.status_code == 200
    ids = [c["id"] for c in r.json()]
    assert ids == ["email", "documentation", "planning", "analysis", "communication", "reporting",
                   "team-management"]
    assert r.json()[0]["name"] == "Email templates"
