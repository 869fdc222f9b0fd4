import json

from promptlib.logs import OperationLogContext, search_logs


def test_mutations_are_audited(client, login, store):
    headers = login("u@example.com")
    body = {"title": "T", "description": "D", "department": "sales", "category": "email", "prompt": "P"}
    pid = client.post("/api/prompts", json=body, headers=headers).json()["id"]
    client.patch(f"/api/prompts/{pid}", json={"title": "T2"}, headers=headers)

    total, items = search_logs(store, None, "PATCH_PROMPT", None, None, 1, 20)
    assert total == 1
    rec = items[0]
    assert rec["user"] == "u@example.com"
    assert rec["entity_type"] == "PROMPT"
    assert rec["entity_id"] == str(pid)
    assert rec["result"] == "OK"
    assert json.loads(rec["before_json"])["title"] == "T"
    assert json.loads(rec["after_json"])["title"] == "T2"


def test_write_failure_does_not_raise(store):
    log = OperationLogContext(store, "NOOP")
    store.close()
    log.write("OK")


def test_search_endpoint_for_admin(client, login, store):
    admin = login("admin@example.com", "Admin")
    OperationLogContext(store, "CUSTOM", "someone").write("ERROR", "boom")

    r = client.get("/api/logs/search", params={"action": "CUSTOM"}, headers=admin)
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 1
    assert data["items"][0]["err_msg"] == "boom"

    # sign-in above is audited too
    r = client.get("/api/logs/search", params={"size": 1}, headers=admin)
    assert r.json()["total"] >= 2
    assert len(r.json()["items"]) == 1


def test_search_endpoint_is_admin_only(client, login):
    assert client.get("/api/logs/search").status_code == 401

    user = login("u@example.com")
    r = client.get("/api/logs/search", headers=user)
    assert r.status_code == 403
    assert r.json()["detail"] == "Admin access required"
