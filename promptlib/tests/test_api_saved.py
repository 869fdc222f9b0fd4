from promptlib.repository import prompt_repo


def _prompt(store, creator, title="Saved one"):
    with store.connect() as conn:
        return prompt_repo.create(
            conn,
            {"title": title, "description": "d", "department": "design", "category": "planning", "prompt": "p"},
            creator,
        )


def test_save_flow(client, login, store):
    u = login("u@example.com")
    pid = _prompt(store, "u@example.com")

    r = client.post(f"/api/prompts/{pid}/save", headers=u)
    assert r.status_code == 200
    assert r.json()["message"] == "Prompt saved successfully"
    assert client.get(f"/api/prompts/{pid}/save", headers=u).json() == {"saved": True}

    r = client.post(f"/api/prompts/{pid}/save", headers=u)
    assert r.status_code == 400
    assert r.json()["detail"] == "Prompt already saved"

    saved = client.get("/api/prompts/saved", headers=u).json()
    assert [p["id"] for p in saved] == [pid]
    assert saved[0]["saved_at"]

    r = client.delete(f"/api/prompts/{pid}/save", headers=u)
    assert r.status_code == 200
    assert r.json()["message"] == "Prompt unsaved successfully"
    assert client.get("/api/prompts/saved", headers=u).json() == []

    # unsaving again is harmless
    assert client.delete(f"/api/prompts/{pid}/save", headers=u).status_code == 200


def test_save_unknown_prompt_is_404(client, login):
    u = login("u@example.com")
    r = client.post("/api/prompts/424242/save", headers=u)
    assert r.status_code == 404


def test_saved_requires_auth(client):
    assert client.get("/api/prompts/saved").status_code == 401
    assert client.post("/api/prompts/1/save").status_code == 401


def test_delete_prompt_removes_bookmarks(client, login, store):
    owner = login("owner@example.com")
    fan = login("fan@example.com")
    pid = _prompt(store, "owner@example.com")

    assert client.post(f"/api/prompts/{pid}/save", headers=fan).status_code == 200
    assert client.delete(f"/api/prompts/{pid}", headers=owner).status_code == 200

    assert client.get("/api/prompts/saved", headers=fan).json() == []
    with store.connect() as conn:
        n = conn.execute("SELECT COUNT(*) FROM saved_prompts WHERE prompt_id=?", (pid,)).fetchone()[0]
    assert n == 0
