from app.services.reading_list_rules import COMPLETED_AT_REQUIRED, COMPLETED_BEFORE_STARTED, STARTED_AT_REQUIRED


def add_item(client, headers, **data):
    payload = {"volumeId": "vol-1", "status": "interested"}
    payload.update(data)
    return client.post("/api/reading-list", json=payload, headers=headers)


def test_add_and_list(client, alice):
    headers, user = alice
    r = add_item(client, headers, status="reading", startedAt="2024-01-05T10:00:00Z")
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    item = body["data"]["item"]
    assert item["volumeId"] == "vol-1"
    assert item["status"] == "reading"
    assert item["user"] == user["id"]
    assert item["visibility"] == "public"

    r = client.get("/api/reading-list/me", headers=headers)
    assert [i["volumeId"] for i in r.json()["data"]["readingList"]] == ["vol-1"]


def test_add_rejects_missing_started_at(client, alice):
    headers, _ = alice
    r = add_item(client, headers, status="reading")
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": STARTED_AT_REQUIRED}


def test_add_rejects_missing_completed_at(client, alice):
    headers, _ = alice
    r = add_item(client, headers, status="completed", startedAt="2024-01-05T00:00:00Z")
    assert r.status_code == 400
    assert r.json()["message"] == COMPLETED_AT_REQUIRED


def test_add_rejects_completed_before_started(client, alice):
    headers, _ = alice
    r = add_item(client, headers, status="completed", startedAt="2024-02-01T00:00:00Z", completedAt="2024-01-01T00:00:00Z")
    assert r.status_code == 400
    assert r.json()["message"] == COMPLETED_BEFORE_STARTED

    r = client.get("/api/reading-list/me", headers=headers)
    assert r.json()["data"]["readingList"] == []


def test_add_rejects_unknown_status_and_fields(client, alice):
    headers, _ = alice
    assert add_item(client, headers, status="abandoned").status_code == 400
    assert add_item(client, headers, rating=5).status_code == 400


def test_duplicate_volume_is_rejected(client, alice):
    headers, _ = alice
    assert add_item(client, headers).status_code == 201
    r = add_item(client, headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Book is already in your reading list"


def test_update_merges_then_validates(client, alice):
    headers, _ = alice
    item_id = add_item(client, headers).json()["data"]["item"]["id"]

    r = client.patch(f"/api/reading-list/{item_id}", json={"status": "reading"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == STARTED_AT_REQUIRED

    r = client.patch(
        f"/api/reading-list/{item_id}",
        json={"status": "reading", "startedAt": "2024-03-01T08:00:00Z"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["data"]["item"]["status"] == "reading"

    # stored startedAt is merged with the incoming completedAt
    r = client.patch(
        f"/api/reading-list/{item_id}",
        json={"status": "completed", "completedAt": "2024-02-01T08:00:00Z"},
        headers=headers,
    )
    assert r.status_code == 400
    assert r.json()["message"] == COMPLETED_BEFORE_STARTED

    r = client.patch(
        f"/api/reading-list/{item_id}",
        json={"status": "completed", "completedAt": "2024-03-20T08:00:00Z"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["data"]["item"]["status"] == "completed"


def test_update_and_delete_require_ownership(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    item_id = add_item(client, alice_headers, volumeId="vol-owned").json()["data"]["item"]["id"]

    r = client.patch(f"/api/reading-list/{item_id}", json={"visibility": "private"}, headers=bob_headers)
    assert r.status_code == 403
    assert r.json()["success"] is False

    r = client.delete(f"/api/reading-list/{item_id}", headers=bob_headers)
    assert r.status_code == 403

    items = client.get("/api/reading-list/me", headers=alice_headers).json()["data"]["readingList"]
    assert len(items) == 1
    assert items[0]["visibility"] == "public"


def test_delete_own_item(client, alice):
    headers, _ = alice
    item_id = add_item(client, headers).json()["data"]["item"]["id"]
    r = client.delete(f"/api/reading-list/{item_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["readingList"] == []

    r = client.delete(f"/api/reading-list/{item_id}", headers=headers)
    assert r.status_code == 404


def test_invalid_item_id_is_400(client, alice):
    headers, _ = alice
    r = client.delete("/api/reading-list/not-an-id", headers=headers)
    assert r.status_code == 400


def test_public_list_of_other_user_hides_private_items(client, alice, bob):
    alice_headers, alice_user = alice
    bob_headers, _ = bob
    add_item(client, alice_headers, volumeId="open")
    add_item(client, alice_headers, volumeId="secret", visibility="private")

    r = client.get(f"/api/reading-list/{alice_user['id']}", headers=bob_headers)
    assert r.status_code == 200
    assert [i["volumeId"] for i in r.json()["data"]["readingList"]] == ["open"]
