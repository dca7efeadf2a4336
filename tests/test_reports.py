from beanie import PydanticObjectId


def create_discussion(client, headers):
    r = client.post(
        "/api/discussions",
        json={"title": "Spoilers everywhere", "content": "...", "spoilerAlert": True},
        headers=headers,
    )
    assert r.status_code == 201, r.json()
    return r.json()["data"]["discussion"]


def report(client, headers, **data):
    return client.post("/api/reports", json=data, headers=headers)


def test_submit_report(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    discussion = create_discussion(client, alice_headers)

    r = report(
        client,
        bob_headers,
        reportType="discussion",
        targetId=discussion["id"],
        reason="spam",
        description="  buy my book  ",
    )
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Report submitted successfully"
    submitted = body["data"]["report"]
    assert submitted["reportType"] == "discussion"
    assert submitted["targetId"] == discussion["id"]
    assert submitted["reason"] == "spam"
    assert submitted["description"] == "buy my book"
    assert submitted["status"] == "pending"


def test_same_content_cannot_be_reported_twice(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    discussion = create_discussion(client, alice_headers)

    first = report(client, bob_headers, reportType="discussion", targetId=discussion["id"], reason="spam")
    assert first.status_code == 201
    again = report(client, bob_headers, reportType="discussion", targetId=discussion["id"], reason="harassment")
    assert again.status_code == 409
    assert again.json() == {"success": False, "message": "You have already reported this content"}

    # another reporter may still flag it
    assert report(client, alice_headers, reportType="discussion", targetId=discussion["id"], reason="spam").status_code == 201


def test_report_fields_are_validated(client, alice):
    headers, _ = alice
    target = str(PydanticObjectId())
    assert report(client, headers).status_code == 400
    assert report(client, headers, reportType="chapter", targetId=target, reason="spam").status_code == 400
    assert report(client, headers, reportType="blog", targetId=target, reason="boring").status_code == 400
    assert report(client, headers, reportType="blog", targetId="nope", reason="spam").status_code == 400
    r = report(client, headers, reportType="blog", targetId=target, reason="other", description="x" * 201)
    assert r.status_code == 400


def test_missing_target_is_404(client, alice):
    headers, _ = alice
    r = report(client, headers, reportType="comment", targetId=str(PydanticObjectId()), reason="bullying")
    assert r.status_code == 404
    assert r.json()["message"] == "Target content not found"


def test_target_must_match_report_type(client, alice, bob):
    alice_headers, alice_user = alice
    bob_headers, _ = bob
    discussion = create_discussion(client, alice_headers)

    assert report(client, bob_headers, reportType="blog", targetId=discussion["id"], reason="spam").status_code == 404
    assert report(client, bob_headers, reportType="user", targetId=alice_user["id"], reason="impersonation").status_code == 201


def test_my_reports_lists_only_own_reports(client, alice, bob):
    alice_headers, alice_user = alice
    bob_headers, _ = bob
    discussion = create_discussion(client, alice_headers)
    report(client, bob_headers, reportType="discussion", targetId=discussion["id"], reason="spam")
    report(client, bob_headers, reportType="user", targetId=alice_user["id"], reason="impersonation")

    r = client.get("/api/reports/my-reports", headers=bob_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert {rep["reportType"] for rep in data["reports"]} == {"discussion", "user"}
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalReports": 2,
        "hasNextPage": False,
        "hasPrevPage": False,
    }

    assert client.get("/api/reports/my-reports", headers=alice_headers).json()["data"]["reports"] == []

    filtered = client.get("/api/reports/my-reports", params={"reportType": "user"}, headers=bob_headers)
    assert [rep["reportType"] for rep in filtered.json()["data"]["reports"]] == ["user"]

    paged = client.get("/api/reports/my-reports", params={"limit": 1, "page": 2}, headers=bob_headers)
    pagination = paged.json()["data"]["pagination"]
    assert len(paged.json()["data"]["reports"]) == 1
    assert pagination["totalPages"] == 2
    assert pagination["hasPrevPage"] is True
    assert pagination["hasNextPage"] is False


def test_my_reports_rejects_unknown_filters(client, alice):
    headers, _ = alice
    assert client.get("/api/reports/my-reports", params={"status": "closed"}, headers=headers).status_code == 400
    assert client.get("/api/reports/my-reports", params={"limit": 51}, headers=headers).status_code == 400


def test_reports_require_a_registered_user(client, verifier):
    assert client.get("/api/reports/my-reports").status_code == 401
    assert client.post("/api/reports", json={"reportType": "user"}).status_code == 401
