def create_book(client, headers, **data):
    payload = {"title": "My Novel", "synopsis": "A story", "genres": ["fantasy"], "visibility": "public"}
    payload.update(data)
    r = client.post("/api/user-books", json=payload, headers=headers)
    assert r.status_code == 201, r.json()
    return r.json()["data"]["book"]


def create_chapter(client, headers, book_id, number=1, **data):
    payload = {
        "bookId": book_id,
        "title": f"Chapter {number}",
        "content": "It was a dark and stormy night",
        "chapterNumber": number,
    }
    payload.update(data)
    return client.post("/api/chapters", json=payload, headers=headers)


def test_create_chapter_counts_words(client, alice):
    headers, _ = alice
    book = create_book(client, headers)
    r = create_chapter(client, headers, book["id"], visibility="public")
    assert r.status_code == 201
    chapter = r.json()["data"]["chapter"]
    assert chapter["wordCount"] == 7
    assert chapter["chapterNumber"] == 1
    assert chapter["owner"]["username"] == "alice"


def test_chapter_numbers_are_unique_per_book(client, alice):
    headers, _ = alice
    book = create_book(client, headers)
    assert create_chapter(client, headers, book["id"]).status_code == 201
    r = create_chapter(client, headers, book["id"])
    assert r.status_code == 400
    assert r.json()["message"] == "Chapter number already exists for this book"


def test_only_the_author_can_add_chapters(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    book = create_book(client, alice_headers)
    r = create_chapter(client, bob_headers, book["id"])
    assert r.status_code == 403


def test_public_chapter_needs_public_book(client, alice):
    headers, _ = alice
    book = create_book(client, headers, visibility="private")
    r = create_chapter(client, headers, book["id"], visibility="public")
    assert r.status_code == 400
    assert r.json()["message"] == "Chapter cannot be public when the book is private"


def test_non_author_cannot_update_or_delete_chapter(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    book = create_book(client, alice_headers)
    chapter = create_chapter(client, alice_headers, book["id"], visibility="public").json()["data"]["chapter"]

    r = client.patch(f"/api/chapters/{chapter['id']}", json={"title": "Hijacked"}, headers=bob_headers)
    assert r.status_code == 403
    r = client.delete(f"/api/chapters/{chapter['id']}", headers=bob_headers)
    assert r.status_code == 403

    stored = client.get(f"/api/chapters/{chapter['id']}", headers=alice_headers).json()["data"]["chapter"]
    assert stored["title"] == "Chapter 1"


def test_update_chapter_recounts_words(client, alice):
    headers, _ = alice
    book = create_book(client, headers)
    chapter = create_chapter(client, headers, book["id"]).json()["data"]["chapter"]
    r = client.patch(f"/api/chapters/{chapter['id']}", json={"content": "short now"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["chapter"]["wordCount"] == 2


def test_private_chapters_are_hidden_from_readers(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    book = create_book(client, alice_headers)
    create_chapter(client, alice_headers, book["id"], 1, visibility="public")
    draft = create_chapter(client, alice_headers, book["id"], 2).json()["data"]["chapter"]

    listed = client.get(f"/api/chapters/book/{book['id']}", headers=bob_headers).json()["data"]["chapters"]
    assert [c["chapterNumber"] for c in listed] == [1]
    assert listed[0]["content"] is None

    assert client.get(f"/api/chapters/{draft['id']}", headers=bob_headers).status_code == 403

    detail = client.get(f"/api/user-books/{book['id']}", headers=alice_headers).json()["data"]["book"]
    assert [c["chapterNumber"] for c in detail["chapters"]] == [1, 2]
    assert detail["chapterCount"] == 2


def test_book_rules(client, alice):
    headers, _ = alice
    book = create_book(client, headers)

    r = client.patch(f"/api/user-books/{book['id']}", json={"isCompleted": True}, headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot mark book as completed without any chapters"

    create_chapter(client, headers, book["id"], visibility="public")
    r = client.patch(f"/api/user-books/{book['id']}", json={"visibility": "private"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot make book private while it has public chapters"

    r = client.patch(f"/api/user-books/{book['id']}", json={"isCompleted": True}, headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["book"]["isCompleted"] is True


def test_deleting_a_book_removes_its_chapters(client, alice):
    headers, _ = alice
    book = create_book(client, headers)
    chapter = create_chapter(client, headers, book["id"]).json()["data"]["chapter"]

    assert client.delete(f"/api/user-books/{book['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/chapters/{chapter['id']}", headers=headers).status_code == 404


def test_like_toggles(client, alice, bob):
    alice_headers, _ = alice
    bob_headers, _ = bob
    book = create_book(client, alice_headers)
    chapter = create_chapter(client, alice_headers, book["id"], visibility="public").json()["data"]["chapter"]

    r = client.post(f"/api/chapters/{chapter['id']}/like", headers=bob_headers)
    assert r.json()["data"] == {"liked": True, "likeCount": 1}
    r = client.post(f"/api/chapters/{chapter['id']}/like", headers=bob_headers)
    assert r.json()["data"] == {"liked": False, "likeCount": 0}

    r = client.post(f"/api/chapters/{chapter['id']}/like", headers=alice_headers)
    assert r.status_code == 400

    r = client.post(f"/api/user-books/{book['id']}/like", headers=bob_headers)
    assert r.json()["data"] == {"liked": True, "likeCount": 1}


def test_book_search_treats_pattern_characters_literally(client, alice):
    headers, _ = alice
    create_book(client, headers, title="What? A novel")
    create_book(client, headers, title="Whatever")

    r = client.get("/api/user-books", params={"search": "what?"}, headers=headers)
    assert r.status_code == 200
    assert [b["title"] for b in r.json()["data"]["books"]] == ["What? A novel"]

    r = client.get("/api/user-books", params={"search": "[unclosed"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["books"] == []
