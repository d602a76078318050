def _post_payload(taxonomy, **overrides):
    payload = {
        "title": "What Is Bitcoin?",
        "excerpt": "A beginner's introduction.",
        "content": "# What is Bitcoin\n\nBitcoin is a decentralized digital currency.",
        "authorId": taxonomy["author_id"],
        "categoryId": taxonomy["category_id"],
        "tags": ["bitcoin"],
        "targetKeyword": "bitcoin",
    }
    payload.update(overrides)
    return payload


def test_create_generates_slug_and_metrics(client, admin_headers, taxonomy):
    resp = client.post("/api/admin/posts/", json=_post_payload(taxonomy), headers=admin_headers)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["slug"] == "what-is-bitcoin"
    assert data["status"] == "DRAFT"
    assert data["wordCount"] == 9
    assert data["readingTime"] == 1
    assert data["publishDate"] is None
    assert data["targetKeyword"] == "bitcoin"


def test_create_published_sets_publish_date(client, admin_headers, taxonomy):
    resp = client.post("/api/admin/posts/", json=_post_payload(taxonomy, status="PUBLISHED"), headers=admin_headers)
    assert resp.get_json()["data"]["publishDate"] is not None


def test_duplicate_slug_conflicts(client, admin_headers, taxonomy):
    assert client.post("/api/admin/posts/", json=_post_payload(taxonomy), headers=admin_headers).status_code == 201
    resp = client.post("/api/admin/posts/", json=_post_payload(taxonomy), headers=admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"


def test_unknown_author_is_rejected(client, admin_headers, taxonomy):
    resp = client.post("/api/admin/posts/", json=_post_payload(taxonomy, authorId="nobody"), headers=admin_headers)
    assert resp.status_code == 400


def test_schema_validation_errors(client, admin_headers, taxonomy):
    resp = client.post(
        "/api/admin/posts/", json=_post_payload(taxonomy, title="", slug="Not A Slug"), headers=admin_headers
    )
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert {d["field"] for d in body["details"]} >= {"title", "slug"}


def test_get_update_publish_delete(client, admin_headers, taxonomy):
    created = client.post("/api/admin/posts/", json=_post_payload(taxonomy), headers=admin_headers).get_json()["data"]
    post_id = created["id"]

    by_slug = client.get("/api/admin/posts/what-is-bitcoin", headers=admin_headers).get_json()["data"]
    assert by_slug["id"] == post_id

    updated = client.put(
        f"/api/admin/posts/{post_id}", json={"content": "one two three four"}, headers=admin_headers
    ).get_json()["data"]
    assert updated["wordCount"] == 4
    assert updated["title"] == "What Is Bitcoin?"

    published = client.post(
        f"/api/admin/posts/{post_id}/publish", json={"publish": True}, headers=admin_headers
    ).get_json()["data"]
    assert published["status"] == "PUBLISHED"
    assert published["publishDate"] is not None

    unpublished = client.post(
        f"/api/admin/posts/{post_id}/publish", json={"publish": False}, headers=admin_headers
    ).get_json()["data"]
    assert unpublished["status"] == "DRAFT"

    assert client.delete(f"/api/admin/posts/{post_id}", headers=admin_headers).get_json()["data"] == {"deleted": True}
    assert client.get(f"/api/admin/posts/{post_id}", headers=admin_headers).status_code == 404


def test_list_filters_and_paginates(client, admin_headers, taxonomy):
    for i in range(3):
        client.post(
            "/api/admin/posts/",
            json=_post_payload(taxonomy, title=f"Ethereum Guide {i}", status="PUBLISHED" if i else "DRAFT"),
            headers=admin_headers,
        )
    body = client.get("/api/admin/posts/?limit=2", headers=admin_headers).get_json()["data"]
    assert len(body["posts"]) == 2
    assert body["pagination"] == {"total": 3, "pages": 2, "currentPage": 1}

    drafts = client.get("/api/admin/posts/?status=draft", headers=admin_headers).get_json()["data"]
    assert [p["slug"] for p in drafts["posts"]] == ["ethereum-guide-0"]

    found = client.get("/api/admin/posts/?search=GUIDE-2", headers=admin_headers).get_json()["data"]
    assert [p["slug"] for p in found["posts"]] == ["ethereum-guide-2"]


def test_author_role_limits(client, auth_header, taxonomy):
    author = auth_header("AUTHOR")
    created = client.post("/api/admin/posts/", json=_post_payload(taxonomy), headers=author)
    assert created.status_code == 201
    post_id = created.get_json()["data"]["id"]

    assert client.post(f"/api/admin/posts/{post_id}/publish", json={"publish": True}, headers=author).status_code == 403
    assert client.put(f"/api/admin/posts/{post_id}", json={"title": "New"}, headers=author).status_code == 403
    assert client.delete(f"/api/admin/posts/{post_id}", headers=author).status_code == 403


def test_delete_unknown_post_is_not_found(client, admin_headers):
    resp = client.delete("/api/admin/posts/does-not-exist", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


def test_punctuation_only_title_is_rejected(client, admin_headers, taxonomy):
    resp = client.post("/api/admin/posts/", json=_post_payload(taxonomy, title="!!!"), headers=admin_headers)
    assert resp.status_code == 400
    assert [d["field"] for d in resp.get_json()["details"]] == ["slug"]


def test_author_cannot_browse_all_posts(client, auth_header, admin_headers, taxonomy):
    post_id = client.post("/api/admin/posts/", json=_post_payload(taxonomy), headers=admin_headers).get_json()["data"]["id"]
    author = auth_header("AUTHOR")
    assert client.get("/api/admin/posts/", headers=author).status_code == 403
    assert client.get(f"/api/admin/posts/{post_id}", headers=author).status_code == 403
    assert client.get("/api/admin/posts/", headers=auth_header("EDITOR")).status_code == 200
