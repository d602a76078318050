from cryptostart.db.repositories.comment_repo import CommentRepository, SpamLogRepository
from cryptostart.db.session import get_db


def _payload(**overrides):
    payload = {
        "postSlug": "what-is-bitcoin",
        "authorName": "Alice",
        "authorEmail": "Alice@Example.com",
        "content": "Great article about the Bitcoin halving, thanks for sharing.",
    }
    payload.update(overrides)
    return payload


def _spam_logs(app):
    with app.app_context():
        return [(log.reason, log.severity) for log in SpamLogRepository(get_db().session()).list()]


def _all_comments(app):
    with app.app_context():
        comments, _ = CommentRepository(get_db().session()).list(limit=100)
        return comments


def test_submit_creates_pending_comment(app, client):
    resp = client.post("/api/comments/", json=_payload())
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["status"] == "PENDING"
    assert data["spamScore"] == 0.0
    assert data["postSlug"] == "what-is-bitcoin"
    assert data["parentId"] is None
    assert "authorEmail" not in data

    [stored] = _all_comments(app)
    assert stored.author_email == "alice@example.com"


def test_spammy_comment_is_stored_as_spam_and_audited(app, client):
    links = " ".join(f"https://spam{i}.example.com" for i in range(6))
    resp = client.post("/api/comments/", json=_payload(content=f"Cheap viagra here {links} " + "!" * 12))
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["status"] == "SPAM"
    assert data["spamScore"] >= 0.85
    assert ("spam_keywords", "HIGH") in _spam_logs(app)


def test_honeypot_fakes_success_and_stores_nothing(app, client):
    resp = client.post("/api/comments/", json=_payload(website="http://bot.example.com"))
    assert resp.status_code == 201
    assert resp.get_json()["data"] == {"message": "Comment submitted", "success": True}
    assert _all_comments(app) == []
    assert _spam_logs(app) == [("honeypot", "HIGH")]


def test_missing_fields(client):
    resp = client.post("/api/comments/", json={"postSlug": "what-is-bitcoin"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert {d["field"] for d in body["details"]} == {"author_name", "author_email", "content"}


def test_invalid_email_is_rejected_and_audited(app, client):
    resp = client.post("/api/comments/", json=_payload(authorEmail="not-an-email"))
    assert resp.status_code == 400
    assert _spam_logs(app) == [("invalid_email", "MEDIUM")]


def test_sixth_comment_within_window_is_rate_limited(app, client):
    for i in range(5):
        resp = client.post("/api/comments/", json=_payload(authorEmail=f"reader{i}@example.com"))
        assert resp.status_code == 201

    resp = client.post("/api/comments/", json=_payload(authorEmail="reader9@example.com"))
    assert resp.status_code == 429
    assert resp.get_json()["error"] == "rate_limit_exceeded"
    assert len(_all_comments(app)) == 5
    assert ("rate_limit", "MEDIUM") in _spam_logs(app)


def test_same_email_from_other_ips_is_rate_limited(client):
    for i in range(5):
        headers = {"X-Forwarded-For": f"10.0.0.{i}"}
        assert client.post("/api/comments/", json=_payload(), headers=headers).status_code == 201
    resp = client.post("/api/comments/", json=_payload(), headers={"X-Forwarded-For": "10.0.0.99"})
    assert resp.status_code == 429


def test_reply_must_target_comment_on_same_post(client):
    parent = client.post("/api/comments/", json=_payload()).get_json()["data"]
    resp = client.post("/api/comments/", json=_payload(postSlug="other-post", parentId=parent["id"]))
    assert resp.status_code == 400

    resp = client.post("/api/comments/", json=_payload(parentId=parent["id"]))
    assert resp.status_code == 201
    assert resp.get_json()["data"]["parentId"] == parent["id"]


def test_list_requires_post_slug(client):
    resp = client.get("/api/comments/")
    assert resp.status_code == 400


def test_list_returns_only_approved_threads(client, auth_header):
    moderator = auth_header("EDITOR")
    first = client.post("/api/comments/", json=_payload(content="First comment on this post.")).get_json()["data"]
    second = client.post("/api/comments/", json=_payload(content="Second comment on this post.")).get_json()["data"]
    client.post("/api/comments/", json=_payload(content="Still waiting for moderation."))
    reply = client.post(
        "/api/comments/", json=_payload(content="A reply to the first one.", parentId=first["id"])
    ).get_json()["data"]
    client.post("/api/comments/", json=_payload(content="Unapproved reply here.", parentId=first["id"]))

    for comment_id in (first["id"], second["id"], reply["id"]):
        resp = client.patch(f"/api/admin/comments/{comment_id}", json={"status": "approved"}, headers=moderator)
        assert resp.status_code == 200

    threads = client.get("/api/comments/?postSlug=what-is-bitcoin").get_json()["data"]
    assert [t["id"] for t in threads] == [second["id"], first["id"]]
    assert [r["id"] for r in threads[1]["replies"]] == [reply["id"]]
    assert threads[0]["replies"] == []
    assert threads[1]["authorName"] == "Alice"

    assert client.get("/api/comments/?postSlug=another-post").get_json()["data"] == []
