"""HTTP-level tests through the FastAPI app."""

from conftest import auth_headers


def _login(client, email, password="secret123"):
    return client.post("/auth/login", json={"email": email, "password": password})


# ----- root -----

def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json() == {"status": "healthy"}


# ----- auth -----

def test_register_login_profile(client):
    response = client.post(
        "/auth/register",
        json={"email": "New@Example.com", "password": "secret123", "name": "New User"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]

    duplicate = client.post(
        "/auth/register",
        json={"email": "NEW@example.com", "password": "secret123", "name": "Again"},
    )
    assert duplicate.status_code == 409

    login = _login(client, "new@example.com")
    assert login.status_code == 200
    token = login.json()["access_token"]
    assert login.json()["token_type"] == "bearer"

    profile = client.get("/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["name"] == "New User"
    assert profile.json()["last_login"] is not None


def test_login_failures(client, make_user, db):
    make_user("someone@example.com")
    assert _login(client, "someone@example.com", "wrong-password").status_code == 401
    assert _login(client, "nobody@example.com").status_code == 401

    inactive = make_user("inactive@example.com")
    inactive.is_active = False
    db.commit()
    assert _login(client, "inactive@example.com").status_code == 403


def test_protected_routes_need_a_valid_token(client):
    assert client.get("/auth/profile").status_code == 401
    bad = client.get("/auth/profile", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401
    assert bad.headers["www-authenticate"] == "Bearer"


# ----- users -----

def test_user_management_is_admin_only(client, admin, reader):
    payload = {"email": "Writer@Example.com", "password": "secret123", "name": "Writer", "role": "author"}

    assert client.post("/users", json=payload, headers=auth_headers(reader)).status_code == 403

    created = client.post("/users", json=payload, headers=auth_headers(admin))
    assert created.status_code == 201
    user_id = created.json()["id"]
    assert created.json()["email"] == "writer@example.com"

    assert client.post("/users", json=payload, headers=auth_headers(admin)).status_code == 409
    assert len(client.get("/users", headers=auth_headers(admin)).json()) == 3

    for field in ("email", "name", "role", "is_active"):
        nulled = client.put(f"/users/{user_id}", json={field: None}, headers=auth_headers(admin))
        assert nulled.status_code == 422

    updated = client.put(f"/users/{user_id}", json={"role": "editor"}, headers=auth_headers(admin))
    assert updated.json()["role"] == "editor"

    assert client.delete(f"/users/{user_id}", headers=auth_headers(admin)).status_code == 200
    assert client.get(f"/users/{user_id}", headers=auth_headers(admin)).status_code == 404
    assert client.delete(f"/users/{user_id}", headers=auth_headers(admin)).status_code == 404


# ----- posts -----

def test_post_scenario_with_duplicate_titles(client, make_user):
    author = make_user("a@x.com", role="author")
    token = _login(client, "a@x.com").json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    first = client.post("/posts", json={"title": "Hello World", "content": "One"}, headers=headers)
    second = client.post("/posts", json={"title": "Hello World", "content": "Two"}, headers=headers)

    assert first.status_code == 201
    assert first.json()["slug"] == "hello-world"
    assert first.json()["author_id"] == author.id
    assert second.json()["slug"] == "hello-world-1"

    fetched = client.get("/posts/slug/hello-world")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Hello World"

    # view recorded by the background task after the response
    by_id = client.get(f"/posts/{first.json()['id']}")
    assert by_id.json()["view_count"] == 1


def test_post_writes_require_author_or_admin(client, reader, author):
    payload = {"title": "Nope", "content": "Body"}
    assert client.post("/posts", json=payload).status_code == 401
    assert client.post("/posts", json=payload, headers=auth_headers(reader)).status_code == 403

    post_id = client.post("/posts", json=payload, headers=auth_headers(author)).json()["id"]
    assert client.put(f"/posts/{post_id}", json={"title": "x"}, headers=auth_headers(reader)).status_code == 403

    # any authenticated user may delete
    assert client.delete(f"/posts/{post_id}", headers=auth_headers(reader)).status_code == 200
    assert client.get(f"/posts/{post_id}").status_code == 404
    assert client.delete(f"/posts/{post_id}", headers=auth_headers(reader)).status_code == 404


def test_post_lifecycle(client, author):
    headers = auth_headers(author)
    category = client.post("/categories", json={"name": "Tech News"}, headers=headers).json()

    created = client.post(
        "/posts",
        json={"title": "Lifecycle", "content": "Body", "categories": [category["id"]]},
        headers=headers,
    ).json()
    assert created["status"] == "draft"
    assert [c["slug"] for c in created["categories"]] == ["tech-news"]

    published = client.post(f"/posts/{created['id']}/publish", headers=headers).json()
    assert published["status"] == "published"
    assert published["published_at"] is not None

    listed = client.get("/posts", params={"status": "published"}).json()
    assert [p["id"] for p in listed] == [created["id"]]
    assert client.get("/posts", params={"category_id": category["id"]}).json()[0]["id"] == created["id"]

    assert client.post(f"/posts/{created['id']}/views").status_code == 200
    viewed = client.put(f"/posts/{created['id']}", json={"increment_views": True}, headers=headers).json()
    assert viewed["view_count"] == 2

    archived = client.post(f"/posts/{created['id']}/archive", headers=headers).json()
    assert archived["status"] == "archived"

    assert client.post("/posts/missing/views").status_code == 404
    assert client.get("/posts/slug/missing").status_code == 404


def test_post_update_rejects_null_required_fields(client, author):
    headers = auth_headers(author)
    post = client.post("/posts", json={"title": "Kept", "content": "Body"}, headers=headers).json()

    for field in ("title", "content", "status"):
        response = client.put(f"/posts/{post['id']}", json={field: None}, headers=headers)
        assert response.status_code == 422

    unchanged = client.get(f"/posts/{post['id']}").json()
    assert (unchanged["title"], unchanged["slug"], unchanged["status"]) == ("Kept", "kept", "draft")


# ----- comments -----

def test_comment_moderation_flow(client, author, admin, make_user):
    editor = make_user("editor@example.com", role="editor")
    post = client.post("/posts", json={"title": "Discuss", "content": "Body"}, headers=auth_headers(author)).json()

    created = client.post(
        "/comments",
        json={"post_id": post["id"], "content": "First!", "author_name": "Guest", "status": "approved"},
    )
    assert created.status_code == 201
    comment = created.json()
    assert comment["status"] == "pending"
    assert comment["post"]["slug"] == "discuss"

    assert client.get(f"/posts/{post['id']}").json()["comments_count"] == 0

    assert client.patch(
        f"/comments/{comment['id']}/approve", json={"is_approved": True}, headers=auth_headers(author)
    ).status_code == 403
    approved = client.patch(
        f"/comments/{comment['id']}/approve", json={"is_approved": True}, headers=auth_headers(editor)
    )
    assert approved.json()["status"] == "approved"

    assert client.get(f"/comments/post/{post['id']}/count").json() == {"count": 1}
    detail = client.get(f"/posts/{post['id']}").json()
    assert detail["comments_count"] == 1
    assert detail["comments"][0]["content"] == "First!"

    reply = client.post(
        "/comments",
        json={"post_id": post["id"], "content": "Reply", "author_name": "Other", "parent_id": comment["id"]},
    ).json()
    top_level = client.get("/comments", params={"post_id": post["id"], "parent_id": "null"}).json()
    assert [c["id"] for c in top_level] == [comment["id"]]
    replies = client.get("/comments", params={"parent_id": comment["id"]}).json()
    assert [c["id"] for c in replies] == [reply["id"]]

    page = client.get("/comments/admin", params={"limit": 1}, headers=auth_headers(admin)).json()
    assert page["total"] == 2
    assert page["total_pages"] == 2
    assert len(page["data"]) == 1

    bulk = client.patch(
        "/comments/bulk",
        json={"commentIds": [reply["id"]], "action": "approve"},
        headers=auth_headers(admin),
    )
    assert bulk.json()["processed"] == 1
    assert client.get(f"/comments/{reply['id']}").json()["status"] == "approved"

    assert client.delete(f"/comments/{reply['id']}", headers=auth_headers(admin)).status_code == 200
    assert client.get(f"/comments/{reply['id']}").status_code == 404


def test_comment_validation_errors(client, admin, author):
    post = client.post("/posts", json={"title": "P", "content": "Body"}, headers=auth_headers(author)).json()

    missing_post = client.post("/comments", json={"post_id": "missing", "content": "x", "author_name": "G"})
    assert missing_post.status_code == 404

    bad_parent = client.post(
        "/comments",
        json={"post_id": post["id"], "content": "x", "author_name": "G", "parent_id": "missing"},
    )
    assert bad_parent.status_code == 400

    empty = client.patch(
        "/comments/bulk", json={"commentIds": [], "action": "approve"}, headers=auth_headers(admin)
    )
    assert empty.status_code == 400
    unknown = client.patch(
        "/comments/bulk", json={"commentIds": ["a"], "action": "spam"}, headers=auth_headers(admin)
    )
    assert unknown.status_code == 400
    assert client.patch("/comments/bulk", json={"commentIds": ["a"], "action": "approve"}).status_code == 401


# ----- categories and tags -----

def test_categories(client, reader):
    assert client.post("/categories", json={"name": "Tech"}).status_code == 401

    created = client.post(
        "/categories", json={"name": "Web  Dev", "description": "All things web"}, headers=auth_headers(reader)
    )
    assert created.status_code == 201
    assert created.json()["slug"] == "web-dev"
    category_id = created.json()["id"]

    renamed = client.put(f"/categories/{category_id}", json={"name": "Frontend"}, headers=auth_headers(reader))
    assert renamed.json()["slug"] == "frontend"
    assert renamed.json()["description"] == "All things web"

    client.post("/categories", json={"name": "Backend"}, headers=auth_headers(reader))
    assert [c["name"] for c in client.get("/categories").json()] == ["Backend", "Frontend"]

    nulled = client.put(f"/categories/{category_id}", json={"name": None}, headers=auth_headers(reader))
    assert nulled.status_code == 422

    assert client.delete(f"/categories/{category_id}", headers=auth_headers(reader)).status_code == 200
    assert client.get(f"/categories/{category_id}").status_code == 404


def test_tags(client, reader, author):
    assert client.post("/tags", json={"name": "Python"}, headers=auth_headers(reader)).status_code == 403

    created = client.post("/tags", json={"name": "Machine Learning!"}, headers=auth_headers(author))
    assert created.status_code == 201
    assert created.json()["slug"] == "machine-learning"

    too_long = client.post("/tags", json={"name": "x" * 51}, headers=auth_headers(author))
    assert too_long.status_code == 422

    tag_id = created.json()["id"]
    assert client.put(f"/tags/{tag_id}", json={"name": None}, headers=auth_headers(author)).status_code == 422
    assert client.put(f"/tags/{tag_id}", json={"name": "AI"}, headers=auth_headers(author)).json()["slug"] == "ai"
    assert client.delete(f"/tags/{tag_id}", headers=auth_headers(author)).status_code == 200
    assert client.get(f"/tags/{tag_id}").status_code == 404


# ----- analytics -----

def test_dashboard_is_admin_only(client, admin, author):
    client.post("/posts", json={"title": "Counted", "content": "Body"}, headers=auth_headers(author))

    assert client.get("/analytics/dashboard", headers=auth_headers(author)).status_code == 403

    stats = client.get("/analytics/dashboard", headers=auth_headers(admin))
    assert stats.status_code == 200
    body = stats.json()
    assert body["total_posts"] == 1
    assert body["total_users"] == 2
    assert len(body["monthly_stats"]) == 6
    assert body["monthly_stats"][-1]["count"] == 1


def test_signed_in_commenter_is_recorded(client, author, reader):
    post = client.post("/posts", json={"title": "Signed", "content": "Body"}, headers=auth_headers(author)).json()

    anonymous = client.post("/comments", json={"post_id": post["id"], "content": "a", "author_name": "Anon"})
    signed = client.post(
        "/comments",
        json={"post_id": post["id"], "content": "b", "author_name": "Reader"},
        headers=auth_headers(reader),
    )

    assert anonymous.json()["author_id"] is None
    assert signed.json()["author_id"] == reader.id
