def add_page(client, headers, page_id, next_page_id=None, body="Some text\n", slug="phoenix"):
    """Crée une page via l'API et retourne le JSON"""
    response = client.post(
        f"/courses/{slug}/pages",
        headers=headers,
        json={
            "page_id": page_id,
            "title": page_id.replace("-", " ").title(),
            "author": "Jane Doe",
            "next_page_id": next_page_id,
            "body": body
        }
    )
    assert response.status_code == 201, response.json()
    return response.json()


# ========== TEST CREATE COURSE ==========
def test_create_course(client, auth_headers, author):
    response = client.post(
        "/courses",
        headers=auth_headers,
        json={"slug": "phoenix", "title": "Phoenix course"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "phoenix"
    assert data["owner_id"] == author.id
    assert data["description"] is None

def test_create_course_missing_token(client):
    response = client.post("/courses", json={"slug": "phoenix", "title": "Phoenix"})
    assert response.status_code == 401

def test_create_course_duplicate_slug(client, auth_headers, course):
    response = client.post("/courses", headers=auth_headers, json={"slug": "phoenix", "title": "Again"})
    assert response.status_code == 400

def test_create_course_invalid_slug(client, auth_headers):
    response = client.post("/courses", headers=auth_headers, json={"slug": "Not a slug", "title": "X"})
    assert response.status_code == 422


# ========== TEST READ ==========
def test_list_and_get_courses_are_public(client, course):
    response = client.get("/courses")
    assert response.status_code == 200
    assert [c["slug"] for c in response.json()] == ["phoenix"]

    response = client.get("/courses/phoenix")
    assert response.status_code == 200
    assert response.json()["title"] == "Phoenix course"

def test_get_course_not_found(client):
    assert client.get("/courses/ghost").status_code == 404


# ========== TEST UPDATE / DELETE ==========
def test_update_course(client, auth_headers, course):
    response = client.put("/courses/phoenix", headers=auth_headers, json={"title": "Phoenix LiveView"})
    assert response.status_code == 200
    assert response.json()["title"] == "Phoenix LiveView"
    assert response.json()["description"] == "Web dev with Phoenix"

def test_update_course_other_author(client, course, other_headers):
    response = client.put("/courses/phoenix", headers=other_headers, json={"title": "Hijacked"})
    assert response.status_code == 404

def test_delete_empty_course(client, auth_headers, course):
    response = client.delete("/courses/phoenix", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/courses/phoenix").status_code == 404

def test_delete_course_with_pages(client, auth_headers, course):
    add_page(client, auth_headers, "intro")
    response = client.delete("/courses/phoenix", headers=auth_headers)
    assert response.status_code == 400

def test_delete_course_after_archiving_pages(client, auth_headers, course):
    add_page(client, auth_headers, "intro")
    client.delete("/courses/phoenix/pages/intro", headers=auth_headers)

    response = client.delete("/courses/phoenix", headers=auth_headers)
    assert response.status_code == 204


# ========== TEST SEQUENCE / VALIDATE ==========
def test_sequence(client, auth_headers, course):
    add_page(client, auth_headers, "my-first-liveview-project")
    add_page(client, auth_headers, "forms-and-validation", next_page_id="my-first-liveview-project")
    add_page(client, auth_headers, "intro", next_page_id="forms-and-validation")

    response = client.get("/courses/phoenix/sequence")
    assert response.status_code == 200
    assert [p["page_id"] for p in response.json()] == [
        "intro", "forms-and-validation", "my-first-liveview-project"
    ]

def test_validate_ok(client, auth_headers, course):
    add_page(client, auth_headers, "forms-and-validation", next_page_id="my-first-liveview-project",
             body="```elixir\ndef changeset(post, attrs), do: post\n```\n")
    add_page(client, auth_headers, "my-first-liveview-project")

    response = client.get("/courses/phoenix/validate")
    assert response.status_code == 200
    data = response.json()
    assert data == {"course": "phoenix", "page_count": 2, "valid": True, "issues": []}

def test_validate_reports_issues(client, auth_headers, course):
    add_page(client, auth_headers, "intro", next_page_id="ghost", body="```\nunclosed\n")

    data = client.get("/courses/phoenix/validate").json()
    assert data["valid"] is False
    assert sorted(i["code"] for i in data["issues"]) == ["broken_next_link", "unclosed_fence"]

def test_validate_unknown_course(client):
    assert client.get("/courses/ghost/validate").status_code == 404
