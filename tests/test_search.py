from coursepages.models.course import Course
from coursepages.models.page import Page
from coursepages.services.search_service import full_text_search


def seed(db, author):
    phoenix = Course(owner_id=author.id, slug="phoenix", title="Phoenix")
    django = Course(owner_id=author.id, slug="django", title="Django")
    db.add_all([phoenix, django])
    db.commit()

    long_body = "Intro text. " * 20 + "Changesets cast and validate params." + " More text." * 20
    db.add_all([
        Page(course_id=phoenix.id, owner_id=author.id, page_id="forms", title="Forms and validation",
             author="Jane", tags=["ecto"], body=long_body),
        Page(course_id=phoenix.id, owner_id=author.id, page_id="liveview", title="LiveView",
             author="Jane", tags=["realtime"], description="Stateful views", body="mix phx.new"),
        Page(course_id=django.id, owner_id=author.id, page_id="forms", title="Django forms",
             author="Jane", tags=[], body="ModelForm validation"),
        Page(course_id=phoenix.id, owner_id=author.id, page_id="old", title="Old forms page",
             author="Jane", tags=[], body="", is_archived=True),
    ])
    db.commit()


# ============ TESTS search_service.py ============

def test_search_title_across_courses(db, author):
    seed(db, author)
    results = full_text_search(db, "forms")
    assert sorted((r.course, r.page_id) for r in results) == [("django", "forms"), ("phoenix", "forms")]

def test_search_body_snippet(db, author):
    seed(db, author)
    results = full_text_search(db, "changesets")

    assert len(results) == 1
    snippet = results[0].snippet
    assert "Changesets" in snippet
    assert snippet.startswith("...")
    assert snippet.endswith("...")

def test_search_tags_and_description(db, author):
    seed(db, author)
    assert [r.page_id for r in full_text_search(db, "realtime")] == ["liveview"]

    results = full_text_search(db, "stateful")
    assert results[0].snippet == "Stateful views"

def test_search_course_filter(db, author):
    seed(db, author)
    results = full_text_search(db, "validation", course_slug="django")
    assert [(r.course, r.page_id) for r in results] == [("django", "forms")]

def test_search_endpoint(client, db, author):
    seed(db, author)
    response = client.get("/search", params={"q": "liveview"})
    assert response.status_code == 200
    assert response.json() == [
        {"course": "phoenix", "page_id": "liveview", "title": "LiveView", "snippet": "Stateful views"}
    ]

def test_search_endpoint_requires_query(client):
    assert client.get("/search").status_code == 422

def test_search_non_ascii_tag(db, author):
    course = Course(owner_id=author.id, slug="cuisine", title="Cuisine")
    db.add(course)
    db.commit()
    db.add(Page(course_id=course.id, owner_id=author.id, page_id="cafe", title="Le petit déjeuner",
                author="Jane", tags=["café"], body="Croissants"))
    db.commit()

    results = full_text_search(db, "café")
    assert [r.page_id for r in results] == ["cafe"]

def test_search_wildcards_are_literal(db, author):
    seed(db, author)
    assert full_text_search(db, "%") == []
    assert full_text_search(db, "_") == []

def test_search_literal_percent_matches(db, author):
    seed(db, author)
    phoenix = db.query(Course).filter(Course.slug == "phoenix").first()
    db.add(Page(course_id=phoenix.id, owner_id=author.id, page_id="coverage", title="Coverage at 100%",
                author="Jane", tags=[], body="mix test --cover"))
    db.commit()

    assert [r.page_id for r in full_text_search(db, "100%")] == ["coverage"]

def test_search_endpoint_percent(client, db, author):
    seed(db, author)
    response = client.get("/search", params={"q": "%"})
    assert response.status_code == 200
    assert response.json() == []
