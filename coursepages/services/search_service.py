from sqlalchemy.orm import Session
from sqlalchemy import or_, cast, String
from coursepages.models.course import Course
from coursepages.models.page import Page
from typing import List, Optional

SNIPPET_LENGTH = 100


class SearchResult:
    def __init__(self, course: str, page_id: str, title: str, snippet: str):
        self.course = course
        self.page_id = page_id
        self.title = title
        self.snippet = snippet


def _snippet(page: Page, query: str) -> str:
    # extrait du body autour du premier match, sinon la description
    body = page.body or ""
    index = body.lower().find(query.lower())
    if index == -1:
        return page.description or ""

    start = max(0, index - 40)
    preview = body[start:start + SNIPPET_LENGTH]
    if start > 0:
        preview = "..." + preview
    if start + SNIPPET_LENGTH < len(body):
        preview = preview + "..."
    return preview


def full_text_search(db: Session, query: str, course_slug: Optional[str] = None) -> List[SearchResult]:
    # Cherche dans titre, description, body et tags des pages non archivées
    # % et _ tapés par l'utilisateur sont des caractères, pas des jokers
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    search_pattern = f"%{escaped}%"

    q = db.query(Page, Course.slug).join(Course, Course.id == Page.course_id).filter(
        Page.is_archived == False,
        or_(
            Page.title.ilike(search_pattern, escape="\\"),
            Page.description.ilike(search_pattern, escape="\\"),
            Page.body.ilike(search_pattern, escape="\\"),
            cast(Page.tags, String).ilike(search_pattern, escape="\\")
        )
    )
    if course_slug:
        q = q.filter(Course.slug == course_slug)

    return [
        SearchResult(course=slug, page_id=page.page_id, title=page.title, snippet=_snippet(page, query))
        for page, slug in q.order_by(Course.slug, Page.id).all()
    ]
