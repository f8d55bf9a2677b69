# IMPORTS
import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from coursepages.models.course import Course
from coursepages.models.page import Page
from coursepages.schemas.validation import ValidationIssue, ValidationReport
from coursepages.services.frontmatter_service import count_fences, has_balanced_fences

logger = logging.getLogger(__name__)


class BrokenLinkError(LookupError):
    """next_page_id qui ne pointe vers aucune page du cours"""

    def __init__(self, page_id: str, next_page_id: str):
        self.page_id = page_id
        self.next_page_id = next_page_id
        super().__init__(f"Page '{page_id}' points to unknown page '{next_page_id}'")


# func 1: lookups de base (les pages archivées n'existent plus pour le catalogue)
def get_course(db: Session, slug: str) -> Optional[Course]:
    return db.query(Course).filter(Course.slug == slug).first()


def get_course_pages(db: Session, course_id: int) -> List[Page]:
    return db.query(Page).filter(
        Page.course_id == course_id,
        Page.is_archived == False
    ).order_by(Page.id).all()


def get_page(db: Session, course_id: int, page_id: str) -> Optional[Page]:
    return db.query(Page).filter(
        Page.course_id == course_id,
        Page.page_id == page_id,
        Page.is_archived == False
    ).first()


# func 2: resolve_next_page()
def resolve_next_page(db: Session, page: Page) -> Optional[Page]:
    """Page suivante dans le cours, None si c'est la dernière"""
    if not page.next_page_id:
        return None

    next_page = get_page(db, page.course_id, page.next_page_id)
    if next_page is None:
        logger.warning("Broken next_page_id in course %s: %s -> %s", page.course_id, page.page_id, page.next_page_id)
        raise BrokenLinkError(page.page_id, page.next_page_id)
    return next_page


# func 3: find_head_pages()
def find_head_pages(pages: List[Page]) -> List[Page]:
    # une tête = page qu'aucune autre page ne désigne comme suivante
    targets = {p.next_page_id for p in pages if p.next_page_id}
    return [p for p in pages if p.page_id not in targets]


# func 4: course_sequence()
def course_sequence(db: Session, course: Course) -> List[Page]:
    """
    Ordre de lecture du cours: on part de chaque tête et on suit next_page_id.
    On s'arrête sur un lien cassé ou quand une page revient (cycle).
    Les pages isolées dans un cycle sans tête ne sont pas incluses.
    """
    pages = get_course_pages(db, course.id)
    if not pages:
        return []

    by_id = {p.page_id: p for p in pages}
    starts = find_head_pages(pages) or [pages[0]]

    seen = set()
    sequence = []
    for start in starts:
        current = start
        while current is not None and current.page_id not in seen:
            seen.add(current.page_id)
            sequence.append(current)
            current = by_id.get(current.next_page_id) if current.next_page_id else None

    return sequence


def _find_cycles(by_id: Dict[str, Page]) -> List[List[str]]:
    # chaque page a au plus un successeur: on marche depuis chaque page
    cycles = []
    done = set()
    for start in by_id:
        path = []
        position = {}
        current = start
        while current in by_id and current not in done and current not in position:
            position[current] = len(path)
            path.append(current)
            current = by_id[current].next_page_id

        if current in position:
            cycle = path[position[current]:]
            if len(cycle) > 1:  # les auto-liens sont signalés à part
                cycles.append(cycle)
        done.update(path)
    return cycles


# func 5: validate_course()
def validate_course(db: Session, course: Course) -> ValidationReport:
    pages = get_course_pages(db, course.id)
    by_id = {p.page_id: p for p in pages}
    issues = []

    predecessors = defaultdict(list)
    for page in pages:
        if not (page.title or "").strip():
            issues.append(ValidationIssue(page_id=page.page_id, code="missing_title", message="Title is empty"))
        if not (page.author or "").strip():
            issues.append(ValidationIssue(page_id=page.page_id, code="missing_author", message="Author is empty"))

        if page.next_page_id:
            if page.next_page_id == page.page_id:
                issues.append(ValidationIssue(
                    page_id=page.page_id, code="self_link",
                    message="Page names itself as next page"
                ))
            elif page.next_page_id not in by_id:
                issues.append(ValidationIssue(
                    page_id=page.page_id, code="broken_next_link",
                    message=f"next_page_id '{page.next_page_id}' does not exist in course '{course.slug}'"
                ))
            else:
                predecessors[page.next_page_id].append(page.page_id)

        if not has_balanced_fences(page.body or ""):
            issues.append(ValidationIssue(
                page_id=page.page_id, code="unclosed_fence",
                message=f"Body has an unclosed code fence ({count_fences(page.body or '')} delimiters)"
            ))

    for target, sources in predecessors.items():
        if len(sources) > 1:
            issues.append(ValidationIssue(
                page_id=target, code="multiple_predecessors",
                message=f"Page is the next page of several pages: {', '.join(sources)}"
            ))

    for cycle in _find_cycles(by_id):
        issues.append(ValidationIssue(
            page_id=cycle[0], code="cycle",
            message="Pages form a cycle: " + " -> ".join(cycle + [cycle[0]])
        ))

    if pages:
        heads = find_head_pages(pages)
        if not heads:
            issues.append(ValidationIssue(code="no_head", message="No page starts the course"))
        elif len(heads) > 1:
            issues.append(ValidationIssue(
                code="multiple_heads",
                message=f"Several pages start the course: {', '.join(p.page_id for p in heads)}"
            ))

    if issues:
        logger.info("Course %s has %d validation issue(s)", course.slug, len(issues))

    return ValidationReport(
        course=course.slug,
        page_count=len(pages),
        valid=not issues,
        issues=issues
    )
