# IMPORTS
import logging
from sqlalchemy.orm import Session
from coursepages.models.author import Author
from coursepages.models.course import Course
from coursepages.models.page import Page
from coursepages.schemas.page import PageMetadata, PageUpdate

logger = logging.getLogger(__name__)


class PageExistsError(ValueError):
    """Une page active avec le même page_id existe déjà dans le cours"""


# func 1: page_metadata()
def page_metadata(page: Page) -> PageMetadata:
    # pas de re-validation: ce qui est en base est servi tel quel
    return PageMetadata.model_construct(
        title=page.title,
        author=page.author,
        tags=list(page.tags or []),
        section=page.section,
        description=page.description,
        next_page_id=page.next_page_id
    )


# func 2: create_page()
def create_page(db: Session, course: Course, owner: Author, page_id: str, metadata: PageMetadata,
                body: str, overwrite: bool = False) -> Page:
    """
    Crée une page dans le cours.

    Le couple (course, page_id) est unique en base: une page archivée avec le
    même identifiant est réutilisée, une page active lève PageExistsError
    sauf si overwrite=True.
    """
    page = db.query(Page).filter(Page.course_id == course.id, Page.page_id == page_id).first()

    if page is not None and not page.is_archived and not overwrite:
        raise PageExistsError(f"Page '{page_id}' already exists in course '{course.slug}'")

    if page is None:
        page = Page(course_id=course.id, page_id=page_id)
        db.add(page)

    page.owner_id = owner.id
    page.title = metadata.title
    page.author = metadata.author
    page.tags = list(metadata.tags)
    page.section = metadata.section
    page.description = metadata.description
    page.next_page_id = metadata.next_page_id
    page.body = body
    page.is_archived = False

    db.commit()
    db.refresh(page)
    logger.info("Saved page %s/%s", course.slug, page_id)
    return page


# func 3: update_page()
def update_page(db: Session, page: Page, page_data: PageUpdate) -> Page:
    # seuls les champs envoyés sont modifiés; next_page_id=null retire le lien
    fields = page_data.model_fields_set

    if page_data.title is not None:
        page.title = page_data.title
    if page_data.author is not None:
        page.author = page_data.author
    if page_data.tags is not None:
        page.tags = list(page_data.tags)
    if page_data.body is not None:
        page.body = page_data.body
    if "section" in fields:
        page.section = page_data.section
    if "description" in fields:
        page.description = page_data.description
    if "next_page_id" in fields:
        page.next_page_id = page_data.next_page_id

    db.commit()
    db.refresh(page)
    return page
