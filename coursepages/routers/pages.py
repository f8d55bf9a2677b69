from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from coursepages.core.database import get_db
from coursepages.core.deps import get_current_author, read_markdown_document
from coursepages.models.author import Author
from coursepages.models.page import Page
from coursepages.routers.courses import get_course_or_404, get_owned_course_or_404
from coursepages.schemas.page import PAGE_ID_PATTERN, PageCreate, PageUpdate, PageResponse, PageSummary
from coursepages.services import page_service
from coursepages.services.catalog_service import BrokenLinkError, get_course_pages, get_page, resolve_next_page
from coursepages.services.frontmatter_service import FrontMatterError, parse_page, render_page, slugify
from typing import List, Optional
import logging
import re

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses/{slug}/pages", tags=["pages"])


def get_page_or_404(course_id: int, page_id: str, db: Session) -> Page:
    page = get_page(db, course_id, page_id)
    if not page:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return page


# Crée une page (JSON)
@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def create_page(slug: str, page_data: PageCreate, db: Session = Depends(get_db), current_author: Author = Depends(get_current_author)):
    course = get_owned_course_or_404(slug, db, current_author)
    try:
        return page_service.create_page(db, course, current_author, page_data.page_id, page_data, page_data.body)
    except page_service.PageExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# Importe un document markdown avec front matter (body brut, pas du JSON)
@router.post("/import", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def import_page(slug: str, page_id: Optional[str] = None, overwrite: bool = False,
                db: Session = Depends(get_db), current_author: Author = Depends(get_current_author),
                raw: bytes = Depends(read_markdown_document)):
    course = get_owned_course_or_404(slug, db, current_author)

    try:
        metadata, body = parse_page(raw.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="Document is not valid UTF-8")
    except FrontMatterError as e:
        logger.info("Rejected import into %s: %s", slug, e)
        raise HTTPException(status_code=422, detail=str(e))

    # sans page_id explicite on le dérive du titre
    page_id = page_id or slugify(metadata.title)
    if not re.match(PAGE_ID_PATTERN, page_id):
        raise HTTPException(status_code=422, detail="Invalid page id")

    try:
        return page_service.create_page(db, course, current_author, page_id, metadata, body, overwrite=overwrite)
    except page_service.PageExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("", response_model=List[PageSummary])
def list_pages(slug: str, db: Session = Depends(get_db)):
    course = get_course_or_404(slug, db)
    return get_course_pages(db, course.id)

@router.get("/{page_id}", response_model=PageResponse)
def read_page(slug: str, page_id: str, db: Session = Depends(get_db)):
    course = get_course_or_404(slug, db)
    return get_page_or_404(course.id, page_id, db)

# Le document tel qu'un générateur de site le lit
@router.get("/{page_id}/source")
def read_page_source(slug: str, page_id: str, db: Session = Depends(get_db)):
    course = get_course_or_404(slug, db)
    page = get_page_or_404(course.id, page_id, db)
    content = render_page(page_service.page_metadata(page), page.body or "")
    return Response(content=content, media_type="text/markdown")

@router.get("/{page_id}/next", response_model=PageSummary)
def read_next_page(slug: str, page_id: str, db: Session = Depends(get_db)):
    course = get_course_or_404(slug, db)
    page = get_page_or_404(course.id, page_id, db)
    try:
        next_page = resolve_next_page(db, page)
    except BrokenLinkError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if next_page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page has no next page")
    return next_page

@router.put("/{page_id}", response_model=PageResponse)
def update_page(slug: str, page_id: str, page_data: PageUpdate, db: Session = Depends(get_db), current_author: Author = Depends(get_current_author)):
    # édition directe de la page
    course = get_owned_course_or_404(slug, db, current_author)
    page = get_page_or_404(course.id, page_id, db)
    return page_service.update_page(db, page, page_data)

@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page(slug: str, page_id: str, db: Session = Depends(get_db), current_author: Author = Depends(get_current_author)):
    course = get_owned_course_or_404(slug, db, current_author)
    page = get_page_or_404(course.id, page_id, db)

    page.is_archived = True
    db.commit()
