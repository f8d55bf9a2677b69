from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from coursepages.core.database import get_db
from coursepages.schemas.validation import SearchResultResponse
from coursepages.services.search_service import full_text_search
from typing import List, Optional

router = APIRouter(prefix="/search", tags=["search"])

@router.get("", response_model=List[SearchResultResponse])
#recherche dans les pages (titre, description, body, tags)
def search_pages(q: str = Query(min_length=1), course: Optional[str] = None, db: Session = Depends(get_db)):
    results = full_text_search(db, q, course_slug=course)

    return [
        {
            "course": r.course,
            "page_id": r.page_id,
            "title": r.title,
            "snippet": r.snippet
        }
        for r in results
    ]
