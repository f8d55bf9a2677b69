from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from coursepages.core.database import get_db
from coursepages.core.deps import get_current_author
from coursepages.models.author import Author
from coursepages.models.course import Course
from coursepages.models.page import Page
from coursepages.schemas.course import CourseCreate, CourseUpdate, CourseResponse
from coursepages.schemas.page import PageSummary
from coursepages.schemas.validation import ValidationReport
from coursepages.services.catalog_service import get_course, get_course_pages, course_sequence, validate_course
from typing import List

router = APIRouter(prefix="/courses", tags=["courses"])


def get_course_or_404(slug: str, db: Session) -> Course:
    course = get_course(db, slug)
    if not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


def get_owned_course_or_404(slug: str, db: Session, author: Author) -> Course:
    # un cours d'un autre auteur est traité comme inexistant
    course = get_course(db, slug)
    if not course or course.owner_id != author.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


# Crée un cours
@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(course_data: CourseCreate, db: Session = Depends(get_db), current_author: Author = Depends(get_current_author)):
    if get_course(db, course_data.slug):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Course already exists")

    new_course = Course(
        owner_id=current_author.id,
        slug=course_data.slug,
        title=course_data.title,
        description=course_data.description
    )
    db.add(new_course)
    db.commit()
    db.refresh(new_course)
    return new_course

@router.get("", response_model=List[CourseResponse])
def list_courses(db: Session = Depends(get_db)):
    return db.query(Course).order_by(Course.slug).all()

@router.get("/{slug}", response_model=CourseResponse)
def read_course(slug: str, db: Session = Depends(get_db)):
    return get_course_or_404(slug, db)

@router.put("/{slug}", response_model=CourseResponse)
def update_course(slug: str, course_data: CourseUpdate, db: Session = Depends(get_db), current_author: Author = Depends(get_current_author)):
    course = get_owned_course_or_404(slug, db, current_author)

    if course_data.title is not None:
        course.title = course_data.title
    if course_data.description is not None:
        course.description = course_data.description

    db.commit()
    db.refresh(course)
    return course

@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(slug: str, db: Session = Depends(get_db), current_author: Author = Depends(get_current_author)):
    """Supprime un cours vide (hard delete, les pages archivées partent avec)"""
    course = get_owned_course_or_404(slug, db, current_author)

    if get_course_pages(db, course.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Course still has pages")

    db.query(Page).filter(Page.course_id == course.id).delete()
    db.delete(course)
    db.commit()

# Ordre de lecture (liste chaînée par next_page_id)
@router.get("/{slug}/sequence", response_model=List[PageSummary])
def read_sequence(slug: str, db: Session = Depends(get_db)):
    course = get_course_or_404(slug, db)
    return course_sequence(db, course)

@router.get("/{slug}/validate", response_model=ValidationReport)
def validate(slug: str, db: Session = Depends(get_db)):
    course = get_course_or_404(slug, db)
    return validate_course(db, course)
