"""Page model"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON, UniqueConstraint
from datetime import datetime
from coursepages.core.database import Base


class Page(Base):
    __tablename__ = "pages"
    __table_args__ = (UniqueConstraint("course_id", "page_id", name="uq_pages_course_page_id"),)

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)

    # identifiant texte de la page dans son cours (ex: "my-first-liveview-project")
    page_id = Column(String, nullable=False, index=True)

    # front matter
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    tags = Column(JSON, default=list)
    section = Column(String, nullable=True)
    description = Column(String, nullable=True)
    next_page_id = Column(String, nullable=True)

    body = Column(Text, nullable=False, default="")

    is_archived = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
