"""Course model: le catalogue qui regroupe les pages"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from coursepages.core.database import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)

    slug = Column(String, unique=True, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
