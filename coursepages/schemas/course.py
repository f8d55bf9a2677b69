from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

from coursepages.schemas.page import PAGE_ID_PATTERN

# Schemas pour les cours (catalogue)

class CourseCreate(BaseModel):
    slug: str = Field(pattern=PAGE_ID_PATTERN)
    title: str = Field(min_length=1)
    description: Optional[str] = None

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None

class CourseResponse(BaseModel):
    id: int
    owner_id: int
    slug: str
    title: str
    description: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
