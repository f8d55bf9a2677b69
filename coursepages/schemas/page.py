from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import Any, List, Optional

# identifiant de page / de cours: minuscules, chiffres et tirets
PAGE_ID_PATTERN = r"^[a-z0-9][a-z0-9-]*$"

# ordre des clés dans le front matter
FRONT_MATTER_KEYS = ("title", "author", "tags", "section", "description", "next_page_id")


def normalize_tags(value: Any) -> List[str]:
    """Accepte une liste YAML ou "a, b, c"; retire les vides et les doublons (ordre conservé)"""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set)):
        raise ValueError("tags must be a list or a comma-separated string")

    tags = []
    for tag in value:
        if tag is None:
            continue
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _not_blank(value: str) -> str:
    # title / author: jamais vides ni blancs
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def _scalar_to_str(value: Any) -> Any:
    # YAML peut renvoyer des int / dates pour un titre comme "2024"
    if isinstance(value, (int, float, date)) and not isinstance(value, bool):
        return str(value)
    return value


# Schemas pour les pages

class PageMetadata(BaseModel):
    """Front matter d'une page"""
    title: str
    author: str
    tags: List[str] = []
    section: Optional[str] = None
    description: Optional[str] = None
    next_page_id: Optional[str] = Field(default=None, pattern=PAGE_ID_PATTERN)

    @field_validator("title", "author", "section", "description", "next_page_id", mode="before")
    @classmethod
    def coerce_scalars(cls, value):
        return _scalar_to_str(value)

    @field_validator("title", "author")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, value):
        return normalize_tags(value)


class PageCreate(PageMetadata):
    page_id: str = Field(pattern=PAGE_ID_PATTERN)
    body: str = ""


class PageUpdate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    tags: Optional[List[str]] = None
    section: Optional[str] = None
    description: Optional[str] = None
    next_page_id: Optional[str] = Field(default=None, pattern=PAGE_ID_PATTERN)
    body: Optional[str] = None

    @field_validator("title", "author")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _not_blank(value)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, value):
        if value is None:
            return None
        return normalize_tags(value)


class PageResponse(BaseModel):
    id: int
    course_id: int
    owner_id: int
    page_id: str
    title: str
    author: str
    tags: List[str]
    section: Optional[str]
    description: Optional[str]
    next_page_id: Optional[str]
    body: str
    is_archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PageSummary(BaseModel):
    """Page sans le body, pour les listes"""
    page_id: str
    title: str
    author: str
    tags: List[str]
    section: Optional[str]
    description: Optional[str]
    next_page_id: Optional[str]

    model_config = ConfigDict(from_attributes=True)
