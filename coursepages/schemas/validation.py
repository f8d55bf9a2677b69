from pydantic import BaseModel
from typing import List, Optional


class ValidationIssue(BaseModel):
    """Un problème trouvé dans un cours"""
    page_id: Optional[str] = None  # None = problème au niveau du cours
    code: str  # "missing_title", "broken_next_link", "unclosed_fence", "cycle", ...
    message: str


class ValidationReport(BaseModel):
    course: str
    page_count: int
    valid: bool
    issues: List[ValidationIssue] = []


class SearchResultResponse(BaseModel):
    course: str
    page_id: str
    title: str
    snippet: str
