"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel

class StandardResponse(BaseModel):
    """Standard API response"""
    success: bool
    message: str
    data: Optional[Any] = None

class ErrorResponse(BaseModel):
    """Error response; error_code is one of the AppError codes"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

class Pagination(BaseModel):
    """Page window over a guest list"""
    page: int = 1
    per_page: int = 50
    total: int = 0
    pages: int = 0

    @classmethod
    def of(cls, page: int, per_page: int, total: int) -> "Pagination":
        return cls(page=page, per_page=per_page, total=total, pages=(total + per_page - 1) // per_page)
