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
    """Error response schema"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

def reject_null(value: Any) -> Any:
    """Optional on update means 'may be omitted', not 'may be cleared'"""
    if value is None:
        raise ValueError("Field cannot be null")
    return value
