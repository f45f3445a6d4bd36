from pydantic import BaseModel
from typing import Optional

class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    error_code: Optional[str] = None

class FeedOut(BaseModel):
    topic: str
    version: int
    changed: bool
