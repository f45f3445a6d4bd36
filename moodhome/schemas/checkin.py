from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

class CheckinCreate(BaseModel):
    emotions: list[str] = Field(min_length=1)
    note: Optional[str] = None

    @field_validator("emotions")
    @classmethod
    def _at_least_one_label(cls, v: list[str]):
        if not any(e.strip() for e in v):
            raise ValueError("at least one non-blank emotion is required")
        return v

class CheckinUpdate(CheckinCreate):
    pass

class CheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    emotions: list[str]
    note: Optional[str] = None
    timestamp: str
    created_at: int

class CheckinList(BaseModel):
    checkins: list[CheckinOut]
    total: int
