from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class ContactCreate(BaseModel):
    name: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    relationship: str = "friend"  # family | friend | therapist | emergency
    is_frequent: bool = False

class ContactUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone_number: Optional[str] = Field(default=None, min_length=1)
    relationship: Optional[str] = None
    is_frequent: Optional[bool] = None

class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone_number: str
    relationship: str
    is_frequent: bool
    last_contacted_at: Optional[int] = None
    added_at: int
