from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional
from datetime import datetime

class InstructorFormData(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)

class Instructor(BaseModel):
    id: str
    name: str
    email: str
    bio: Optional[str] = None
    course_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
