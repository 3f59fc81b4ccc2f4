from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class TagFormData(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)

class Tag(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    usage_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
