from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

class LessonFormData(BaseModel):
    title: str = Field(min_length=1)
    content: Optional[str] = None
    video_url: Optional[str] = None
    order: int = Field(default=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

class Lesson(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    video_url: Optional[str] = None
    order: int
    module_id: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
