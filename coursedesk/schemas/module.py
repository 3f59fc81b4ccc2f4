from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List

from coursedesk.schemas.lesson import Lesson, LessonFormData

class ModuleFormData(BaseModel):
    title: str = Field(min_length=1)
    order: int = Field(default=0)
    lessons: List[LessonFormData] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

class Module(BaseModel):
    id: str
    title: str
    order: int
    course_id: str
    lessons: List[Lesson] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
