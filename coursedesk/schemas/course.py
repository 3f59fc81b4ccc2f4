from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

from coursedesk.schemas.module import Module, ModuleFormData

class CourseFormData(BaseModel):
    """One course-form submission: scalar fields plus the full module/lesson/tag tree."""
    title: Optional[str] = None
    description: Optional[str] = None
    price: float = Field(ge=0)
    instructor_id: str
    tag_ids: List[str] = Field(default_factory=list)
    modules: List[ModuleFormData] = Field(default_factory=list)
    version: Optional[int] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

class CourseRequest(BaseModel):
    data: CourseFormData

class InstructorSummary(BaseModel):
    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)

class TagSummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class Course(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    price: float
    instructor_id: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    instructor: Optional[InstructorSummary] = None
    modules: List[Module] = Field(default_factory=list)
    tags: List[TagSummary] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
