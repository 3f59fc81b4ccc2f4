from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from coursedesk.core.exceptions import NotFoundError
from coursedesk.schemas.response import APIResponse, DeletedEntity
from coursedesk.schemas.course import Course, CourseRequest
from coursedesk.utils import deps
from coursedesk.utils.service_registry import ServiceRegistry
from coursedesk.utils.validation import require_fields

router = APIRouter()


@router.get("", response_model=APIResponse[List[Course]])
def get_all_courses(
    fresh: bool = False,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    courses = services.course.get_all_courses(db, skip=skip, limit=limit, use_cache=not fresh)
    if not courses:
        raise NotFoundError("No courses found.")
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.get("/{course_id}", response_model=APIResponse[Course])
def read_course(
    course_id: str,
    fresh: bool = False,
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    course = services.course.get_course(db, course_id=course_id, use_cache=not fresh)
    return APIResponse(message="Course retrieved successfully", data=course)


@router.post("", response_model=APIResponse[Course])
def create_course(
    *,
    course_in: CourseRequest,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    require_fields(course_in.data, "title", "description")
    new_course = services.course.create_course(db, course_in=course_in.data)
    return APIResponse(message="Course created successfully", data=new_course)


@router.patch("/{course_id}", response_model=APIResponse[Course])
def update_course(
    *,
    course_id: str,
    course_in: CourseRequest,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    require_fields(course_in.data, "title", "description")
    updated_course = services.course.update_course(db, course_id=course_id, course_in=course_in.data)
    return APIResponse(message="Course updated successfully", data=updated_course)


@router.delete("/{course_id}", response_model=APIResponse[DeletedEntity])
def delete_course(
    *,
    course_id: str,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    services.course.delete_course(db, course_id=course_id)
    return APIResponse(message="Course deleted successfully", data=DeletedEntity(id=course_id))
