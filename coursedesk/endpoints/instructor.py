from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursedesk.schemas.response import APIResponse, DeletedEntity
from coursedesk.schemas.course import Course
from coursedesk.schemas.instructor import Instructor, InstructorFormData
from coursedesk.utils import deps
from coursedesk.utils.service_registry import ServiceRegistry
from coursedesk.utils.validation import require_fields

router = APIRouter()


@router.get("", response_model=APIResponse[List[Instructor]])
def get_all_instructors(
    fresh: bool = False,
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    instructors = services.instructor.get_all_instructors(db, use_cache=not fresh)
    return APIResponse(message="Instructors retrieved successfully", data=instructors)


@router.get("/{instructor_id}", response_model=APIResponse[Instructor])
def read_instructor(
    instructor_id: str,
    fresh: bool = False,
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    instructor = services.instructor.get_instructor(db, instructor_id=instructor_id, use_cache=not fresh)
    return APIResponse(message="Instructor retrieved successfully", data=instructor)


@router.get("/{instructor_id}/courses", response_model=APIResponse[List[Course]])
def get_instructor_courses(
    instructor_id: str,
    fresh: bool = False,
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    courses = services.course.get_courses_by_instructor(db, instructor_id=instructor_id, use_cache=not fresh)
    return APIResponse(message="Instructor courses retrieved successfully", data=courses)


@router.post("", response_model=APIResponse[Instructor])
def create_instructor(
    *,
    instructor_in: InstructorFormData,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    require_fields(instructor_in, "name", "email")
    instructor = services.instructor.create_instructor(db, instructor_in=instructor_in)
    return APIResponse(message="Instructor added successfully", data=instructor)


@router.patch("/{instructor_id}", response_model=APIResponse[Instructor])
def update_instructor(
    *,
    instructor_id: str,
    instructor_in: InstructorFormData,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    require_fields(instructor_in, "name", "email")
    instructor = services.instructor.update_instructor(db, instructor_id=instructor_id, instructor_in=instructor_in)
    return APIResponse(message="Instructor updated successfully", data=instructor)


@router.delete("/{instructor_id}", response_model=APIResponse[DeletedEntity])
def delete_instructor(
    *,
    instructor_id: str,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    services.instructor.delete_instructor(db, instructor_id=instructor_id)
    return APIResponse(message="Instructor deleted successfully", data=DeletedEntity(id=instructor_id))
