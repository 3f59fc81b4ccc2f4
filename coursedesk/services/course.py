from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from coursedesk.core.exceptions import NotFoundError
from coursedesk.core.cache_config import CACHE_KEYS
from coursedesk.crud.course import course as crud_course
from coursedesk.schemas.course import Course as CourseSchema, CourseFormData
from coursedesk.services.cache_service import CacheService
from coursedesk.services.course_writer import CourseAggregateWriter, course_writer
from coursedesk.services.store_errors import translate_store_errors

logger = logging.getLogger(__name__)


class CourseService:

    def __init__(self, cache_service: CacheService, writer: Optional[CourseAggregateWriter] = None):
        self.cache_service = cache_service
        self.writer = writer or course_writer

    def get_all_courses(
        self, db: Session, skip: int = 0, limit: Optional[int] = None, use_cache: bool = True
    ) -> List[CourseSchema]:
        def load():
            with translate_store_errors(db, "fetch courses"):
                return [CourseSchema.model_validate(c) for c in crud_course.get_multi(db, skip=skip, limit=limit)]

        # an unpaginated read keeps the plain "courses_all" key
        params = {"skip": skip, "limit": limit} if skip or limit is not None else None
        return self.cache_service.read_through(CACHE_KEYS["course_list"], load, params=params, use_cache=use_cache)

    def get_course(self, db: Session, course_id: str, use_cache: bool = True) -> CourseSchema:
        def load():
            with translate_store_errors(db, "fetch course"):
                course = crud_course.get(db, id=course_id)
                return CourseSchema.model_validate(course) if course else None

        course = self.cache_service.read_through(
            CACHE_KEYS["course_details"], load, params={"id": course_id}, use_cache=use_cache
        )
        if course is None:
            raise NotFoundError("Course not found.", details={"course_id": course_id})
        return course

    def get_courses_by_instructor(self, db: Session, instructor_id: str, use_cache: bool = True) -> List[CourseSchema]:
        def load():
            with translate_store_errors(db, "fetch courses by instructor"):
                return [CourseSchema.model_validate(c) for c in crud_course.get_by_instructor(db, instructor_id)]

        return self.cache_service.read_through(
            CACHE_KEYS["courses_by_instructor"], load, params={"instructorId": instructor_id}, use_cache=use_cache
        )

    def create_course(self, db: Session, course_in: CourseFormData) -> CourseSchema:
        with translate_store_errors(db, "create course"):
            course_id = self.writer.create(db, course_in)
            course = crud_course.get(db, id=course_id)

        self.cache_service.invalidate_for("course_write")
        return CourseSchema.model_validate(course)

    def update_course(self, db: Session, course_id: str, course_in: CourseFormData) -> CourseSchema:
        with translate_store_errors(db, "update course"):
            self.writer.replace(db, course_id, course_in)
            course = crud_course.get(db, id=course_id)

        self.cache_service.invalidate_for("course_write")
        return CourseSchema.model_validate(course)

    def delete_course(self, db: Session, course_id: str) -> None:
        with translate_store_errors(db, "delete course"):
            deleted = crud_course.delete(db, id=course_id)
        if deleted is None:
            raise NotFoundError("Course not found.", details={"course_id": course_id})

        self.cache_service.invalidate_for("course_write")
        logger.info(f"Deleted course {course_id}")
