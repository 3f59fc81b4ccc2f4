from typing import List
import logging

from sqlalchemy.orm import Session

from coursedesk.core.exceptions import DuplicateValueError, NotFoundError
from coursedesk.core.cache_config import CACHE_KEYS
from coursedesk.crud.instructor import instructor as crud_instructor
from coursedesk.schemas.instructor import Instructor as InstructorSchema, InstructorFormData
from coursedesk.services.cache_service import CacheService
from coursedesk.services.store_errors import translate_store_errors

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An instructor with this email already exists"


class InstructorService:

    def __init__(self, cache_service: CacheService):
        self.cache_service = cache_service

    def get_all_instructors(self, db: Session, use_cache: bool = True) -> List[InstructorSchema]:
        def load():
            with translate_store_errors(db, "fetch instructors"):
                return [InstructorSchema.model_validate(i) for i in crud_instructor.get_multi(db)]

        return self.cache_service.read_through(CACHE_KEYS["instructor_list"], load, use_cache=use_cache)

    def get_instructor(self, db: Session, instructor_id: str, use_cache: bool = True) -> InstructorSchema:
        def load():
            with translate_store_errors(db, "fetch instructor"):
                instructor = crud_instructor.get(db, id=instructor_id)
                return InstructorSchema.model_validate(instructor) if instructor else None

        instructor = self.cache_service.read_through(
            CACHE_KEYS["instructor_details"], load, params={"id": instructor_id}, use_cache=use_cache
        )
        if instructor is None:
            raise NotFoundError("Instructor not found.", details={"instructor_id": instructor_id})
        return instructor

    def create_instructor(self, db: Session, instructor_in: InstructorFormData) -> InstructorSchema:
        with translate_store_errors(db, "create instructor", duplicate_message=DUPLICATE_EMAIL_MESSAGE):
            # Advisory only; the unique index on email is the real guard
            if crud_instructor.get_by_email(db, email=instructor_in.email):
                raise DuplicateValueError(DUPLICATE_EMAIL_MESSAGE, details={"field": "email"})
            instructor = crud_instructor.create(db, obj_in=instructor_in.model_dump(include={"name", "email", "bio"}))
            result = InstructorSchema.model_validate(instructor)

        self.cache_service.invalidate_for("instructor_create")
        logger.info(f"Created instructor {result.id}")
        return result

    def update_instructor(self, db: Session, instructor_id: str, instructor_in: InstructorFormData) -> InstructorSchema:
        with translate_store_errors(db, "update instructor", duplicate_message=DUPLICATE_EMAIL_MESSAGE):
            instructor = crud_instructor.get(db, id=instructor_id)
            if not instructor:
                raise NotFoundError("Instructor not found.", details={"instructor_id": instructor_id})

            if instructor_in.email != instructor.email and crud_instructor.get_by_email(
                db, email=instructor_in.email, exclude_id=instructor_id
            ):
                raise DuplicateValueError(DUPLICATE_EMAIL_MESSAGE, details={"field": "email"})

            updated = crud_instructor.update(
                db, db_obj=instructor, obj_in=instructor_in.model_dump(include={"name", "email", "bio"})
            )
            result = InstructorSchema.model_validate(updated)

        self.cache_service.invalidate_for("instructor_update")
        return result

    def delete_instructor(self, db: Session, instructor_id: str) -> None:
        with translate_store_errors(db, "delete instructor"):
            deleted = crud_instructor.delete(db, id=instructor_id)
        if deleted is None:
            raise NotFoundError("Instructor not found.", details={"instructor_id": instructor_id})

        self.cache_service.invalidate_for("instructor_delete")
        logger.info(f"Deleted instructor {instructor_id}")
