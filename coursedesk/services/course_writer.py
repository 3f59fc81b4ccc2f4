"""
Course aggregate writer.

Fans one course-form submission out into the course row, its module rows, the
lesson rows of each module and the course/tag association rows. Updates use
replace-in-place: every child row is deleted and re-inserted, so children get
new identities on each save.
"""
import logging
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from coursedesk.core.exceptions import ConflictError, NotFoundError
from coursedesk.crud.course import course as crud_course
from coursedesk.crud.instructor import instructor as crud_instructor
from coursedesk.crud.tag import tag as crud_tag
from coursedesk.models.course import Course, _utcnow
from coursedesk.models.lesson import Lesson
from coursedesk.models.module import Module
from coursedesk.schemas.course import CourseFormData
from coursedesk.schemas.module import ModuleFormData

logger = logging.getLogger(__name__)


class CourseAggregateWriter:

    def create(self, db: Session, form: CourseFormData) -> str:
        tag_ids = self._verify_references(db, form)
        try:
            course = Course(
                title=form.title,
                description=form.description,
                price=form.price,
                instructor_id=form.instructor_id,
            )
            db.add(course)
            db.flush()
            course_id = course.id

            self._insert_modules(db, course_id, form.modules)
            crud_course.add_tags(db, course_id=course_id, tag_ids=tag_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Created course {course_id} with {len(form.modules)} module(s) and {len(tag_ids)} tag(s)")
        return course_id

    def replace(self, db: Session, course_id: str, form: CourseFormData) -> str:
        course = crud_course.get_for_update(db, course_id)
        if not course:
            raise NotFoundError("Course not found.", details={"course_id": course_id})

        if form.version is not None and form.version != course.version:
            raise ConflictError(
                "Course was modified by someone else. Reload and try again.",
                details={"expected_version": form.version, "current_version": course.version},
            )

        tag_ids = self._verify_references(db, form)
        try:
            course.title = form.title
            course.description = form.description
            course.price = form.price
            course.instructor_id = form.instructor_id
            # always issue the UPDATE so the version counter moves on every save
            course.updated_at = _utcnow()
            db.flush()

            crud_course.delete_children(db, course_id=course_id)
            db.expire(course, ["modules", "tags"])

            self._insert_modules(db, course_id, form.modules)
            crud_course.add_tags(db, course_id=course_id, tag_ids=tag_ids)
            db.commit()
        except StaleDataError as e:
            db.rollback()
            raise ConflictError("Course was modified by someone else. Reload and try again.") from e
        except Exception:
            db.rollback()
            raise

        logger.info(f"Replaced content of course {course_id}: {len(form.modules)} module(s), {len(tag_ids)} tag(s)")
        return course_id

    def _verify_references(self, db: Session, form: CourseFormData) -> List[str]:
        if not crud_instructor.exists(db, form.instructor_id):
            raise NotFoundError("Instructor not found.", details={"instructor_id": form.instructor_id})

        tag_ids = list(dict.fromkeys(form.tag_ids))
        missing = set(tag_ids) - crud_tag.get_existing_ids(db, tag_ids)
        if missing:
            raise NotFoundError("One or more tags were not found.", details={"tag_ids": sorted(missing)})
        return tag_ids

    def _insert_modules(self, db: Session, course_id: str, modules: List[ModuleFormData]) -> None:
        # Each module is flushed on its own so its id is known before its lessons go in
        for module_in in modules:
            module = Module(title=module_in.title, order=module_in.order, course_id=course_id)
            db.add(module)
            db.flush()

            for lesson_in in module_in.lessons:
                db.add(Lesson(
                    title=lesson_in.title,
                    content=lesson_in.content,
                    video_url=lesson_in.video_url,
                    order=lesson_in.order,
                    module_id=module.id,
                ))
        db.flush()


course_writer = CourseAggregateWriter()
