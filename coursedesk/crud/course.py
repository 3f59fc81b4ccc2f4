from sqlalchemy.orm import Session, selectinload
from sqlalchemy import delete, insert, select
from typing import Iterable, List, Optional

from coursedesk.crud.base import CRUDBase
from coursedesk.models.course import Course, course_tags
from coursedesk.models.module import Module
from coursedesk.models.lesson import Lesson
from coursedesk.schemas.course import CourseFormData


class CRUDCourse(CRUDBase[Course, CourseFormData, CourseFormData]):

    def _query_with_relationships(self, db: Session):
        return db.query(Course).options(
            selectinload(Course.instructor),
            selectinload(Course.tags),
            selectinload(Course.modules).selectinload(Module.lessons),
        )

    def get(self, db: Session, id: str) -> Optional[Course]:
        return self._query_with_relationships(db).filter(Course.id == id).first()

    def get_multi(self, db: Session, skip: int = 0, limit: Optional[int] = None) -> List[Course]:
        query = (
            self._query_with_relationships(db)
            .order_by(Course.created_at.desc(), Course.id)
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_by_instructor(self, db: Session, instructor_id: str) -> List[Course]:
        return (
            self._query_with_relationships(db)
            .filter(Course.instructor_id == instructor_id)
            .order_by(Course.created_at.desc(), Course.id)
            .all()
        )

    def get_for_update(self, db: Session, id: str) -> Optional[Course]:
        return db.get(Course, id)

    def delete_children(self, db: Session, *, course_id: str) -> None:
        """Remove every module, lesson and tag association of a course."""
        module_ids = select(Module.id).where(Module.course_id == course_id)
        db.execute(
            delete(Lesson).where(Lesson.module_id.in_(module_ids)).execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Module).where(Module.course_id == course_id).execution_options(synchronize_session=False)
        )
        db.execute(delete(course_tags).where(course_tags.c.course_id == course_id))

    def add_tags(self, db: Session, *, course_id: str, tag_ids: Iterable[str]) -> None:
        rows = [{"course_id": course_id, "tag_id": tag_id} for tag_id in tag_ids]
        if rows:
            db.execute(insert(course_tags), rows)

    def get_tag_ids(self, db: Session, *, course_id: str) -> List[str]:
        return list(
            db.execute(select(course_tags.c.tag_id).where(course_tags.c.course_id == course_id)).scalars()
        )


course = CRUDCourse(Course)
