from sqlalchemy.orm import Session
from typing import List

from coursedesk.crud.base import CRUDBase
from coursedesk.models.lesson import Lesson
from coursedesk.models.module import Module
from coursedesk.schemas.lesson import LessonFormData

class CRUDLesson(CRUDBase[Lesson, LessonFormData, LessonFormData]):
    def get_by_module(self, db: Session, *, module_id: str) -> List[Lesson]:
        return db.query(self.model).filter(self.model.module_id == module_id).order_by(self.model.order).all()

    def get_by_course(self, db: Session, *, course_id: str) -> List[Lesson]:
        return (
            db.query(self.model)
            .join(Module, Module.id == self.model.module_id)
            .filter(Module.course_id == course_id)
            .order_by(Module.order, self.model.order)
            .all()
        )

lesson = CRUDLesson(Lesson)
