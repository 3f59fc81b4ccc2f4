from sqlalchemy.orm import Session, selectinload
from typing import List

from coursedesk.crud.base import CRUDBase
from coursedesk.models.module import Module
from coursedesk.schemas.module import ModuleFormData

class CRUDModule(CRUDBase[Module, ModuleFormData, ModuleFormData]):
    def get_by_course(self, db: Session, *, course_id: str) -> List[Module]:
        return db.query(self.model).options(selectinload(self.model.lessons)).filter(self.model.course_id == course_id).order_by(self.model.order).all()

    def count_by_course(self, db: Session, *, course_id: str) -> int:
        return db.query(self.model).filter(self.model.course_id == course_id).count()

module = CRUDModule(Module)
