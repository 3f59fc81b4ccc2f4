from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from coursedesk.crud.base import CRUDBase
from coursedesk.models.instructor import Instructor
from coursedesk.schemas.instructor import InstructorFormData

class CRUDInstructor(CRUDBase[Instructor, InstructorFormData, InstructorFormData]):
    def _query_with_courses(self, db: Session):
        return db.query(Instructor).options(selectinload(Instructor.courses))

    def get(self, db: Session, id: str) -> Optional[Instructor]:
        return self._query_with_courses(db).filter(Instructor.id == id).first()

    def get_multi(self, db: Session, skip: int = 0, limit: Optional[int] = None) -> List[Instructor]:
        query = self._query_with_courses(db).order_by(Instructor.name.asc(), Instructor.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_by_email(self, db: Session, email: str, exclude_id: Optional[str] = None) -> Optional[Instructor]:
        query = db.query(Instructor).filter(Instructor.email == email)
        if exclude_id:
            query = query.filter(Instructor.id != exclude_id)
        return query.first()

instructor = CRUDInstructor(Instructor)
