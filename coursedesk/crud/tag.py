from sqlalchemy.orm import Session, selectinload
from typing import Iterable, List, Optional, Set

from coursedesk.crud.base import CRUDBase
from coursedesk.models.tag import Tag
from coursedesk.schemas.tag import TagFormData

class CRUDTag(CRUDBase[Tag, TagFormData, TagFormData]):
    def _query_with_courses(self, db: Session):
        return db.query(Tag).options(selectinload(Tag.courses))

    def get(self, db: Session, id: str) -> Optional[Tag]:
        return self._query_with_courses(db).filter(Tag.id == id).first()

    def get_multi(self, db: Session, skip: int = 0, limit: Optional[int] = None) -> List[Tag]:
        query = self._query_with_courses(db).order_by(Tag.name.asc(), Tag.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_by_name(self, db: Session, name: str, exclude_id: Optional[str] = None) -> Optional[Tag]:
        query = db.query(Tag).filter(Tag.name == name)
        if exclude_id:
            query = query.filter(Tag.id != exclude_id)
        return query.first()

    def get_existing_ids(self, db: Session, ids: Iterable[str]) -> Set[str]:
        ids = list(ids)
        if not ids:
            return set()
        return {row[0] for row in db.query(Tag.id).filter(Tag.id.in_(ids)).all()}

tag = CRUDTag(Tag)
