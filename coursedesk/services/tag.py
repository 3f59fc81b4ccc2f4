from typing import List
import logging

from sqlalchemy.orm import Session

from coursedesk.core.exceptions import DuplicateValueError, NotFoundError
from coursedesk.core.cache_config import CACHE_KEYS
from coursedesk.crud.tag import tag as crud_tag
from coursedesk.schemas.tag import Tag as TagSchema, TagFormData
from coursedesk.services.cache_service import CacheService
from coursedesk.services.store_errors import translate_store_errors

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A tag with this name already exists"


class TagService:

    def __init__(self, cache_service: CacheService):
        self.cache_service = cache_service

    def get_all_tags(self, db: Session, use_cache: bool = True) -> List[TagSchema]:
        def load():
            with translate_store_errors(db, "fetch tags"):
                return [TagSchema.model_validate(t) for t in crud_tag.get_multi(db)]

        return self.cache_service.read_through(CACHE_KEYS["tag_list"], load, use_cache=use_cache)

    def get_tag(self, db: Session, tag_id: str, use_cache: bool = True) -> TagSchema:
        def load():
            with translate_store_errors(db, "fetch tag"):
                tag = crud_tag.get(db, id=tag_id)
                return TagSchema.model_validate(tag) if tag else None

        tag = self.cache_service.read_through(CACHE_KEYS["tag_details"], load, params={"id": tag_id}, use_cache=use_cache)
        if tag is None:
            raise NotFoundError("Tag not found.", details={"tag_id": tag_id})
        return tag

    def create_tag(self, db: Session, tag_in: TagFormData) -> TagSchema:
        with translate_store_errors(db, "create tag", duplicate_message=DUPLICATE_NAME_MESSAGE):
            if crud_tag.get_by_name(db, name=tag_in.name):
                raise DuplicateValueError(DUPLICATE_NAME_MESSAGE, details={"field": "name"})
            tag = crud_tag.create(db, obj_in=tag_in.model_dump(include={"name", "description"}))
            result = TagSchema.model_validate(tag)

        self.cache_service.invalidate_for("tag_create")
        logger.info(f"Created tag {result.id}")
        return result

    def update_tag(self, db: Session, tag_id: str, tag_in: TagFormData) -> TagSchema:
        with translate_store_errors(db, "update tag", duplicate_message=DUPLICATE_NAME_MESSAGE):
            tag = crud_tag.get(db, id=tag_id)
            if not tag:
                raise NotFoundError("Tag not found.", details={"tag_id": tag_id})

            if tag_in.name != tag.name and crud_tag.get_by_name(db, name=tag_in.name, exclude_id=tag_id):
                raise DuplicateValueError(DUPLICATE_NAME_MESSAGE, details={"field": "name"})

            updated = crud_tag.update(db, db_obj=tag, obj_in=tag_in.model_dump(include={"name", "description"}))
            result = TagSchema.model_validate(updated)

        self.cache_service.invalidate_for("tag_update")
        return result

    def delete_tag(self, db: Session, tag_id: str) -> None:
        with translate_store_errors(db, "delete tag"):
            deleted = crud_tag.delete(db, id=tag_id)
        if deleted is None:
            raise NotFoundError("Tag not found.", details={"tag_id": tag_id})

        self.cache_service.invalidate_for("tag_delete")
        logger.info(f"Deleted tag {tag_id}")
