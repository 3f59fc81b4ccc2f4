from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursedesk.schemas.response import APIResponse, DeletedEntity
from coursedesk.schemas.tag import Tag, TagFormData
from coursedesk.utils import deps
from coursedesk.utils.service_registry import ServiceRegistry
from coursedesk.utils.validation import require_fields

router = APIRouter()


@router.get("", response_model=APIResponse[List[Tag]])
def get_all_tags(
    fresh: bool = False,
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    tags = services.tag.get_all_tags(db, use_cache=not fresh)
    return APIResponse(message="Tags retrieved successfully", data=tags)


@router.get("/{tag_id}", response_model=APIResponse[Tag])
def read_tag(
    tag_id: str,
    fresh: bool = False,
    db: Session = Depends(deps.get_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    tag = services.tag.get_tag(db, tag_id=tag_id, use_cache=not fresh)
    return APIResponse(message="Tag retrieved successfully", data=tag)


@router.post("", response_model=APIResponse[Tag])
def create_tag(
    *,
    tag_in: TagFormData,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    require_fields(tag_in, "name", "description")
    tag = services.tag.create_tag(db, tag_in=tag_in)
    return APIResponse(message="Tag created successfully", data=tag)


@router.patch("/{tag_id}", response_model=APIResponse[Tag])
def update_tag(
    *,
    tag_id: str,
    tag_in: TagFormData,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    require_fields(tag_in, "name", "description")
    tag = services.tag.update_tag(db, tag_id=tag_id, tag_in=tag_in)
    return APIResponse(message="Tag updated successfully", data=tag)


@router.delete("/{tag_id}", response_model=APIResponse[DeletedEntity])
def delete_tag(
    *,
    tag_id: str,
    db: Session = Depends(deps.get_transactional_db),
    services: ServiceRegistry = Depends(deps.get_services),
):
    services.tag.delete_tag(db, tag_id=tag_id)
    return APIResponse(message="Tag deleted successfully", data=DeletedEntity(id=tag_id))
