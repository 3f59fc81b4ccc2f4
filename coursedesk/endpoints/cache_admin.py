from typing import Optional
from fastapi import APIRouter, Depends

from coursedesk.schemas.response import APIResponse, CacheInvalidation, CacheStats
from coursedesk.utils import deps
from coursedesk.utils.service_registry import ServiceRegistry

router = APIRouter()

@router.get("", response_model=APIResponse[CacheStats])
def get_cache_stats(services: ServiceRegistry = Depends(deps.get_services)):
    """Current cache size and keys"""
    stats = services.cache_service.get_cache_stats()
    return APIResponse(message="Cache statistics retrieved", data=CacheStats(**stats))

@router.delete("", response_model=APIResponse[CacheInvalidation])
def invalidate_cache(
    pattern: Optional[str] = None,
    services: ServiceRegistry = Depends(deps.get_services),
):
    """Clear cache entries whose key contains pattern, or everything"""
    removed = services.cache_service.invalidate(pattern)
    if pattern:
        message = f"Cleared {removed} cache entries matching {pattern}"
    else:
        message = "All cache entries cleared"
    return APIResponse(message=message, data=CacheInvalidation(pattern=pattern, removed=removed))
