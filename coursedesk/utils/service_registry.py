from typing import Optional

from coursedesk.core.cache import CacheStore
from coursedesk.core.config import settings
from coursedesk.services.cache_service import CacheService
from coursedesk.services.course import CourseService
from coursedesk.services.course_writer import CourseAggregateWriter
from coursedesk.services.instructor import InstructorService
from coursedesk.services.tag import TagService

class ServiceRegistry:
    """Owns the process cache and the entity access services built on it."""

    def __init__(self, cache: Optional[CacheStore] = None, writer: Optional[CourseAggregateWriter] = None):
        self.cache = cache or CacheStore(default_ttl=settings.CACHE_DEFAULT_TTL_MS)
        self.cache_service = CacheService(self.cache)
        self._course = CourseService(self.cache_service, writer=writer)
        self._instructor = InstructorService(self.cache_service)
        self._tag = TagService(self.cache_service)

    @property
    def course(self) -> CourseService:
        return self._course
    @property
    def instructor(self) -> InstructorService:
        return self._instructor
    @property
    def tag(self) -> TagService:
        return self._tag
