"""Cache configuration and TTL settings"""
from coursedesk.core.config import settings

# Cache TTL (Time To Live) configurations in milliseconds
CACHE_TTL = {
    # Primary listings and detail reads
    "courses": settings.CACHE_DEFAULT_TTL_MS,
    "course": settings.CACHE_DEFAULT_TTL_MS,
    "instructors": settings.CACHE_DEFAULT_TTL_MS,
    "instructor": settings.CACHE_DEFAULT_TTL_MS,
    "tags": settings.CACHE_DEFAULT_TTL_MS,
    "tag": settings.CACHE_DEFAULT_TTL_MS,

    # Derived queries are more likely to go stale unnoticed
    "courses_by_instructor": settings.CACHE_DERIVED_TTL_MS,
}

# Collection names used as key prefixes
CACHE_KEYS = {
    "course_list": "courses",
    "course_details": "course",
    "courses_by_instructor": "courses_by_instructor",
    "instructor_list": "instructors",
    "instructor_details": "instructor",
    "tag_list": "tags",
    "tag_details": "tag",
}

# Cache invalidation patterns - substrings to clear when data changes.
# "course" also matches "courses" and "courses_by_instructor" keys.
INVALIDATION_PATTERNS = {
    "course_write": ["course", "instructor", "tag"],
    "instructor_create": ["instructor"],
    "instructor_update": ["instructor", "course"],
    "instructor_delete": ["instructor"],
    "tag_create": ["tag"],
    "tag_update": ["tag", "course"],
    "tag_delete": ["tag", "course"],
}
