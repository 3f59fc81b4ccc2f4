from coursedesk.models.course import Course, course_tags
from coursedesk.models.module import Module
from coursedesk.models.lesson import Lesson
from coursedesk.models.instructor import Instructor
from coursedesk.models.tag import Tag

__all__ = ["Course", "course_tags", "Module", "Lesson", "Instructor", "Tag"]
