"""
Dashboard view state.

Keeps the locally displayed courses, instructors and tags in sync with the
catalog API: concurrent initial load, delayed background refreshes after
writes, client-side delete guards and optimistic deletes that are rolled back
when the request fails.
"""
import asyncio
import logging
from collections import Counter
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from pydantic import BaseModel

from coursedesk.client.api import CatalogAPIClient, FormType
from coursedesk.core.config import settings
from coursedesk.core.exceptions import CatalogError, DeletionBlockedError

logger = logging.getLogger(__name__)

COLLECTIONS = ("courses", "instructors", "tags")


def _with_version(form: FormType, version: int) -> FormType:
    """Fill in the version the edited course was loaded at, unless the form already has one."""
    if isinstance(form, BaseModel):
        if getattr(form, "version", None) is not None:
            return form
        return form.model_copy(update={"version": version})
    if form.get("version") is not None:
        return form
    return {**form, "version": version}


class Notification(BaseModel):
    title: str
    description: str
    variant: str = "default"


class DashboardStats(BaseModel):
    total_courses: int
    total_instructors: int
    total_tags: int
    average_price: float
    courses_by_instructor: Dict[str, int]
    tag_usage: Dict[str, int]


class DashboardState:

    def __init__(
        self,
        api: CatalogAPIClient,
        refresh_delay: Optional[float] = None,
        on_notify: Optional[Callable[[Notification], None]] = None,
    ):
        self.api = api
        self.refresh_delay = settings.REFRESH_DELAY_SECONDS if refresh_delay is None else refresh_delay
        self.courses: List[dict] = []
        self.instructors: List[dict] = []
        self.tags: List[dict] = []
        self.errors: Dict[str, Optional[str]] = {kind: None for kind in COLLECTIONS}
        self.loading: Dict[str, bool] = {**{kind: False for kind in COLLECTIONS}, "initial": True}
        self.notifications: List[Notification] = []
        self._on_notify = on_notify
        self._refresh_tasks: Set[asyncio.Task] = set()
        self._loaders = {
            "courses": self.api.list_courses,
            "instructors": self.api.list_instructors,
            "tags": self.api.list_tags,
        }

    @property
    def is_loading(self) -> bool:
        return any(self.loading.values())

    @property
    def has_errors(self) -> bool:
        return any(error is not None for error in self.errors.values())

    @property
    def stats(self) -> DashboardStats:
        prices = [course.get("price", 0) for course in self.courses]
        courses_by_instructor = Counter(
            course["instructor"]["name"] for course in self.courses if course.get("instructor")
        )
        tag_usage = Counter(tag["name"] for course in self.courses for tag in course.get("tags", []))
        return DashboardStats(
            total_courses=len(self.courses),
            total_instructors=len(self.instructors),
            total_tags=len(self.tags),
            average_price=sum(prices) / len(prices) if prices else 0.0,
            courses_by_instructor=dict(courses_by_instructor),
            tag_usage=dict(tag_usage),
        )

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        if self._on_notify:
            self._on_notify(notification)

    # Loading

    async def load(self, kind: str, use_cache: bool = True) -> None:
        self.loading[kind] = True
        self.errors[kind] = None
        try:
            setattr(self, kind, await self._loaders[kind](fresh=not use_cache))
        except CatalogError as e:
            self.errors[kind] = e.message
            logger.error(f"Error loading {kind}: {e.message}")
        finally:
            self.loading[kind] = False

    async def load_all(self, use_cache: bool = True) -> None:
        self.loading["initial"] = True
        results = await asyncio.gather(
            *(self.load(kind, use_cache) for kind in COLLECTIONS), return_exceptions=True
        )
        for kind, result in zip(COLLECTIONS, results):
            if isinstance(result, Exception):
                self.errors[kind] = str(result)
                logger.error(f"Unexpected error loading {kind}: {result}")
        self.loading["initial"] = False

    async def refresh(self, kind: str) -> None:
        if kind == "all":
            await self.load_all(use_cache=False)
        else:
            await self.load(kind, use_cache=False)

    def schedule_refresh(self, kind: str) -> asyncio.Task:
        """Refresh ``kind`` after ``refresh_delay`` seconds without waiting for it."""
        async def _delayed_refresh():
            await asyncio.sleep(self.refresh_delay)
            await self.refresh(kind)

        task = asyncio.get_running_loop().create_task(_delayed_refresh())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)
        return task

    async def wait_for_refreshes(self) -> None:
        if self._refresh_tasks:
            await asyncio.gather(*list(self._refresh_tasks), return_exceptions=True)

    # Saving

    async def _save(
        self,
        label: str,
        create: Callable[[FormType], Awaitable[dict]],
        update: Callable[[str, FormType], Awaitable[dict]],
        form: FormType,
        existing: Optional[dict],
        refresh_kind: str,
    ) -> dict:
        try:
            if existing:
                result = await update(existing["id"], form)
                self.notify("Success", f"{label} updated successfully")
            else:
                result = await create(form)
                self.notify("Success", f"{label} added successfully")
        except CatalogError as e:
            action = "update" if existing else "add"
            self.notify("Error", e.message or f"Failed to {action} {label.lower()}", variant="destructive")
            raise

        self.schedule_refresh(refresh_kind)
        return result

    async def save_instructor(self, form: FormType, existing: Optional[dict] = None) -> dict:
        return await self._save(
            "Instructor", self.api.create_instructor, self.api.update_instructor, form, existing, "instructors"
        )

    async def save_tag(self, form: FormType, existing: Optional[dict] = None) -> dict:
        return await self._save("Tag", self.api.create_tag, self.api.update_tag, form, existing, "tags")

    async def save_course(self, form: FormType, existing: Optional[dict] = None) -> dict:
        if existing and existing.get("version") is not None:
            form = _with_version(form, existing["version"])
        # course writes move instructor and tag counts too
        return await self._save("Course", self.api.create_course, self.api.update_course, form, existing, "all")

    # Deleting

    async def delete_instructor(self, instructor: dict) -> None:
        course_count = instructor.get("course_count", 0)
        if course_count > 0:
            message = (
                f"This instructor has {course_count} course(s). "
                "Please reassign or delete those courses first."
            )
            self.notify("Cannot Delete", message, variant="destructive")
            raise DeletionBlockedError(message, details={"course_count": course_count})
        await self._optimistic_delete("instructors", instructor, self.api.delete_instructor, "Instructor")

    async def delete_tag(self, tag: dict) -> None:
        usage_count = tag.get("usage_count", 0)
        if usage_count > 0:
            message = (
                f"This tag is used by {usage_count} course(s). "
                "Please remove it from those courses first."
            )
            self.notify("Cannot Delete", message, variant="destructive")
            raise DeletionBlockedError(message, details={"usage_count": usage_count})
        await self._optimistic_delete("tags", tag, self.api.delete_tag, "Tag")

    async def delete_course(self, course: dict) -> None:
        await self._optimistic_delete("courses", course, self.api.delete_course, "Course")

    async def _optimistic_delete(
        self, kind: str, item: dict, remove: Callable[[str], Awaitable[Any]], label: str
    ) -> None:
        items: List[dict] = getattr(self, kind)
        index = next((i for i, existing in enumerate(items) if existing["id"] == item["id"]), None)
        if index is not None:
            setattr(self, kind, items[:index] + items[index + 1:])

        try:
            await remove(item["id"])
        except CatalogError:
            current: List[dict] = getattr(self, kind)
            if index is not None and all(existing["id"] != item["id"] for existing in current):
                restored = list(current)
                restored.insert(min(index, len(restored)), item)
                setattr(self, kind, restored)
            self.notify("Error", f"Failed to delete {label.lower()}", variant="destructive")
            raise

        self.notify("Success", f"{label} deleted successfully")
        self.schedule_refresh(kind)
