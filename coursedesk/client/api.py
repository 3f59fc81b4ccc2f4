import logging
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel

from coursedesk.core.config import settings
from coursedesk.core.exceptions import (
    ERRORS_BY_CODE,
    CatalogError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

FormType = Union[BaseModel, Dict[str, Any]]

_ERRORS_BY_STATUS = {
    400: ValidationError,
    404: NotFoundError,
    409: ConflictError,
}


def _dump(form: FormType) -> Dict[str, Any]:
    if isinstance(form, BaseModel):
        return form.model_dump(mode="json", by_alias=True, exclude_none=True)
    return form


class CatalogAPIClient:
    """Async HTTP client for the catalog endpoints.

    Error responses are turned back into catalog exceptions using the error
    code in the response body, falling back to the status code.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 10.0):
        self.base_url = base_url or settings.API_BASE_URL
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[dict] = None, params: Optional[dict] = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise StoreError(f"Network error: {e}") from e

        if response.is_success:
            return response.json().get("data")
        raise self._to_error(response)

    @staticmethod
    def _to_error(response: httpx.Response) -> CatalogError:
        try:
            error = response.json().get("error") or {}
        except ValueError:
            error = {}
        error_cls = ERRORS_BY_CODE.get(error.get("code")) or _ERRORS_BY_STATUS.get(response.status_code, StoreError)
        message = error.get("message") or f"Request failed with status {response.status_code}"
        return error_cls(message, details=error.get("details"))

    @staticmethod
    def _fresh(fresh: bool) -> Optional[dict]:
        return {"fresh": "true"} if fresh else None

    # Courses
    async def list_courses(self, fresh: bool = False, skip: int = 0, limit: Optional[int] = None) -> List[dict]:
        params = self._fresh(fresh) or {}
        if skip:
            params["skip"] = skip
        if limit is not None:
            params["limit"] = limit
        try:
            return await self._request("GET", "/courses", params=params or None)
        except NotFoundError:
            # the list endpoint answers 404 when the catalog is empty
            return []

    async def get_course(self, course_id: str) -> dict:
        return await self._request("GET", f"/courses/{course_id}")

    async def create_course(self, form: FormType) -> dict:
        return await self._request("POST", "/courses", json={"data": _dump(form)})

    async def update_course(self, course_id: str, form: FormType) -> dict:
        return await self._request("PATCH", f"/courses/{course_id}", json={"data": _dump(form)})

    async def delete_course(self, course_id: str) -> dict:
        return await self._request("DELETE", f"/courses/{course_id}")

    # Instructors
    async def list_instructors(self, fresh: bool = False) -> List[dict]:
        return await self._request("GET", "/instructors", params=self._fresh(fresh))

    async def get_instructor(self, instructor_id: str) -> dict:
        return await self._request("GET", f"/instructors/{instructor_id}")

    async def list_instructor_courses(self, instructor_id: str, fresh: bool = False) -> List[dict]:
        return await self._request("GET", f"/instructors/{instructor_id}/courses", params=self._fresh(fresh))

    async def create_instructor(self, form: FormType) -> dict:
        return await self._request("POST", "/instructors", json=_dump(form))

    async def update_instructor(self, instructor_id: str, form: FormType) -> dict:
        return await self._request("PATCH", f"/instructors/{instructor_id}", json=_dump(form))

    async def delete_instructor(self, instructor_id: str) -> dict:
        return await self._request("DELETE", f"/instructors/{instructor_id}")

    # Tags
    async def list_tags(self, fresh: bool = False) -> List[dict]:
        return await self._request("GET", "/tags", params=self._fresh(fresh))

    async def get_tag(self, tag_id: str) -> dict:
        return await self._request("GET", f"/tags/{tag_id}")

    async def create_tag(self, form: FormType) -> dict:
        return await self._request("POST", "/tags", json=_dump(form))

    async def update_tag(self, tag_id: str, form: FormType) -> dict:
        return await self._request("PATCH", f"/tags/{tag_id}", json=_dump(form))

    async def delete_tag(self, tag_id: str) -> dict:
        return await self._request("DELETE", f"/tags/{tag_id}")
