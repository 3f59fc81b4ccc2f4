import httpx
import pytest

from coursedesk.client.api import CatalogAPIClient
from coursedesk.core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError


def _client(handler):
    return CatalogAPIClient(base_url="http://catalog.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_success_returns_envelope_data():
    def handler(request):
        return httpx.Response(200, json={"message": "Tag retrieved successfully", "data": {"id": "t1"}})

    async with _client(handler) as api:
        assert await api.get_tag("t1") == {"id": "t1"}

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,code,expected",
    [
        (400, "VALIDATION_ERROR", ValidationError),
        (404, "NOT_FOUND", NotFoundError),
        (409, "CONFLICT", ConflictError),
        (500, "STORE_ERROR", StoreError),
    ],
)
async def test_error_code_maps_back_to_exception(status_code, code, expected):
    def handler(request):
        return httpx.Response(status_code, json={"error": {"code": code, "message": "nope", "details": {"a": 1}}})

    async with _client(handler) as api:
        with pytest.raises(expected) as exc_info:
            await api.update_course("c1", {"title": "A"})

    assert exc_info.value.message == "nope"
    assert exc_info.value.details == {"a": 1}

@pytest.mark.asyncio
async def test_non_json_error_falls_back_to_status_code():
    def handler(request):
        return httpx.Response(409, text="conflict")

    async with _client(handler) as api:
        with pytest.raises(ConflictError) as exc_info:
            await api.delete_tag("t1")

    assert exc_info.value.message == "Request failed with status 409"

@pytest.mark.asyncio
async def test_network_failure_is_a_store_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as api:
        with pytest.raises(StoreError):
            await api.list_tags()

@pytest.mark.asyncio
async def test_empty_course_list_reads_as_empty():
    def handler(request):
        return httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "No courses found."}})

    async with _client(handler) as api:
        assert await api.list_courses() == []

@pytest.mark.asyncio
async def test_list_courses_sends_paging_params():
    seen = []

    def handler(request):
        seen.append(dict(request.url.params))
        return httpx.Response(200, json={"message": "ok", "data": [{"id": "c3"}]})

    async with _client(handler) as api:
        assert await api.list_courses(fresh=True, skip=2, limit=2) == [{"id": "c3"}]
        await api.list_courses()

    assert seen == [{"fresh": "true", "skip": "2", "limit": "2"}, {}]
