"""Unit tests for the documents router with a mocked service."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from doclite.domain.entities import Document, PageResult
from doclite.domain.exceptions import (
    DocumentNotFoundError,
    MalformedInputError,
    StorageFailureError,
)
from doclite.infrastructure.api.app import app
from doclite.infrastructure.api.dependencies import get_document_service


@pytest.fixture
def mock_service():
    service = MagicMock()
    service.list_documents = AsyncMock()
    service.get_document = AsyncMock()
    service.create_document = AsyncMock()
    service.update_document = AsyncMock()
    service.delete_document = AsyncMock()
    return service


@pytest_asyncio.fixture
async def api(mock_service):
    app.dependency_overrides[get_document_service] = lambda: mock_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}


SAMPLE = Document(
    id="abc",
    data={"name": "gear"},
    created="2024-01-01T00:00:00.000000Z",
    updated="2024-01-02T00:00:00.000000Z",
)


@pytest.mark.asyncio
async def test_list_passes_query_params(api, mock_service):
    mock_service.list_documents.return_value = PageResult(items=[SAMPLE], total=11, limit=10, offset=0)

    response = await api.get("/widgets?color=red&limit=10")

    assert response.status_code == 200
    assert response.json() == {
        "items": [
            {
                "id": "abc",
                "data": {"name": "gear"},
                "created": "2024-01-01T00:00:00.000000Z",
                "updated": "2024-01-02T00:00:00.000000Z",
            }
        ],
        "total_items": 11,
        "limit": 10,
        "offset": 0,
        "has_more": True,
    }
    collection, query_params = mock_service.list_documents.await_args.args
    assert collection == "widgets"
    assert query_params.getlist("color") == ["red"]


@pytest.mark.asyncio
async def test_get_document(api, mock_service):
    mock_service.get_document.return_value = SAMPLE

    response = await api.get("/widgets/abc")

    assert response.status_code == 200
    assert response.json()["data"] == {"name": "gear"}
    mock_service.get_document.assert_awaited_once_with("widgets", "abc")


@pytest.mark.asyncio
async def test_get_document_not_found(api, mock_service):
    mock_service.get_document.side_effect = DocumentNotFoundError("widgets", "abc")

    response = await api.get("/widgets/abc")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


@pytest.mark.asyncio
async def test_create_document(api, mock_service):
    mock_service.create_document.return_value = "new-id"

    response = await api.post("/widgets", json={"name": "gear"})

    assert response.status_code == 201
    assert response.json() == {"id": "new-id"}
    mock_service.create_document.assert_awaited_once_with("widgets", {"name": "gear"})


@pytest.mark.asyncio
async def test_create_with_path_id_ignores_it(api, mock_service):
    mock_service.create_document.return_value = "generated"

    response = await api.post("/widgets/client-chosen", json={"a": 1})

    assert response.status_code == 201
    assert response.json() == {"id": "generated"}
    mock_service.create_document.assert_awaited_once_with("widgets", {"a": 1})


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"{not json", b"[1, 2]", b""])
async def test_create_malformed_body(api, mock_service, body):
    response = await api.post(
        "/widgets", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Malformed input"
    mock_service.create_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_document(api, mock_service):
    response = await api.put("/widgets/abc", json={"name": "sprocket"})

    assert response.status_code == 200
    assert response.json() == {"status": "updated"}
    mock_service.update_document.assert_awaited_once_with("widgets", "abc", {"name": "sprocket"})


@pytest.mark.asyncio
async def test_update_not_found(api, mock_service):
    mock_service.update_document.side_effect = DocumentNotFoundError("widgets", "abc")

    response = await api.put("/widgets/abc", json={})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_malformed_body(api, mock_service):
    response = await api.put(
        "/widgets/abc", content=b"nope", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    mock_service.update_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_document(api, mock_service):
    response = await api.delete("/widgets/abc")

    assert response.status_code == 200
    assert response.json() == {"status": "deleted"}
    mock_service.delete_document.assert_awaited_once_with("widgets", "abc")


@pytest.mark.asyncio
async def test_invalid_collection_name(api, mock_service):
    mock_service.list_documents.side_effect = MalformedInputError("Collection name is invalid")

    response = await api.get("/bad-name")

    assert response.status_code == 400
    assert response.json() == {"error": "Malformed input", "message": "Collection name is invalid"}


@pytest.mark.asyncio
async def test_storage_failure_hides_details(api, mock_service):
    mock_service.get_document.side_effect = StorageFailureError("no such table: x")

    response = await api.get("/widgets/abc")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error", "message": "Storage operation failed"}


@pytest.mark.asyncio
async def test_put_without_id_not_allowed(api):
    response = await api.put("/widgets", json={})
    assert response.status_code == 405


@pytest.mark.asyncio
async def test_delete_without_id_not_allowed(api):
    response = await api.delete("/widgets")
    assert response.status_code == 405


@pytest.mark.asyncio
async def test_correlation_id_echoed(api, mock_service):
    mock_service.get_document.return_value = SAMPLE

    response = await api.get("/widgets/abc", headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b'{"a": NaN}', b'{"a": Infinity}', b'{"a": -Infinity}'])
async def test_non_standard_json_constants_rejected(api, mock_service, body):
    headers = {"Content-Type": "application/json"}

    created = await api.post("/widgets", content=body, headers=headers)
    updated = await api.put("/widgets/abc", content=body, headers=headers)

    assert created.status_code == 400
    assert updated.status_code == 400
    assert created.json()["error"] == "Malformed input"
    mock_service.create_document.assert_not_awaited()
    mock_service.update_document.assert_not_awaited()
