"""Tests for the operation surface: envelopes for tools and the resource."""

from __future__ import annotations

import orjson
import pytest

from swagger_mcp.foundation.errors import ErrorCode, Err, Ok, SwaggerError
from swagger_mcp.mcp import SwaggerOperations, ToolResponse

from .conftest import PETSTORE, FakeApi


def test_envelope_from_result() -> None:
    assert ToolResponse.from_result(Ok("{}")) == ToolResponse(text="{}", is_error=False)

    err = SwaggerError.create(ErrorCode.FETCH_FAILED, "Failed to fetch Swagger spec: Not Found")
    assert ToolResponse.from_result(Err(err), surface="document") == ToolResponse(
        text="Error loading Swagger documentation: Failed to fetch Swagger spec: Not Found", is_error=True
    )


@pytest.mark.asyncio
async def test_load_document_returns_formatted_json(ops: SwaggerOperations) -> None:
    response = await ops.load_document()
    assert not response.is_error
    assert orjson.loads(response.text) == PETSTORE
    assert response.text.startswith('{\n  "openapi"')


@pytest.mark.asyncio
async def test_load_document_failure(api: FakeApi, ops: SwaggerOperations) -> None:
    api.doc_status = 401
    response = await ops.load_document()
    assert response.is_error
    assert response.text == "Error loading Swagger documentation: Failed to fetch Swagger spec: Unauthorized"


@pytest.mark.asyncio
async def test_resource_embeds_error_without_flag(api: FakeApi, ops: SwaggerOperations) -> None:
    api.doc_body = b"not json"
    text = await ops.read_documentation()
    assert text.startswith("Error loading Swagger documentation: Invalid JSON in Swagger spec")


@pytest.mark.asyncio
async def test_resource_matches_tool_text(ops: SwaggerOperations) -> None:
    assert await ops.read_documentation() == (await ops.load_document()).text


@pytest.mark.asyncio
async def test_make_request_success(api: FakeApi, ops: SwaggerOperations) -> None:
    api.api_body = b'{"id": 7, "name": "Rex"}'
    response = await ops.make_request("/pets/{petId}", "get", {"petId": 7})
    assert not response.is_error
    assert orjson.loads(response.text) == {"id": 7, "name": "Rex"}
    assert api.last_request.url.path == "/pets/7"


@pytest.mark.asyncio
async def test_make_request_path_not_found(api: FakeApi, ops: SwaggerOperations) -> None:
    response = await ops.make_request("/unknown", "get")
    assert response == ToolResponse(text="Error: Path /unknown not found in Swagger spec", is_error=True)
    assert api.api_requests == []


@pytest.mark.asyncio
async def test_make_request_method_not_supported(ops: SwaggerOperations) -> None:
    response = await ops.make_request("/ping", "delete")
    assert response == ToolResponse(text="Error: Method DELETE not supported for path /ping", is_error=True)


@pytest.mark.asyncio
async def test_make_request_request_failure(api: FakeApi, ops: SwaggerOperations) -> None:
    api.api_body = b""
    response = await ops.make_request("/ping", "GET")
    assert response.is_error
    assert response.text.startswith("Error making request: ")


@pytest.mark.asyncio
async def test_make_request_document_failure_uses_request_prefix(api: FakeApi, ops: SwaggerOperations) -> None:
    api.doc_status = 404
    response = await ops.make_request("/ping", "GET")
    assert response == ToolResponse(
        text="Error making request: Failed to fetch Swagger spec: Not Found", is_error=True
    )


@pytest.mark.asyncio
async def test_operations_share_one_document_fetch(api: FakeApi, ops: SwaggerOperations) -> None:
    await ops.load_document()
    await ops.make_request("/ping", "get")
    await ops.read_documentation()
    assert len(api.doc_requests) == 1
    assert ops.cache.is_loaded
