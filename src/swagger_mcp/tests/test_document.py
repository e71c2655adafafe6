"""Tests for the interface document view and the fetch-once cache."""

from __future__ import annotations

import asyncio

import httpx
import orjson
import pytest

from swagger_mcp.document import DocumentCache, InterfaceDocument
from swagger_mcp.foundation.errors import ErrorCode
from swagger_mcp.http import HttpClient

from .conftest import DOC_URL, PETSTORE, FakeApi


# ─────────────────────────────────────────────────────────────────────────────
# InterfaceDocument
# ─────────────────────────────────────────────────────────────────────────────


def test_operation_lookup_is_case_insensitive_on_method() -> None:
    doc = InterfaceDocument(PETSTORE)
    op = doc.operation("/pets/{petId}", "GET").unwrap()
    assert op.path == "/pets/{petId}"
    assert op.method == "get"
    assert op.descriptor == {"operationId": "getPet"}


def test_path_must_match_exactly() -> None:
    doc = InterfaceDocument(PETSTORE)
    for path in ("/pets/", "/PETS", "/pets/42"):
        err = doc.operation(path, "get").unwrap_err()
        assert err.code is ErrorCode.PATH_NOT_FOUND
        assert path in err.message


def test_missing_method_reports_method_as_given() -> None:
    err = InterfaceDocument(PETSTORE).operation("/ping", "POST").unwrap_err()
    assert err.code is ErrorCode.METHOD_NOT_SUPPORTED
    assert err.message == "Method POST not supported for path /ping"


@pytest.mark.parametrize("raw", [{}, {"paths": None}, {"paths": []}, [], "text", None])
def test_document_without_paths_mapping(raw: object) -> None:
    doc = InterfaceDocument(raw)
    assert doc.paths == {}
    assert doc.operation("/ping", "get").unwrap_err().code is ErrorCode.PATH_NOT_FOUND


def test_null_method_entry_is_not_supported() -> None:
    doc = InterfaceDocument({"paths": {"/ping": {"get": None}}})
    assert doc.operation("/ping", "get").unwrap_err().code is ErrorCode.METHOD_NOT_SUPPORTED


@pytest.mark.parametrize("descriptor", [False, 0, 0.0, ""])
def test_falsy_method_entry_is_not_supported(descriptor: object) -> None:
    doc = InterfaceDocument({"paths": {"/p": {"get": descriptor}}})
    assert doc.operation("/p", "get").unwrap_err().code is ErrorCode.METHOD_NOT_SUPPORTED


@pytest.mark.parametrize("descriptor", [{}, [], True, 1, "x"])
def test_non_falsy_method_entry_is_declared(descriptor: object) -> None:
    op = InterfaceDocument({"paths": {"/p": {"get": descriptor}}}).operation("/p", "get").unwrap()
    assert op.descriptor == descriptor


@pytest.mark.parametrize(
    ("entry", "code"),
    [
        ({}, ErrorCode.METHOD_NOT_SUPPORTED),
        ([], ErrorCode.METHOD_NOT_SUPPORTED),
        ("text", ErrorCode.METHOD_NOT_SUPPORTED),
        (None, ErrorCode.PATH_NOT_FOUND),
        (False, ErrorCode.PATH_NOT_FOUND),
        (0, ErrorCode.PATH_NOT_FOUND),
        ("", ErrorCode.PATH_NOT_FOUND),
    ],
)
def test_path_entry_presence(entry: object, code: ErrorCode) -> None:
    doc = InterfaceDocument({"paths": {"/p": entry}})
    assert doc.operation("/p", "get").unwrap_err().code is code


@pytest.mark.parametrize(
    ("servers", "expected"),
    [
        ([{"url": "https://api.example.com/v1"}, {"url": "https://backup.example.com"}], "https://api.example.com/v1"),
        ([{"url": ""}], None),
        ([{"description": "no url"}], None),
        ([], None),
        ("https://api.example.com", None),
        (None, None),
    ],
)
def test_server_url(servers: object, expected: str | None) -> None:
    assert InterfaceDocument({"paths": {}, "servers": servers}).server_url() == expected


def test_to_json_is_indented() -> None:
    text = InterfaceDocument({"a": 1, "b": [1, 2]}).to_json()
    assert text == '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'


# ─────────────────────────────────────────────────────────────────────────────
# DocumentCache
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_fetches_once_across_calls(api: FakeApi) -> None:
    cache = DocumentCache(DOC_URL, api.client())
    assert not cache.is_loaded

    first = (await cache.get()).unwrap()
    for _ in range(5):
        assert (await cache.get()).unwrap() is first

    assert cache.is_loaded
    assert len(api.doc_requests) == 1
    assert first.raw == PETSTORE


@pytest.mark.asyncio
async def test_document_fetch_sends_no_authorization(api: FakeApi) -> None:
    await DocumentCache(DOC_URL, api.client()).get()
    assert "authorization" not in api.doc_requests[0].headers
    assert api.doc_requests[0].method == "GET"


@pytest.mark.asyncio
async def test_concurrent_first_calls_share_one_fetch(api: FakeApi) -> None:
    api.doc_delay = 0.02
    cache = DocumentCache(DOC_URL, api.client())

    results = await asyncio.gather(*(cache.get() for _ in range(10)))

    assert len(api.doc_requests) == 1
    docs = [r.unwrap() for r in results]
    assert all(d is docs[0] for d in docs)


@pytest.mark.asyncio
async def test_non_success_status_is_fetch_failure(api: FakeApi) -> None:
    api.doc_status = 404
    err = (await DocumentCache(DOC_URL, api.client()).get()).unwrap_err()
    assert err.code is ErrorCode.FETCH_FAILED
    assert err.message == "Failed to fetch Swagger spec: Not Found"


@pytest.mark.asyncio
async def test_invalid_json_is_parse_failure(api: FakeApi) -> None:
    api.doc_body = b"<html>not json</html>"
    err = (await DocumentCache(DOC_URL, api.client()).get()).unwrap_err()
    assert err.code is ErrorCode.PARSE_ERROR
    assert err.message.startswith("Invalid JSON in Swagger spec")


@pytest.mark.asyncio
async def test_failure_is_not_memoized(api: FakeApi) -> None:
    cache = DocumentCache(DOC_URL, api.client())
    api.doc_status = 500
    assert (await cache.get()).is_err()
    assert not cache.is_loaded

    api.doc_status = 200
    assert (await cache.get()).is_ok()
    assert len(api.doc_requests) == 2


@pytest.mark.asyncio
async def test_transport_error_is_fetch_failure() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    cache = DocumentCache(DOC_URL, HttpClient(transport=httpx.MockTransport(refuse)))
    err = (await cache.get()).unwrap_err()
    assert err.code is ErrorCode.FETCH_FAILED
    assert err.message == "Failed to fetch Swagger spec: connection refused"


@pytest.mark.asyncio
async def test_any_json_value_is_accepted(api: FakeApi) -> None:
    api.doc_body = orjson.dumps([1, 2, 3])
    doc = (await DocumentCache(DOC_URL, api.client()).get()).unwrap()
    assert doc.raw == [1, 2, 3]
    assert doc.paths == {}
