"""Shared fixtures: a mock HTTP transport serving a document and a fake API."""

from __future__ import annotations

import asyncio

import httpx
import orjson
import pytest

from swagger_mcp.foundation.config import SwaggerConfig, clear_settings_cache
from swagger_mcp.http import HttpClient
from swagger_mcp.mcp import SwaggerOperations
from swagger_mcp.observability import configure_logging

DOC_URL = "https://docs.example.com:8443/specs/openapi.json"
DOC_ORIGIN = "https://docs.example.com:8443"

PETSTORE: dict[str, object] = {
    "openapi": "3.0.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "paths": {
        "/ping": {"get": {}},
        "/pets": {"get": {"operationId": "listPets"}, "post": {"operationId": "createPet"}},
        "/pets/{petId}": {"get": {"operationId": "getPet"}, "delete": {"operationId": "deletePet"}},
        "/owners/{ownerId}/pets/{petId}": {"get": {}},
    },
}


class FakeApi:
    """Mock transport: serves the document at DOC_URL and records every other request."""

    def __init__(self, document: object = PETSTORE) -> None:
        self.document = document
        self.doc_status = 200
        self.doc_body: bytes | None = None
        self.doc_delay = 0.0
        self.api_status = 200
        self.api_body: bytes = b'{"ok": true}'
        self.api_error: Exception | None = None
        self.doc_requests: list[httpx.Request] = []
        self.api_requests: list[httpx.Request] = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == DOC_URL:
            self.doc_requests.append(request)
            if self.doc_delay:
                await asyncio.sleep(self.doc_delay)
            body = self.doc_body if self.doc_body is not None else orjson.dumps(self.document)
            return httpx.Response(self.doc_status, content=body)
        self.api_requests.append(request)
        if self.api_error is not None:
            raise self.api_error
        return httpx.Response(self.api_status, content=self.api_body)

    def client(self) -> HttpClient:
        return HttpClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.api_requests[-1]


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    configure_logging(format="none")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> object:
    """Isolate tests from the caller's SWAGGER_* environment."""
    for var in ("SWAGGER_URL", "AUTH_KEY"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def config() -> SwaggerConfig:
    return SwaggerConfig(document_url=DOC_URL)


@pytest.fixture
def ops(api: FakeApi, config: SwaggerConfig) -> SwaggerOperations:
    return SwaggerOperations.from_config(config, api.client())
