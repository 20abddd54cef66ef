# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from urllib.parse import unquote

import httpx
import pytest

from namespace_config.model import NamespaceConfigModel
from namespace_config.services.namespace_service import HttpNamespaceService

BASE_URL = "http://testserver"
API_ROOT = "/api/namespaces"


class FakeNamespaceServer:
    """In-memory stand-in for the namespace API, served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.namespaces: dict[str, dict[str, object]] = {}
        self.requests: list[httpx.Request] = []
        self.default_id: str | None = None
        self._next_id = 1

    def add(self, **fields: object) -> dict[str, object]:
        """Store a namespace directly, assigning an id if none is given."""
        record = dict(fields)
        record.setdefault("id", self._new_id())
        self.namespaces[str(record["id"])] = record
        return record

    def _new_id(self) -> str:
        value = str(self._next_id)
        self._next_id += 1
        return value

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def _not_found(self, what: str) -> httpx.Response:
        return httpx.Response(404, json={"message": f"Namespace not found: {what}"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode("ascii").split("?")[0]
        if not path.startswith(API_ROOT):
            return httpx.Response(404)
        parts = [unquote(p) for p in path[len(API_ROOT):].split("/") if p]
        method = request.method

        if method == "GET" and not parts:
            return httpx.Response(200, json=list(self.namespaces.values()))
        if method == "GET" and parts == ["codes"]:
            return httpx.Response(200, json=[ns["code"] for ns in self.namespaces.values()])
        if method == "GET" and len(parts) == 2 and parts[0] == "code":
            for ns in self.namespaces.values():
                if ns["code"] == parts[1]:
                    return httpx.Response(200, json=ns)
            return self._not_found(parts[1])
        if method == "GET" and len(parts) == 1:
            if parts[0] not in self.namespaces:
                return self._not_found(parts[0])
            return httpx.Response(200, json=self.namespaces[parts[0]])
        if method == "POST" and not parts:
            body = json.loads(request.content)
            record = {**body, "id": self._new_id()}
            self.namespaces[record["id"]] = record
            return httpx.Response(201, json=record)
        if method == "PUT" and len(parts) == 1:
            if parts[0] not in self.namespaces:
                return self._not_found(parts[0])
            record = {**json.loads(request.content), "id": parts[0]}
            self.namespaces[parts[0]] = record
            return httpx.Response(200, json=record)
        if method == "DELETE" and len(parts) == 1:
            if parts[0] == self.default_id:
                return httpx.Response(400, json={"message": "default namespace is protected"})
            if self.namespaces.pop(parts[0], None) is None:
                return self._not_found(parts[0])
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def fake_server() -> FakeNamespaceServer:
    return FakeNamespaceServer()


@pytest.fixture
async def service(fake_server: FakeNamespaceServer) -> AsyncIterator[HttpNamespaceService]:
    """HTTP service wired to the fake server."""
    svc = HttpNamespaceService(
        BASE_URL,
        api_root=API_ROOT,
        transport=httpx.MockTransport(fake_server.handler),
    )
    yield svc
    await svc.close()


@pytest.fixture
def model(service: HttpNamespaceService) -> NamespaceConfigModel:
    return NamespaceConfigModel(service)


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def make_namespace(
    *,
    name: str = "Test Namespace",
    code: str = "test-ns",
    description: str = "A test namespace",
    id: str | None = None,
) -> dict[str, object]:
    """Return fields suitable for constructing a Namespace model."""
    fields: dict[str, object] = {"name": name, "code": code, "description": description}
    if id is not None:
        fields["id"] = id
    return fields
