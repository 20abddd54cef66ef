# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

"""HTTP adapter for the remote namespace API.

This is the only module that talks to the namespace API over HTTP. Callers
work with ``Namespace`` models and the exceptions in
``namespace_config.errors``; no ``httpx`` types leak out of here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from namespace_config.config import get_settings
from namespace_config.errors import (
    DefaultNamespaceDeletionError,
    NamespaceNotFoundError,
    NamespaceTransportError,
    NamespaceUnavailableError,
)
from namespace_config.schemas.common import ErrorResponse
from namespace_config.schemas.namespace import Namespace, NamespaceCreate

logger = logging.getLogger(__name__)

_NAMESPACE = TypeAdapter(Namespace)
_NAMESPACE_LIST = TypeAdapter(list[Namespace])
_CODE_LIST = TypeAdapter(list[str])

# Maps an HTTP status to the exception raised for it on a particular call.
StatusErrors = dict[int, Callable[[str], NamespaceTransportError]]

# ---------------------------------------------------------------------------
# Protocol (abstract interface)
# ---------------------------------------------------------------------------


class NamespaceService(Protocol):
    """Abstract interface for namespace CRUD calls."""

    async def list_all(self) -> list[Namespace]:
        """Return every namespace known to the server."""

    async def list_all_codes(self) -> list[str]:
        """Return the codes of every namespace."""

    async def get_by_id(self, namespace_id: str) -> Namespace:
        """Return the namespace with *namespace_id*."""

    async def get_by_code(self, code: str) -> Namespace:
        """Return the namespace with *code*."""

    async def create(self, data: NamespaceCreate) -> Namespace:
        """Create a namespace. Any ``id`` on *data* is not sent."""

    async def update(self, namespace_id: str, data: Namespace) -> Namespace:
        """Replace the namespace stored under *namespace_id*."""

    async def delete(self, namespace_id: str) -> None:
        """Delete the namespace with *namespace_id*."""

    async def close(self) -> None:
        """Release any underlying connections."""


# ---------------------------------------------------------------------------
# Implementation
# ---------------------------------------------------------------------------


def _error_message(resp: httpx.Response) -> str:
    """Extract the server's error message, falling back to the HTTP status."""
    try:
        message = ErrorResponse.model_validate_json(resp.content).message
    except ValueError:
        message = None
    return message or f"API request failed: {resp.status_code} {resp.reason_phrase}"


def _decode(resp: httpx.Response, adapter: TypeAdapter[Any]) -> Any:
    try:
        return adapter.validate_json(resp.content)
    except ValueError as exc:
        raise NamespaceTransportError(
            f"Malformed response from {resp.request.method} {resp.request.url.path}",
            status_code=resp.status_code,
        ) from exc


class HttpNamespaceService:
    """``NamespaceService`` implementation backed by the namespace REST API.

    Parameters
    ----------
    base_url:
        Scheme and host of the API server (e.g. ``http://localhost:18080``).
        Falls back to ``settings.base_url``.
    api_root:
        Path of the namespace resource. Falls back to ``settings.api_root``.
    timeout:
        Request timeout in seconds. Falls back to ``settings.request_timeout``.
    transport:
        Optional ``httpx`` transport, mainly for tests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        api_root: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.base_url).rstrip("/")
        self._root = (api_root or settings.api_root).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HttpNamespaceService:
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _path(self, *segments: str) -> str:
        """Join *segments* onto the resource root, escaping each one."""
        return "/".join([self._root, *(quote(s, safe="") for s in segments)])

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        status_errors: StatusErrors | None = None,
    ) -> httpx.Response:
        """Send a request and translate HTTP errors to domain exceptions."""
        try:
            resp = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            raise NamespaceUnavailableError(
                f"Namespace API request timed out: {method} {path}"
            ) from exc
        except httpx.TransportError as exc:
            raise NamespaceUnavailableError(
                f"Cannot connect to namespace API at {self._base_url}"
            ) from exc

        if resp.is_success:
            return resp
        if status_errors and resp.status_code in status_errors:
            raise status_errors[resp.status_code](_error_message(resp))
        message = _error_message(resp)
        if resp.status_code == 404:
            raise NamespaceNotFoundError(message, status_code=404)
        raise NamespaceTransportError(message, status_code=resp.status_code)

    async def _call(
        self,
        action: str,
        method: str,
        path: str,
        *,
        adapter: TypeAdapter[Any] | None = None,
        json: dict | None = None,
        status_errors: StatusErrors | None = None,
    ) -> Any:
        """Run one API call, logging the failure once before re-raising it."""
        try:
            resp = await self._send(method, path, json=json, status_errors=status_errors)
            return _decode(resp, adapter) if adapter is not None else None
        except NamespaceTransportError as exc:
            logger.error("Failed to %s: %s", action, exc)
            raise

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_all(self) -> list[Namespace]:
        return await self._call(
            "get Namespace list", "GET", self._root, adapter=_NAMESPACE_LIST
        )

    async def list_all_codes(self) -> list[str]:
        return await self._call(
            "get Namespace codes list", "GET", self._path("codes"), adapter=_CODE_LIST
        )

    async def get_by_id(self, namespace_id: str) -> Namespace:
        return await self._call(
            f"get Namespace[{namespace_id}] details",
            "GET",
            self._path(namespace_id),
            adapter=_NAMESPACE,
        )

    async def get_by_code(self, code: str) -> Namespace:
        return await self._call(
            f"get Namespace[{code}] details",
            "GET",
            self._path("code", code),
            adapter=_NAMESPACE,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: NamespaceCreate) -> Namespace:
        return await self._call(
            "create Namespace",
            "POST",
            self._root,
            adapter=_NAMESPACE,
            json=data.model_dump(exclude={"id"}),
        )

    async def update(self, namespace_id: str, data: Namespace) -> Namespace:
        return await self._call(
            f"update Namespace[{namespace_id}]",
            "PUT",
            self._path(namespace_id),
            adapter=_NAMESPACE,
            json=data.model_dump(exclude_none=True),
        )

    async def delete(self, namespace_id: str) -> None:
        """Delete a namespace.

        The server answers 400 when asked to delete its default namespace;
        that status is reported as ``DefaultNamespaceDeletionError``.
        """
        await self._call(
            f"delete Namespace[{namespace_id}]",
            "DELETE",
            self._path(namespace_id),
            status_errors={400: lambda _message: DefaultNamespaceDeletionError()},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
