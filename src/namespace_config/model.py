# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

"""Stateful namespace configuration model.

Wraps a ``NamespaceService`` and keeps a local copy of the namespaces it has
seen, plus the namespace currently being viewed. The model is an ordinary
object: whoever composes the client creates one and holds on to it.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from namespace_config.errors import (
    INVALID_FORMAT_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    NamespaceError,
    NamespaceValidationError,
)
from namespace_config.schemas.namespace import REQUIRED_FIELDS, Namespace, NamespaceCreate
from namespace_config.services.namespace_service import HttpNamespaceService, NamespaceService

logger = logging.getLogger(__name__)


class NamespaceConfigModel:
    """CRUD operations and local state for namespace configuration.

    Attributes
    ----------
    namespaces:
        Namespaces from the last successful load, updated in place by
        ``save`` and ``delete``.
    current_namespace:
        The namespace last loaded by id or code, or ``None``.
    """

    def __init__(self, service: NamespaceService) -> None:
        self.service = service
        self.namespaces: list[Namespace] = []
        self.current_namespace: Namespace | None = None

    @classmethod
    def from_settings(cls) -> NamespaceConfigModel:
        """Build a model talking HTTP to the API configured in settings."""
        return cls(HttpNamespaceService())

    async def __aenter__(self) -> NamespaceConfigModel:
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self.service.close()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_all(self) -> list[Namespace]:
        """Fetch every namespace and replace the local list with the result."""
        try:
            self.namespaces = await self.service.list_all()
        except NamespaceError:
            logger.warning("Failed to load Namespace list")
            raise
        return self.namespaces

    async def load_by_id(self, namespace_id: str) -> Namespace:
        try:
            self.current_namespace = await self.service.get_by_id(namespace_id)
        except NamespaceError:
            logger.warning("Failed to load Namespace details for id %s", namespace_id)
            raise
        return self.current_namespace

    async def load_by_code(self, code: str) -> Namespace:
        try:
            self.current_namespace = await self.service.get_by_code(code)
        except NamespaceError:
            logger.warning("Failed to load Namespace details for code %s", code)
            raise
        return self.current_namespace

    async def all_codes(self) -> list[str]:
        try:
            return await self.service.list_all_codes()
        except NamespaceError:
            logger.warning("Failed to load Namespace codes")
            raise

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def save(self, data: Namespace, is_import: bool = False) -> Namespace:
        """Create or update a namespace and upsert the result locally.

        Imports always create a new namespace, ignoring any ``id`` carried
        over from the exported configuration. Otherwise a namespace with an
        ``id`` is updated and one without is created.
        """
        try:
            if is_import:
                result = await self.service.create(
                    NamespaceCreate.model_validate(data.model_dump(exclude={"id"}))
                )
            elif data.id:
                result = await self.service.update(data.id, data)
            else:
                result = await self.service.create(data)
        except NamespaceError:
            logger.warning("Failed to save Namespace %s", data.code)
            raise

        for index, namespace in enumerate(self.namespaces):
            if namespace.id == result.id:
                self.namespaces[index] = result
                break
        else:
            self.namespaces.append(result)
        return result

    async def delete(self, namespace_id: str) -> None:
        """Delete a namespace remotely, then drop it from local state."""
        try:
            await self.service.delete(namespace_id)
        except NamespaceError:
            logger.warning("Failed to delete Namespace %s", namespace_id)
            raise

        self.namespaces = [ns for ns in self.namespaces if ns.id != namespace_id]
        if self.current_namespace is not None and self.current_namespace.id == namespace_id:
            self.current_namespace = None

    # ------------------------------------------------------------------
    # Local lookups
    # ------------------------------------------------------------------

    def find_by_id(self, namespace_id: str) -> Namespace | None:
        return next((ns for ns in self.namespaces if ns.id == namespace_id), None)

    def find_by_code(self, code: str) -> Namespace | None:
        return next((ns for ns in self.namespaces if ns.code == code), None)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_to_json(self, namespace: Namespace) -> str:
        return namespace.model_dump_json(indent=2, exclude_none=True)

    def import_from_json(self, text: str) -> Namespace:
        """Parse exported namespace configuration.

        Raises ``NamespaceValidationError`` if *text* is not a JSON object
        or lacks a non-empty name, code or description.
        """
        try:
            raw = json.loads(text)
        except ValueError as exc:
            logger.warning("Failed to parse Namespace JSON: %s", exc)
            raise NamespaceValidationError(INVALID_FORMAT_MESSAGE) from exc

        if not isinstance(raw, dict):
            logger.warning("Failed to parse Namespace JSON: not an object")
            raise NamespaceValidationError(INVALID_FORMAT_MESSAGE)
        if not all(raw.get(field) for field in REQUIRED_FIELDS):
            logger.warning("Namespace JSON is missing required fields")
            raise NamespaceValidationError(MISSING_FIELDS_MESSAGE)

        try:
            return Namespace.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Failed to parse Namespace JSON: %s", exc)
            raise NamespaceValidationError(INVALID_FORMAT_MESSAGE) from exc
