# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

"""Exceptions raised by the namespace client.

Callers branch on the exception class rather than on message text.
"""

from __future__ import annotations

DEFAULT_NAMESPACE_DELETION_MESSAGE = "Cannot delete default Namespace"
INVALID_FORMAT_MESSAGE = "Namespace configuration format is incorrect"
MISSING_FIELDS_MESSAGE = f"{INVALID_FORMAT_MESSAGE}: missing required fields"


class NamespaceError(Exception):
    """Base exception for namespace client operations."""


class NamespaceTransportError(NamespaceError):
    """Raised when the namespace API answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NamespaceNotFoundError(NamespaceTransportError):
    """Raised when the requested namespace does not exist (HTTP 404)."""


class DefaultNamespaceDeletionError(NamespaceTransportError):
    """Raised when the server refuses to delete its default namespace.

    The server signals this by answering ``DELETE`` with a bare 400, so any
    400 on delete is reported as this error.
    """

    def __init__(self, message: str = DEFAULT_NAMESPACE_DELETION_MESSAGE) -> None:
        super().__init__(message, status_code=400)


class NamespaceUnavailableError(NamespaceTransportError):
    """Raised when the namespace API is unreachable."""


class NamespaceValidationError(NamespaceError):
    """Raised when imported namespace configuration is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
