# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

from namespace_config.errors import (
    DefaultNamespaceDeletionError,
    NamespaceError,
    NamespaceNotFoundError,
    NamespaceTransportError,
    NamespaceUnavailableError,
    NamespaceValidationError,
)
from namespace_config.model import NamespaceConfigModel
from namespace_config.schemas.namespace import Namespace, NamespaceCreate
from namespace_config.services.namespace_service import HttpNamespaceService, NamespaceService

__all__ = [
    "DefaultNamespaceDeletionError",
    "HttpNamespaceService",
    "Namespace",
    "NamespaceConfigModel",
    "NamespaceCreate",
    "NamespaceError",
    "NamespaceNotFoundError",
    "NamespaceService",
    "NamespaceTransportError",
    "NamespaceUnavailableError",
    "NamespaceValidationError",
]
