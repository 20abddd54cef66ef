# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

REQUIRED_FIELDS = ("name", "code", "description")


class NamespaceCreate(BaseModel):
    # Some servers emit numeric ids; keep them as opaque strings.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    code: str
    description: str


class Namespace(NamespaceCreate):
    id: str | None = None
