# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    message: str | None = None
