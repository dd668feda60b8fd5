# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scalar rendering shared by form fields, query strings and JSON bodies."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .attachments import attachment_name, is_attachment


def _json_default(value: Any) -> Any:
    if is_attachment(value):
        return attachment_name(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_dumps(value: Any) -> str:
    """Compact JSON, matching what browsers put on the wire."""
    return json.dumps(value, separators=(",", ":"), default=_json_default, ensure_ascii=False)


def stringify(value: Any) -> str:
    """Render a field value the way a form or query string carries it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return json_dumps(value)


__all__ = ["json_dumps", "stringify"]
