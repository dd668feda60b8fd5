# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Case-insensitive header helpers.

HTTP header field names are case-insensitive (RFC 9110). Request headers travel through
wireform as plain dicts so that callers see exactly the casing they supplied; these
helpers read and edit them without caring about case.
"""

from __future__ import annotations

from collections.abc import Mapping


def has_header(headers: Mapping[object, object] | None, name: str) -> bool:
    lower = name.lower()
    return any(key is not None and str(key).lower() == lower for key in (headers or {}))


def without_header(headers: Mapping[str, str] | None, name: str) -> dict[str, str]:
    """Return a copy of `headers` with every casing of `name` removed."""
    lower = name.lower()
    return {key: value for key, value in (headers or {}).items() if key.lower() != lower}


def set_default_header(headers: dict[str, str], name: str, value: str) -> dict[str, str]:
    """Set `name` unless some casing of it is already present."""
    if not has_header(headers, name):
        headers[name] = value
    return headers


__all__ = ["has_header", "set_default_header", "without_header"]
