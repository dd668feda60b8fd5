# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers."""

from __future__ import annotations

from urllib.parse import urlsplit


def join_path(base_path: str, path: str) -> str:
    """
    Prefix `path` with the configured base path.

    This is plain concatenation: `("/api", "/users") -> "/api/users"`. Callers own
    the slashes on both sides.
    """
    return f"{base_path or ''}{path or ''}"


def append_query(url: str, query: str) -> str:
    """Append an already-encoded query string, keeping any query present in `url`."""
    if not query:
        return url
    separator = "&" if urlsplit(url).query else ("" if url.endswith("?") else "?")
    return f"{url}{separator}{query}"


__all__ = ["append_query", "join_path"]
