# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query-string serialization using bracket array notation."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from .attachments import is_attachment
from .payload import RequestData, encode_payload
from .values import stringify

logger = logging.getLogger(__name__)


def query_fields(data: RequestData | None) -> list[tuple[str, str]]:
    """Return the ordered (key, value) pairs for a GET query string."""
    encoded = encode_payload(data)
    if encoded is None:
        return []

    pairs: list[tuple[str, str]] = []
    for key, value in encoded.fields:
        if is_attachment(value):
            logger.warning("Dropping attachment field %r from query string", key)
            continue
        pairs.append((key, stringify(value)))
    return pairs


def build_query_string(fields: list[tuple[str, str]]) -> str:
    """Percent-encode ordered pairs, `key[]` repeated once per element."""
    return urlencode(list(fields))


__all__ = ["build_query_string", "query_fields"]
