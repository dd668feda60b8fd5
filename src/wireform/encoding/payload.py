# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Flatten request data into an ordered field list.

Only arrays are expanded, and only one level deep:

    {"tags": ["a", "b"]}               -> tags[]=a, tags[]=b
    {"rows": [{"x": 1}, {"x": 2}]}     -> rows[0][x]=1, rows[1][x]=2

Top-level mappings are kept as a single field. `None` values produce no field.
An attachment anywhere in the data, however deeply nested, sets `has_attachment`;
one inside a field that is not expanded is rendered by its filename.
Field order always follows the iteration order of the input.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .attachments import is_attachment

Field = tuple[str, Any]
RequestData = Mapping[str, Any]


@dataclass(frozen=True)
class EncodedPayload:
    has_attachment: bool
    fields: tuple[Field, ...]

    def keys(self) -> list[str]:
        return [key for key, _ in self.fields]


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_plain_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def _contains_attachment(value: Any) -> bool:
    if is_attachment(value):
        return True
    if isinstance(value, Mapping):
        return any(_contains_attachment(nested) for nested in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(_contains_attachment(nested) for nested in value)
    return False


def encode_payload(data: RequestData | None) -> EncodedPayload | None:
    """Encode `data`; returns None when there is no data at all."""
    if data is None:
        return None

    fields: list[Field] = []
    has_attachment = False

    def append(key: str, value: Any) -> None:
        nonlocal has_attachment
        if value is None:
            return
        has_attachment = has_attachment or _contains_attachment(value)
        fields.append((key, value))

    for attr, value in data.items():
        if _is_array(value):
            for index, nested in enumerate(value):
                if _is_plain_object(nested):
                    for prop, prop_value in nested.items():
                        append(f"{attr}[{index}][{prop}]", prop_value)
                else:
                    append(f"{attr}[]", nested)
        else:
            append(attr, value)

    return EncodedPayload(has_attachment=has_attachment, fields=tuple(fields))


__all__ = ["EncodedPayload", "Field", "RequestData", "encode_payload"]
