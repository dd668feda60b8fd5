# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Attachment value types accepted in request data."""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO
from urllib.parse import unquote, urlparse

DESCRIPTOR_KEYS = frozenset({"uri", "name", "type"})

FileTuple = tuple[str, "bytes | BinaryIO", "str | None"]


@dataclass(frozen=True)
class Blob:
    """In-memory or file-like binary content to upload."""

    content: bytes | BinaryIO
    filename: str = "blob"
    content_type: str | None = None

    def to_file_tuple(self) -> FileTuple:
        content_type = self.content_type or mimetypes.guess_type(self.filename)[0] or "application/octet-stream"
        return (self.filename, self.content, content_type)


@dataclass(frozen=True)
class AttachmentDescriptor:
    """
    A reference to a local file: `uri` is a filesystem path or a `file://` URI.

    The file is read when the request is sent, not when the descriptor is built.
    """

    uri: str
    name: str
    type: str

    @property
    def path(self) -> Path:
        parsed = urlparse(self.uri)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path))
        return Path(self.uri)

    def to_file_tuple(self) -> FileTuple:
        return (self.name, self.path.read_bytes(), self.type or None)


Attachment = Blob | AttachmentDescriptor


def is_attachment(value: Any) -> bool:
    """Return True for values that force a multipart body."""
    return isinstance(value, (Blob, AttachmentDescriptor, bytes, bytearray, memoryview))


def attachment_name(value: Any) -> str:
    """The filename an attachment is sent under."""
    if isinstance(value, Blob):
        return value.filename
    if isinstance(value, AttachmentDescriptor):
        return value.name
    return "blob"


def as_attachment(value: Mapping[str, Any]) -> AttachmentDescriptor:
    """Convert a `{uri, name, type}` mapping into an AttachmentDescriptor."""
    keys = set(value)
    if keys != DESCRIPTOR_KEYS:
        raise ValueError(f"attachment descriptor needs exactly {sorted(DESCRIPTOR_KEYS)}, got {sorted(keys)}")
    return AttachmentDescriptor(uri=str(value["uri"]), name=str(value["name"]), type=str(value["type"]))


def to_file_tuple(value: Any) -> FileTuple:
    """Render an attachment value as an httpx `files` entry."""
    if isinstance(value, (Blob, AttachmentDescriptor)):
        return value.to_file_tuple()
    return Blob(bytes(value)).to_file_tuple()


__all__ = [
    "Attachment",
    "AttachmentDescriptor",
    "Blob",
    "DESCRIPTOR_KEYS",
    "as_attachment",
    "attachment_name",
    "is_attachment",
    "to_file_tuple",
]
