# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request data encoders."""

from .attachments import (
    Attachment,
    AttachmentDescriptor,
    Blob,
    as_attachment,
    is_attachment,
    to_file_tuple,
)
from .payload import EncodedPayload, RequestData, encode_payload
from .query import build_query_string, query_fields
from .values import json_dumps, stringify

__all__ = [
    "Attachment",
    "AttachmentDescriptor",
    "Blob",
    "EncodedPayload",
    "RequestData",
    "as_attachment",
    "build_query_string",
    "encode_payload",
    "is_attachment",
    "json_dumps",
    "query_fields",
    "stringify",
    "to_file_tuple",
]
