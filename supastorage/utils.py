"""Shared helpers for turning caller input into request bodies.

Key utilities:
- Data type coercion (bytes, str, BinaryIO)
- JSON body encoding for strings, mappings and pydantic models
- Content type guessing from object names
- Whole-file reads for upload bodies

Example usage:
    >>> from supastorage.utils import encode_json_body
    >>> encode_json_body({"prefixes": ["bitcoin.pdf"]})
    b'{"prefixes": ["bitcoin.pdf"]}'
"""

from __future__ import annotations

import asyncio
import io
import json
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO

from pydantic import BaseModel

from .errors import FileReadError

if TYPE_CHECKING:
    from .errors import PathLike

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def coerce_to_bytes(data: bytes | bytearray | str | BinaryIO) -> bytes:
    """Coerce supported input types to raw bytes.

    Handles bytes, strings (UTF-8 encoded), and file-like objects.

    Raises:
        TypeError: If data type is not supported.

    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")

    if hasattr(data, "read"):
        result = data.read()

        if hasattr(data, "seek"):
            try:
                data.seek(0)
            except (OSError, io.UnsupportedOperation):
                pass

        if isinstance(result, str):
            return result.encode("utf-8")
        if isinstance(result, (bytes, bytearray)):
            return bytes(result)
        message = f"Unsupported stream payload type: {type(result).__name__}"
        raise TypeError(message)

    message = f"Unsupported data type: {type(data).__name__}"
    raise TypeError(message)


def encode_json_body(body: str | bytes | BaseModel | Any) -> bytes:
    """Encode a JSON request body.

    Strings and bytes are passed through untouched so callers can send
    hand-written documents. Pydantic models are dumped by alias without
    unset optional fields; anything else goes through ``json.dumps``.

    """
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    return json.dumps(body).encode("utf-8")


def guess_content_type(object_name: str) -> str:
    """Guess the MIME type of an object from its name.

    Example:
        >>> guess_content_type("test/bitcoin.pdf")
        'application/pdf'
        >>> guess_content_type("blob")
        'application/octet-stream'

    """
    content_type, _ = mimetypes.guess_type(object_name, strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


def read_file_body(file_path: PathLike) -> bytes:
    """Read a whole local file to use as a request body.

    Raises:
        FileReadError: If the path cannot be opened or read.

    """
    path = Path(file_path)
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except FileNotFoundError as exc:
        raise FileReadError(path, reason="Local file not found") from exc
    except IsADirectoryError as exc:
        raise FileReadError(path, reason="Local path is a directory") from exc
    except OSError as exc:
        raise FileReadError(path, reason=f"Cannot read local file ({exc.strerror})") from exc


async def read_file_body_async(file_path: PathLike) -> bytes:
    """Read a whole local file without blocking the event loop."""
    return await asyncio.to_thread(read_file_body, file_path)
