"""Asynchronous client for a Supabase-style object storage API.

The package wraps request construction, header injection and response
deserialization for the bucket and object endpoints of the storage service.

Core Components:
    - Storage: Facade holding the configuration and producing builders
    - StorageConfig: Base URL and API key, from literals or the environment
    - RequestBuilder: Immutable accumulator of method, path, headers and body
    - Executor: Sends one request, returning the raw or a typed response

Quick Start:

    >>> import asyncio
    >>> from supastorage import BucketDetails, Storage, StorageConfig
    >>>
    >>> async def main():
    ...     storage = Storage.new_with_config(StorageConfig.from_environment())
    ...     details = await (
    ...         storage.from_()
    ...         .get_bucket_details("thefux")
    ...         .execute_from(BucketDetails)
    ...     )
    ...     response = await storage.from_().get_object("thefux", "test/bitcoin.pdf").execute()
    ...     if response.status_code == 200:
    ...         data = response.content
    ...
    >>> asyncio.run(main())

Exception Handling:

    >>> from supastorage import StorageApiError, TransportError
    >>> try:
    ...     await storage.from_().get_buckets().execute_from(list[BucketDetails])
    ... except StorageApiError as exc:
    ...     print(exc.status_code, exc.detail)
    ... except TransportError:
    ...     print("Service unreachable")

"""

import logging

from .builder import RequestBuilder
from .config import API_KEY_ENV, URL_ENV, StorageConfig
from .errors import (
    ConfigError,
    DeserializationError,
    FileReadError,
    InvalidPathError,
    InvalidRequestError,
    PathLike,
    StorageApiError,
    StorageError,
    TransportError,
)
from .executor import Executor
from .models import (
    ApiErrorBody,
    BucketDetails,
    BucketUpdate,
    FileObject,
    FileOptions,
    ImageFormat,
    ListOptions,
    MessageResponse,
    MoveCopyObject,
    NewBucket,
    ObjectKey,
    Resize,
    SignedUploadUrl,
    SignedUrl,
    SignedUrls,
    SortBy,
    Transform,
)
from .request import HttpMethod, PendingRequest
from .storage import Storage

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "API_KEY_ENV",
    "URL_ENV",
    "ApiErrorBody",
    "BucketDetails",
    "BucketUpdate",
    "ConfigError",
    "DeserializationError",
    "Executor",
    "FileObject",
    "FileOptions",
    "FileReadError",
    "HttpMethod",
    "ImageFormat",
    "InvalidPathError",
    "InvalidRequestError",
    "ListOptions",
    "MessageResponse",
    "MoveCopyObject",
    "NewBucket",
    "ObjectKey",
    "PathLike",
    "PendingRequest",
    "RequestBuilder",
    "Resize",
    "SignedUploadUrl",
    "SignedUrl",
    "SignedUrls",
    "SortBy",
    "Storage",
    "StorageApiError",
    "StorageConfig",
    "StorageError",
    "TransportError",
    "Transform",
]
