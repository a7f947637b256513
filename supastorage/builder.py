"""Request builder for the storage API.

A :class:`RequestBuilder` accumulates the method, path, headers, query and
body of a single call. Builders are immutable: every chain method returns a
new builder, so two call chains started from the same facade never share
state. Operations such as :meth:`RequestBuilder.get_object` fix the method
and path for one endpoint and hand back an :class:`~supastorage.executor.Executor`
ready to send.

Example:

    >>> from supastorage import Storage, StorageConfig
    >>> storage = Storage.new_with_config(
    ...     StorageConfig.with_values("https://example.supabase.co/storage/v1", "key"),
    ... )
    >>> pending = storage.from_().get_object("thefux", "test/bitcoin.pdf").build()
    >>> pending.path
    '/object/thefux/test/bitcoin.pdf'

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, BinaryIO

from pydantic import BaseModel

from .errors import ConfigError, InvalidPathError, InvalidRequestError
from .executor import Executor
from .models import FileOptions, ListOptions, MoveCopyObject, NewBucket, Transform
from .path_utils import split_object_path, validate_bucket_name, validate_not_empty
from .request import HttpMethod, PendingRequest
from .utils import (
    coerce_to_bytes,
    encode_json_body,
    guess_content_type,
    read_file_body,
    read_file_body_async,
)

if TYPE_CHECKING:
    import httpx

    from .config import StorageConfig
    from .errors import PathLike

    JsonBody = str | bytes | Mapping[str, Any] | BaseModel

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RequestBuilder:
    """Immutable accumulator for one storage request."""

    config: StorageConfig
    client: httpx.AsyncClient | None = field(default=None, compare=False, repr=False)
    method: HttpMethod = HttpMethod.GET
    path_segments: tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    query: tuple[tuple[str, str], ...] = ()
    body: bytes | None = None

    # Generic chain methods

    def for_bucket(self, name: str) -> RequestBuilder:
        """Target ``/bucket/{name}``."""
        return self.with_path("bucket", validate_bucket_name(name))

    def for_object(self, bucket: str, path: str) -> RequestBuilder:
        """Target ``/object/{bucket}/{path}``."""
        return self.with_path("object", *self._object_segments(bucket, path))

    def with_path(self, *segments: str) -> RequestBuilder:
        """Replace the path with the given raw segments."""
        for segment in segments:
            validate_not_empty(segment)
        return replace(self, path_segments=tuple(segments))

    def with_method(self, method: HttpMethod | str) -> RequestBuilder:
        """Set the HTTP method, given as an enum member or a case-insensitive name.

        Raises:
            InvalidRequestError: If the method is not a supported verb.

        """
        if isinstance(method, HttpMethod):
            return replace(self, method=method)
        try:
            verb = HttpMethod(method.upper())
        except (AttributeError, ValueError) as exc:
            raise InvalidRequestError.unsupported_method(method) from exc
        return replace(self, method=verb)

    def with_header(self, name: str, value: str) -> RequestBuilder:
        """Insert or overwrite a header; names are case-insensitive."""
        headers = dict(self.headers)
        headers[name.lower()] = value
        return replace(self, headers=headers)

    def with_headers(self, headers: Mapping[str, str]) -> RequestBuilder:
        builder = self
        for name, value in headers.items():
            builder = builder.with_header(name, value)
        return builder

    def with_query(self, name: str, value: str) -> RequestBuilder:
        """Append a query parameter."""
        return replace(self, query=(*self.query, (name, str(value))))

    def with_body(self, data: bytes | str | BinaryIO | None) -> RequestBuilder:
        """Attach a raw body, or clear it with ``None``."""
        return replace(self, body=coerce_to_bytes(data) if data is not None else None)

    def with_json(self, body: JsonBody) -> RequestBuilder:
        """Attach a JSON body and the matching content type."""
        return self.with_header("Content-Type", JSON_CONTENT_TYPE).with_body(
            encode_json_body(body),
        )

    def build(self) -> PendingRequest:
        """Freeze the accumulated state into a :class:`PendingRequest`.

        Authorization headers are derived from the configuration here, so
        they reflect the configuration at build time. Headers set explicitly
        on the builder take precedence. A configuration without a key sends
        no credentials.

        Raises:
            ConfigError: If the base URL is empty or the API key is set but
                blank.
            InvalidPathError: If no path has been set.

        """
        base_url = self.config.base_url.strip() if self.config.base_url else ""
        if not base_url:
            raise ConfigError.missing_base_url()
        if not self.config.is_anonymous and not self.config.has_api_key:
            raise ConfigError.empty_api_key()
        if not self.path_segments:
            raise InvalidPathError.not_set()

        headers: dict[str, str] = {}
        if self.config.has_api_key:
            headers["authorization"] = f"Bearer {self.config.api_key}"
            headers["apikey"] = str(self.config.api_key)
        headers.update(self.headers)

        return PendingRequest(
            method=self.method,
            base_url=base_url,
            path_segments=self.path_segments,
            headers=headers,
            query=self.query,
            body=self.body,
        )

    # Buckets

    def get_buckets(self) -> Executor:
        """List all buckets."""
        return self._executor(self.with_path("bucket"))

    def get_bucket_details(self, bucket: str) -> Executor:
        """Retrieve the details of one bucket."""
        return self._executor(self.for_bucket(bucket))

    def create_bucket(self, body: NewBucket | Mapping[str, Any] | str) -> Executor:
        """Create a bucket.

        Args:
            body: A :class:`NewBucket`, a mapping, a raw JSON document, or a
                bare bucket name.

        """
        if isinstance(body, str) and not body.lstrip().startswith("{"):
            body = NewBucket(name=validate_bucket_name(body))
        builder = self.with_method(HttpMethod.POST).with_path("bucket").with_json(body)
        return self._executor(builder)

    def update_bucket(self, bucket: str, body: JsonBody) -> Executor:
        """Update the settings of a bucket (``BucketUpdate`` or raw JSON)."""
        builder = self.with_method(HttpMethod.PUT).for_bucket(bucket).with_json(body)
        return self._executor(builder)

    def empty_bucket(self, bucket: str) -> Executor:
        """Remove every object in a bucket."""
        builder = self.with_method(HttpMethod.POST).with_path(
            "bucket",
            validate_bucket_name(bucket),
            "empty",
        )
        return self._executor(builder)

    def delete_bucket(self, bucket: str) -> Executor:
        """Delete an empty bucket."""
        return self._executor(self.with_method(HttpMethod.DELETE).for_bucket(bucket))

    # Objects

    def get_object(self, bucket: str, path: str) -> Executor:
        """Download an object from a private bucket."""
        return self._executor(self.for_object(bucket, path))

    def update_object(self, bucket: str, path: str, file_path: PathLike) -> Executor:
        """Replace an object with the contents of a local file.

        The whole file is read before anything is sent; streamed bodies are
        not supported.

        Raises:
            InvalidPathError: If the bucket or object path is invalid.
            FileReadError: If the local file cannot be opened or read.

        """
        target = self.for_object(bucket, path)
        return self._upload(target, HttpMethod.PUT, path, read_file_body(file_path))

    async def update_object_async(
        self,
        bucket: str,
        path: str,
        file_path: PathLike,
    ) -> Executor:
        """Variant of :meth:`update_object` reading the file off the event loop."""
        target = self.for_object(bucket, path)
        body = await read_file_body_async(file_path)
        return self._upload(target, HttpMethod.PUT, path, body)

    def upload_object(self, bucket: str, path: str, file_path: PathLike) -> Executor:
        """Upload a local file as a new object."""
        target = self.for_object(bucket, path)
        return self._upload(target, HttpMethod.POST, path, read_file_body(file_path))

    async def upload_object_async(
        self,
        bucket: str,
        path: str,
        file_path: PathLike,
    ) -> Executor:
        target = self.for_object(bucket, path)
        body = await read_file_body_async(file_path)
        return self._upload(target, HttpMethod.POST, path, body)

    def delete_object(self, bucket: str, path: str) -> Executor:
        """Delete a single object."""
        return self._executor(self.with_method(HttpMethod.DELETE).for_object(bucket, path))

    def delete_objects(
        self,
        bucket: str,
        prefixes: Iterable[str] | JsonBody,
    ) -> Executor:
        """Delete several objects at once.

        Args:
            bucket: Bucket holding the objects.
            prefixes: Object names to delete (any iterable, including
                generators), or a raw ``{"prefixes": [...]}`` document.

        """
        raw_document = (str, bytes, bytearray, Mapping, BaseModel)
        if isinstance(prefixes, Iterable) and not isinstance(prefixes, raw_document):
            prefixes = {"prefixes": [validate_not_empty(prefix) for prefix in prefixes]}
        builder = (
            self.with_method(HttpMethod.DELETE)
            .with_path("object", validate_bucket_name(bucket))
            .with_json(prefixes)
        )
        return self._executor(builder)

    def list_objects(
        self,
        bucket: str,
        options: ListOptions | JsonBody | None = None,
    ) -> Executor:
        """Search the objects of a bucket; defaults to the first 100 at the root."""
        builder = (
            self.with_method(HttpMethod.POST)
            .with_path("object", "list", validate_bucket_name(bucket))
            .with_json(options if options is not None else ListOptions())
        )
        return self._executor(builder)

    def download_object(self, bucket: str) -> Executor:
        builder = (
            self.with_method(HttpMethod.POST)
            .with_path("object", validate_bucket_name(bucket))
            .with_header("Content-Type", JSON_CONTENT_TYPE)
        )
        return self._executor(builder)

    def move_object(self, bucket: str, source: str, destination: str) -> Executor:
        """Move an object to another key within the same bucket."""
        return self._move_copy("move", bucket, source, destination)

    def copy_object(self, bucket: str, source: str, destination: str) -> Executor:
        """Copy an object to another key within the same bucket."""
        return self._move_copy("copy", bucket, source, destination)

    # Public objects and transformations

    def get_public_object(self, bucket: str, path: str) -> Executor:
        """Download an object from a public bucket."""
        builder = self.with_path("object", "public", *self._object_segments(bucket, path))
        return self._executor(builder)

    def get_public_object_info(self, bucket: str, path: str) -> Executor:
        builder = self.with_path(
            "object",
            "info",
            "public",
            *self._object_segments(bucket, path),
        )
        return self._executor(builder)

    def get_object_with_transform(
        self,
        bucket: str,
        path: str,
        transform: Transform,
    ) -> Executor:
        """Download an image rendered with the given transformation."""
        builder = self.with_path(
            "render",
            "image",
            "authenticated",
            *self._object_segments(bucket, path),
        )
        for name, value in transform.as_query():
            builder = builder.with_query(name, value)
        return self._executor(builder)

    # Signed URLs

    def create_signed_url(self, bucket: str, path: str, body: JsonBody) -> Executor:
        """Create a signed download URL, e.g. with ``{"expiresIn": 3600}``."""
        builder = (
            self.with_method(HttpMethod.POST)
            .with_path("object", "sign", *self._object_segments(bucket, path))
            .with_json(body)
        )
        return self._executor(builder)

    def create_signed_urls(self, bucket: str, body: JsonBody) -> Executor:
        """Create signed download URLs for ``{"expiresIn": ..., "paths": [...]}``."""
        builder = (
            self.with_method(HttpMethod.POST)
            .with_path("object", "sign", validate_bucket_name(bucket))
            .with_json(body)
        )
        return self._executor(builder)

    def get_object_with_signed_url(self, bucket: str, path: str, token: str) -> Executor:
        """Download an object using a signed URL token."""
        builder = self.with_path(
            "object",
            "sign",
            *self._object_segments(bucket, path),
        ).with_query("token", validate_not_empty(token))
        return self._executor(builder)

    def create_signed_upload_url(self, bucket: str, path: str) -> Executor:
        """Request a URL that allows one upload without further credentials."""
        builder = self.with_method(HttpMethod.POST).with_path(
            "object",
            "upload",
            "sign",
            *self._object_segments(bucket, path),
        )
        return self._executor(builder)

    def upload_to_signed_url(
        self,
        bucket: str,
        path: str,
        token: str,
        data: bytes | str | BinaryIO,
        options: FileOptions | None = None,
    ) -> Executor:
        """Upload a body to a URL obtained from :meth:`create_signed_upload_url`.

        The content type is guessed from ``path`` unless ``options`` sets one.
        """
        builder = self._signed_upload_target(bucket, path, token, options)
        return self._executor(builder.with_body(data))

    async def upload_to_signed_url_async(
        self,
        bucket: str,
        path: str,
        token: str,
        file_path: PathLike,
        options: FileOptions | None = None,
    ) -> Executor:
        """Upload a local file to a signed upload URL."""
        builder = self._signed_upload_target(bucket, path, token, options)
        body = await read_file_body_async(file_path)
        return self._executor(builder.with_body(body))

    # Internal helpers

    def _executor(self, builder: RequestBuilder) -> Executor:
        logger.debug(
            "Prepared %s request for /%s",
            builder.method.value,
            "/".join(builder.path_segments),
        )
        return Executor(builder)

    @staticmethod
    def _object_segments(bucket: str, path: str) -> tuple[str, ...]:
        return (validate_bucket_name(bucket), *split_object_path(path))

    def _upload(
        self,
        target: RequestBuilder,
        method: HttpMethod,
        path: str,
        body: bytes,
    ) -> Executor:
        builder = (
            target.with_method(method)
            .with_header("Content-Type", guess_content_type(path))
            .with_body(body)
        )
        return self._executor(builder)

    def _move_copy(
        self,
        action: str,
        bucket: str,
        source: str,
        destination: str,
    ) -> Executor:
        body = MoveCopyObject(
            bucket_id=validate_bucket_name(bucket),
            source_key="/".join(split_object_path(source)),
            destination_key="/".join(split_object_path(destination)),
        )
        builder = (
            self.with_method(HttpMethod.POST)
            .with_path("object", action)
            .with_json(body)
        )
        return self._executor(builder)

    def _signed_upload_target(
        self,
        bucket: str,
        path: str,
        token: str,
        options: FileOptions | None,
    ) -> RequestBuilder:
        builder = (
            self.with_method(HttpMethod.PUT)
            .with_path("object", "upload", "sign", *self._object_segments(bucket, path))
            .with_query("token", validate_not_empty(token))
            .with_header("Content-Type", guess_content_type(path))
        )
        if options is not None:
            builder = builder.with_headers(options.as_headers())
        return builder
