"""Pydantic models for the storage service's JSON documents.

Request models are dumped by alias with unset optional fields left out.
Response models ignore fields they do not declare so newer service
versions keep deserializing.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NewBucket(_WireModel):
    """Body of a create-bucket request."""

    name: str = Field(..., min_length=1)
    id: Optional[str] = None
    public: Optional[bool] = None
    file_size_limit: Optional[int] = None
    allowed_mime_types: Optional[list[str]] = None


class BucketUpdate(_WireModel):
    """Body of an update-bucket request."""

    public: bool
    file_size_limit: Optional[int] = None
    allowed_mime_types: Optional[list[str]] = None


class BucketDetails(_WireModel):
    """Bucket as returned by the bucket endpoints."""

    id: str
    name: str
    public: bool
    owner: Optional[str] = None
    file_size_limit: Optional[int] = None
    allowed_mime_types: Optional[list[str]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SortBy(_WireModel):
    column: str = "name"
    order: str = "asc"


class ListOptions(_WireModel):
    """Body of a list-objects request."""

    prefix: str = ""
    limit: int = Field(100, ge=1)
    offset: int = Field(0, ge=0)
    sort_by: Optional[SortBy] = Field(None, alias="sortBy")
    search: Optional[str] = None


class FileObject(_WireModel):
    """Entry of a list-objects response; folders have no ``id``."""

    name: str
    id: Optional[str] = None
    bucket_id: Optional[str] = None
    updated_at: Optional[str] = None
    created_at: Optional[str] = None
    last_accessed_at: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class MessageResponse(_WireModel):
    """Plain acknowledgement returned by mutating endpoints."""

    message: str


class ObjectKey(_WireModel):
    """Acknowledgement of an upload, naming the stored key."""

    key: str = Field(..., alias="Key")


class SignedUrl(_WireModel):
    """Signed download URL for a single object."""

    signed_url: str = Field(..., alias="signedURL")


class SignedUrls(_WireModel):
    """Entry of a batch signed-URL response."""

    path: Optional[str] = None
    signed_url: Optional[str] = Field(None, alias="signedURL")
    error: Optional[str] = None


class SignedUploadUrl(_WireModel):
    """Signed upload URL, including its token query string."""

    url: str


class MoveCopyObject(_WireModel):
    """Body of a move or copy request."""

    bucket_id: str = Field(..., alias="bucketId")
    source_key: str = Field(..., alias="sourceKey")
    destination_key: str = Field(..., alias="destinationKey")


class Resize(str, Enum):
    """Resize mode of an image transformation."""

    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"


class ImageFormat(str, Enum):
    """Output format of an image transformation."""

    ORIGIN = "origin"
    AVIF = "avif"


class Transform(_WireModel):
    """Image transformation applied by the render endpoint.

    ``quality`` ranges from 20 to 100 on the service side (default 80);
    ``resize`` defaults to cover. Leaving ``format`` unset lets the service
    pick a modern format such as WebP.
    """

    format: Optional[ImageFormat] = None
    height: Optional[int] = Field(None, ge=0)
    quality: Optional[int] = Field(None, ge=0, le=100)
    resize: Optional[Resize] = None
    width: Optional[int] = Field(None, ge=0)

    def as_query(self) -> list[tuple[str, str]]:
        """Return the set fields as query pairs in declaration order."""
        pairs = []
        for name, value in self.model_dump(mode="json", exclude_none=True).items():
            pairs.append((name, str(value)))
        return pairs


class FileOptions(_WireModel):
    """Header options for uploads to a signed URL.

    ``cache_control`` is a number of seconds sent as
    ``cache-control: max-age=<seconds>``; ``upsert`` overwrites an existing
    object instead of failing.
    """

    cache_control: Optional[int] = Field(None, ge=0)
    content_type: Optional[str] = None
    upsert: Optional[bool] = None

    def as_headers(self) -> dict[str, str]:
        headers = {}
        if self.cache_control is not None:
            headers["cache-control"] = f"max-age={self.cache_control}"
        if self.content_type is not None:
            headers["content-type"] = self.content_type
        if self.upsert is not None:
            headers["x-upsert"] = "true" if self.upsert else "false"
        return headers


class ApiErrorBody(_WireModel):
    """Error document returned by the service for failed requests."""

    status_code: Union[int, str] = Field(..., alias="statusCode")
    error: str
    message: str
