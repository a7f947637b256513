"""Tests for the wire models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from supastorage import (
    ApiErrorBody,
    FileOptions,
    ImageFormat,
    MoveCopyObject,
    NewBucket,
    Resize,
    SignedUrls,
    Transform,
)


class TestFileOptions:
    """Tests for FileOptions.as_headers."""

    def test_all_fields(self) -> None:
        options = FileOptions(cache_control=1000, content_type="application/pdf", upsert=True)
        assert options.as_headers() == {
            "cache-control": "max-age=1000",
            "content-type": "application/pdf",
            "x-upsert": "true",
        }

    def test_unset_fields_are_skipped(self) -> None:
        assert FileOptions().as_headers() == {}
        assert FileOptions(upsert=False).as_headers() == {"x-upsert": "false"}


class TestTransform:
    """Tests for Transform.as_query."""

    def test_enum_values_are_serialized(self) -> None:
        transform = Transform(format=ImageFormat.AVIF, resize=Resize.CONTAIN)
        assert transform.as_query() == [("format", "avif"), ("resize", "contain")]

    def test_quality_is_bounded(self) -> None:
        with pytest.raises(ValidationError):
            Transform(quality=101)


class TestWireNames:
    """Models use the service's field names on the wire."""

    def test_move_copy_aliases(self) -> None:
        body = MoveCopyObject(bucket_id="b", source_key="s", destination_key="d")
        assert body.model_dump(by_alias=True) == {
            "bucketId": "b",
            "sourceKey": "s",
            "destinationKey": "d",
        }

    def test_move_copy_accepts_wire_names(self) -> None:
        body = MoveCopyObject.model_validate(
            {"bucketId": "b", "sourceKey": "s", "destinationKey": "d"},
        )
        assert body.source_key == "s"

    def test_signed_urls_entry(self) -> None:
        entry = SignedUrls.model_validate(
            {"path": "btc.pdf", "signedURL": "/object/sign/x", "error": None},
        )
        assert entry.signed_url == "/object/sign/x"

    @pytest.mark.parametrize("status", ["404", 404])
    def test_error_body_status_code(self, status: object) -> None:
        body = ApiErrorBody.model_validate(
            {"statusCode": status, "error": "not_found", "message": "missing"},
        )
        assert str(body.status_code) == "404"

    def test_new_bucket_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            NewBucket(name="")
