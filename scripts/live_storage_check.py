"""Live check harness for exercising the storage client against a real service.

This script performs the following steps:

1. Collects the storage base URL and service API key from environment
   variables or via interactive prompts.
2. Creates a temporary bucket and uploads a generated file into it.
3. Downloads, lists, copies and moves the object, checking every response.
4. Creates a signed URL for the object and downloads it through the token.
5. Empties and deletes the temporary bucket.

The script should only be executed against projects where creating and
deleting a scratch bucket is acceptable.
"""

from __future__ import annotations

import asyncio
import getpass
import logging
import os
import secrets
import sys
import tempfile
from pathlib import Path

from supastorage import (
    API_KEY_ENV,
    URL_ENV,
    BucketDetails,
    FileObject,
    MessageResponse,
    NewBucket,
    SignedUrl,
    Storage,
    StorageConfig,
)

PAYLOAD = b"live storage check\n"


class LiveCheckError(RuntimeError):
    """Raised when the live check encounters an unexpected state."""

    @classmethod
    def unexpected_status(cls, step: str, status: int) -> LiveCheckError:
        """Return an error for a step answered with a non-success status."""
        return cls(f"{step} returned HTTP {status}")

    @classmethod
    def content_mismatch(cls, step: str) -> LiveCheckError:
        """Return an error when downloaded content differs from the upload."""
        return cls(f"{step} returned different content than uploaded")

    @classmethod
    def missing_listing_entry(cls, name: str) -> LiveCheckError:
        """Return an error when a listing does not include an object."""
        return cls(f"Listing did not include {name}")


def _prompt_for_value(env_name: str, prompt: str, *, secret: bool = False) -> str:
    """Return a value from the environment or an interactive prompt."""
    value = os.environ.get(env_name)
    if value:
        return value.strip()
    return getpass.getpass(prompt) if secret else input(prompt).strip()


async def _exercise_storage(storage: Storage, workspace: Path) -> None:
    """Run the object lifecycle against a scratch bucket."""
    bucket = f"live-check-{secrets.token_hex(4)}"
    source = workspace / "check.txt"
    source.write_bytes(PAYLOAD)

    print(f"Creating bucket {bucket}...")
    await storage.from_().create_bucket(NewBucket(name=bucket)).execute_from(dict)
    details = await storage.from_().get_bucket_details(bucket).execute_from(BucketDetails)
    print(f"Bucket created (public={details.public}).")

    try:
        print("Uploading object...")
        upload = await storage.from_().upload_object(bucket, "dir/check.txt", source).execute()
        if not upload.is_success:
            raise LiveCheckError.unexpected_status("Upload", upload.status_code)

        download = await storage.from_().get_object(bucket, "dir/check.txt").execute()
        if download.content != PAYLOAD:
            raise LiveCheckError.content_mismatch("Download")

        listing = await storage.from_().list_objects(
            bucket,
            {"prefix": "dir", "limit": 10, "offset": 0},
        ).execute_from(list[FileObject])
        if "check.txt" not in {entry.name for entry in listing}:
            raise LiveCheckError.missing_listing_entry("check.txt")

        print("Copying and moving object...")
        await storage.from_().copy_object(bucket, "dir/check.txt", "copy.txt").execute_from(
            dict,
        )
        await storage.from_().move_object(bucket, "copy.txt", "moved.txt").execute_from(
            MessageResponse,
        )

        print("Downloading through a signed URL...")
        signed = await storage.from_().create_signed_url(
            bucket,
            "moved.txt",
            {"expiresIn": 60},
        ).execute_from(SignedUrl)
        token = signed.signed_url.split("token=", 1)[1]
        through_token = await storage.from_().get_object_with_signed_url(
            bucket,
            "moved.txt",
            token,
        ).execute()
        if through_token.content != PAYLOAD:
            raise LiveCheckError.content_mismatch("Signed download")
    finally:
        print(f"Removing bucket {bucket}...")
        await storage.from_().empty_bucket(bucket).execute()
        await storage.from_().delete_bucket(bucket).execute()


def main() -> int:
    """Entry point for the live check harness."""
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)
    url = _prompt_for_value(URL_ENV, "Storage URL (https://<project>.supabase.co/storage/v1): ")
    api_key = _prompt_for_value(API_KEY_ENV, "Service API key: ", secret=True)
    storage = Storage.new_with_config(StorageConfig.with_values(url, api_key))

    with tempfile.TemporaryDirectory(prefix="supastorage-live-") as temp_dir:
        asyncio.run(_exercise_storage(storage, Path(temp_dir)))

    print("Live storage check completed successfully.")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nAborted by user.", file=sys.stderr)
        sys.exit(130)
