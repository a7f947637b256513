"""Path validation and normalization utilities.

Bucket names and object paths are turned into URL path segments here.
These helpers keep the rules in one place so every builder operation
rejects the same inputs.

Key utilities:
- Empty/whitespace identifier validation
- Path traversal detection
- Windows path normalization
- Object path splitting
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidPathError


def validate_not_empty(path: Any) -> str:
    """Validate that an identifier is not empty or whitespace-only.

    Args:
        path: Bucket name or object path to validate

    Returns:
        The identifier as a string.

    Raises:
        InvalidPathError: If the identifier is empty or whitespace.

    """
    path_str = "" if path is None else str(path)
    if not path_str or path_str.strip() == "":
        raise InvalidPathError.empty(path_str)
    return path_str


def detect_path_traversal_posix(path_parts: tuple[str, ...]) -> bool:
    """Detect path traversal attempts in path components.

    Example:

        >>> detect_path_traversal_posix(("..", "etc", "passwd"))
        True
        >>> detect_path_traversal_posix(("test", "bitcoin.pdf"))
        False

    """
    return any(part == ".." for part in path_parts)


def normalize_windows_path(path_str: str) -> str:
    """Normalize Windows backslashes to forward slashes.

    Example:

        >>> normalize_windows_path("dir\\subdir\\file.txt")
        'dir/subdir/file.txt'

    """
    return path_str.replace("\\", "/")


def validate_bucket_name(name: Any) -> str:
    """Validate a bucket identifier and return it unchanged.

    Raises:
        InvalidPathError: If the name is empty or contains a separator.

    """
    name_str = validate_not_empty(name)
    if "/" in name_str or name_str in (".", ".."):
        message = "Bucket name cannot contain '/' or be a relative reference"
        raise InvalidPathError(message, path=name_str)
    return name_str


def split_object_path(path: Any) -> tuple[str, ...]:
    """Split an object path into its URL path segments.

    Leading, trailing and repeated separators are ignored.

    Example:

        >>> split_object_path("/test//bitcoin.pdf")
        ('test', 'bitcoin.pdf')

    Raises:
        InvalidPathError: If the path is empty or escapes its bucket.

    """
    path_str = normalize_windows_path(validate_not_empty(path))
    parts = tuple(part for part in path_str.split("/") if part)
    if not parts:
        raise InvalidPathError.empty(path_str)
    if detect_path_traversal_posix(parts):
        raise InvalidPathError.traversal(path_str)
    return parts
