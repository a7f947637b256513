"""Exception hierarchy raised by the storage client."""

from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class StorageError(RuntimeError):
    """Base exception for storage client operations."""

    def __init__(
        self,
        message: str,
        *,
        context: str | None = None,
    ) -> None:
        """Initialise the base error with an optional context value."""
        detail = message if context is None else ": ".join((message, context))
        super().__init__(detail)
        self.message = message
        self.context = context


class ConfigError(StorageError):
    """Raised when the client configuration is missing or incomplete."""

    def __init__(self, message: str, *, variable: str | None = None) -> None:
        """Create a configuration error naming the offending variable."""
        super().__init__(message, context=variable)
        self.variable = variable

    @classmethod
    def missing_variable(cls, variable: str) -> ConfigError:
        """Return an error for an absent or empty environment variable."""
        return cls("Environment variable is missing or empty", variable=variable)

    @classmethod
    def missing_base_url(cls) -> ConfigError:
        """Return an error for a configuration without a base URL."""
        return cls("Storage base URL is empty")

    @classmethod
    def empty_api_key(cls) -> ConfigError:
        """Return an error for an API key that is set but blank."""
        return cls("Storage API key is empty")


class InvalidPathError(StorageError):
    """Raised when a bucket or object identifier cannot form a request path."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        """Create an invalid path error scoped to the rejected value."""
        super().__init__(message, context=repr(path) if path is not None else None)
        self.path = path

    @classmethod
    def empty(cls, path: object) -> InvalidPathError:
        """Return an error for an empty or whitespace-only identifier."""
        return cls("Path cannot be empty", path=str(path))

    @classmethod
    def traversal(cls, path: object) -> InvalidPathError:
        """Return an error for a path with a parent directory component."""
        return cls("Path cannot contain '..' components", path=str(path))

    @classmethod
    def not_set(cls) -> InvalidPathError:
        """Return an error for a request built without any path."""
        return cls("Request path has not been set")


class InvalidRequestError(StorageError):
    """Raised when a request cannot be described with the given parameters."""

    @classmethod
    def unsupported_method(cls, method: object) -> InvalidRequestError:
        """Return an error for an HTTP method the client does not send."""
        return cls("Unsupported HTTP method", context=repr(method))


class FileReadError(StorageError):
    """Raised when a local file used as a request body cannot be read."""

    def __init__(self, path: PathLike, *, reason: str | None = None) -> None:
        """Create a file read error for the provided local path."""
        super().__init__(reason or "Cannot read local file", context=str(path))
        self.path = Path(path)


class TransportError(StorageError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Initialise a transport error for the target URL."""
        super().__init__(message, context=url)
        self.url = url

    @classmethod
    def request_failed(cls, url: str, exc: Exception) -> TransportError:
        """Return an error wrapping a low-level transport failure."""
        return cls(f"Request failed ({type(exc).__name__}: {exc})", url=url)


class DeserializationError(StorageError):
    """Raised when a response body does not match the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialise a deserialization error with response context."""
        super().__init__(message, context=url)
        self.url = url
        self.status_code = status_code

    @classmethod
    def unexpected_shape(
        cls,
        type_name: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> DeserializationError:
        """Return an error for a body that failed validation as ``type_name``."""
        return cls(
            f"Response body is not a valid {type_name}",
            url=url,
            status_code=status_code,
        )


class StorageApiError(StorageError):
    """Raised when the service answers with an error document."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        *,
        url: str | None = None,
    ) -> None:
        """Create an API error from the fields of the service error body."""
        super().__init__(f"{status_code} {error}: {message}", context=url)
        self.status_code = status_code
        self.error = error
        self.detail = message
        self.url = url
