"""Sending built requests and decoding their responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar, overload

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import ConfigError, DeserializationError, StorageApiError, TransportError
from .models import ApiErrorBody

if TYPE_CHECKING:
    from .builder import RequestBuilder
    from .request import PendingRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Executor:
    """Sends the request accumulated by a :class:`RequestBuilder`.

    An executor describes exactly one call. Build a new one from the facade
    for every request instead of awaiting :meth:`execute` twice.
    """

    def __init__(self, builder: RequestBuilder) -> None:
        self.builder = builder

    def with_header(self, name: str, value: str) -> Executor:
        """Return an executor whose request also carries ``name: value``."""
        return Executor(self.builder.with_header(name, value))

    def build(self) -> PendingRequest:
        """Return the request that :meth:`execute` would send."""
        return self.builder.build()

    async def execute(self) -> httpx.Response:
        """Send the request and return the raw response.

        Non-2xx responses are returned as-is; inspect ``status_code``.

        Raises:
            ConfigError: If the base URL is empty or malformed.
            InvalidPathError: If no path was set.
            TransportError: If the request could not be completed.
            DeserializationError: If the response content encoding is broken.

        """
        return await self._execute(self.build())

    async def _execute(self, pending: PendingRequest) -> httpx.Response:
        logger.debug("Sending %s", pending.describe())

        try:
            if self.builder.client is not None:
                response = await self._send(self.builder.client, pending)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._send(client, pending)
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Storage base URL is invalid ({exc})") from exc
        except httpx.DecodingError as exc:
            logger.warning("Response from %s could not be decoded: %s", pending.location, exc)
            raise DeserializationError(
                f"Response body could not be decoded ({exc})",
                url=pending.location,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("Request to %s failed: %s", pending.location, exc)
            raise TransportError.request_failed(pending.location, exc) from exc

        logger.debug(
            "Received %s for %s %s",
            response.status_code,
            pending.method.value,
            pending.location,
        )
        return response

    @overload
    async def execute_from(self, type_: type[T]) -> T: ...

    @overload
    async def execute_from(self, type_: Any) -> Any: ...

    async def execute_from(self, type_: Any) -> Any:
        """Send the request and deserialize the JSON body as ``type_``.

        ``type_`` may be anything pydantic can validate: a model class,
        ``list[FileObject]``, ``dict[str, Any]`` and so on.

        Raises:
            TransportError: If the request could not be completed.
            StorageApiError: If the service answered with an error document.
            DeserializationError: If the body does not match ``type_``.

        """
        pending = self.build()
        response = await self._execute(pending)
        location = pending.location

        if not response.is_success:
            raise self._error_from_response(response, location)

        try:
            return TypeAdapter(type_).validate_json(response.content)
        except ValidationError as exc:
            logger.debug("Body of %s failed validation: %s", location, exc)
            raise DeserializationError.unexpected_shape(
                _type_name(type_),
                url=location,
                status_code=response.status_code,
            ) from exc

    @staticmethod
    async def _send(
        client: httpx.AsyncClient,
        pending: PendingRequest,
    ) -> httpx.Response:
        return await client.request(
            pending.method.value,
            pending.url,
            headers=pending.headers,
            content=pending.body,
        )

    @staticmethod
    def _error_from_response(
        response: httpx.Response,
        location: str,
    ) -> StorageApiError | DeserializationError:
        try:
            body = ApiErrorBody.model_validate_json(response.content)
        except ValidationError:
            return DeserializationError(
                f"Unexpected {response.status_code} response without an error document",
                url=location,
                status_code=response.status_code,
            )
        return StorageApiError(
            response.status_code,
            body.error,
            body.message,
            url=location,
        )


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)
