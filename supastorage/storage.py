"""Entry point of the client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .builder import RequestBuilder
from .config import StorageConfig

if TYPE_CHECKING:
    import httpx


class Storage:
    """Holds the storage configuration and hands out request builders.

    An optional ``httpx.AsyncClient`` is shared by every request made through
    this facade; without one, each request opens and closes its own client.
    """

    def __init__(self, url: str, *, client: httpx.AsyncClient | None = None) -> None:
        """Create a facade for ``url`` without authorization headers."""
        self._config = StorageConfig.with_values(url, None)
        self._client = client

    @classmethod
    def new_with_config(
        cls,
        config: StorageConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Storage:
        """Create a facade whose requests are authorized with ``config.api_key``."""
        storage = cls(config.base_url, client=client)
        storage._config = config
        return storage

    @classmethod
    def from_environment(cls, *, client: httpx.AsyncClient | None = None) -> Storage:
        """Create a facade from ``SUPABASE_URL_STORAGE`` and ``SUPABASE_API_KEY``."""
        return cls.new_with_config(StorageConfig.from_environment(), client=client)

    @property
    def config(self) -> StorageConfig:
        return self._config

    def from_(self) -> RequestBuilder:
        """Return a fresh builder seeded with this facade's configuration."""
        return RequestBuilder(config=self._config, client=self._client)

    def __repr__(self) -> str:
        return f"Storage({self._config!r})"
