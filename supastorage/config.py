"""Connection settings for the storage service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

URL_ENV = "SUPABASE_URL_STORAGE"
API_KEY_ENV = "SUPABASE_API_KEY"


@dataclass(frozen=True)
class StorageConfig:
    """Base URL and API key used to address and authorize requests."""

    base_url: str
    api_key: str | None = None

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
    ) -> StorageConfig:
        """Load the configuration from ``SUPABASE_URL_STORAGE`` and ``SUPABASE_API_KEY``.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigError: If either variable is absent or empty.

        """
        source = os.environ if environ is None else environ
        values = {}
        for variable in (URL_ENV, API_KEY_ENV):
            value = source.get(variable, "")
            if not value or not value.strip():
                raise ConfigError.missing_variable(variable)
            values[variable] = value.strip()
        return cls(base_url=values[URL_ENV], api_key=values[API_KEY_ENV])

    @classmethod
    def with_values(cls, url: str, key: str | None) -> StorageConfig:
        """Build a configuration from literals; validated when a request is built."""
        return cls(base_url=url, api_key=key)

    @property
    def has_api_key(self) -> bool:
        """Whether requests can be authorized with this configuration."""
        return bool(self.api_key and self.api_key.strip())

    @property
    def is_anonymous(self) -> bool:
        """Whether requests are sent without credentials (no key configured)."""
        return self.api_key is None

    def __repr__(self) -> str:
        masked = None if self.is_anonymous else "***"
        return f"StorageConfig(base_url={self.base_url!r}, api_key={masked!r})"
