"""
Pydantic configuration models for the resolver and its HTTP collaborator.

Configuration is immutable data injected at construction time: the network
catalog and callback-contract tables start from built-in defaults, can be
overridden from YAML or a dict, and are never mutated at runtime.

Examples:
    ```yaml
    # config/resolver.yaml
    ipfs_gateway: https://ipfs.io/ipfs/
    max_depth: 8
    verify_checksums: true
    token_metadata_callbacks:
      NetXnHfVqm9iesp: KT1...
    http:
      timeout: 5.0
      max_size: 262144
    ```

    ```python
    config = ResolverConfig.from_yaml("config/resolver.yaml")
    ```

See Also:
    [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver]: Consumer
        of [ResolverConfig][tzmeta.core.config.ResolverConfig].
    [AiohttpFetcher][tzmeta.utils.http.AiohttpFetcher]: Consumer of
        [HttpConfig][tzmeta.core.config.HttpConfig].
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from tzmeta.models.constants import DEFAULT_IPFS_GATEWAY, KNOWN_CHAIN_IDS

from .exceptions import ConfigurationError
from .yaml import load_yaml


def _frozen_table(table: Mapping[str, str]) -> Mapping[str, str]:
    """Copy *table* into a read-only view."""
    return MappingProxyType(dict(table))


class HttpConfig(BaseModel):
    """Limits applied by the default HTTP fetcher.

    The resolution engine applies no timeout of its own; these values only
    configure [AiohttpFetcher][tzmeta.utils.http.AiohttpFetcher].
    """

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=10.0, gt=0.0, description="Total request timeout in seconds")
    max_size: int = Field(
        default=1_048_576,
        ge=1,
        description="Maximum accepted response body size in bytes",
    )
    proxy_url: str | None = Field(default=None, description="Optional SOCKS5 proxy URL")


class ResolverConfig(BaseModel):
    """Settings of the metadata resolution engine.

    Attributes:
        ipfs_gateway: Base URL used to turn ``ipfs://<cid>`` into an HTTP URL.
        max_depth: Maximum number of cross-contract or registry hops.
        confirmations: Confirmations awaited after invoking a metadata entrypoint.
        verify_checksums: Check the SHA-256 digest of ``sha256://`` content.
            Off by default: the digest is carried but not verified.
        networks: Catalog mapping chain ids to network names. This table and
            the two callback tables are read-only copies of their input.
        token_metadata_callbacks: Default ``token_metadata`` callback
            contract per chain id.
        registry_callbacks: Default ``token_metadata_registry`` callback
            contract per chain id.
        http: Limits for the default HTTP fetcher.
    """

    model_config = ConfigDict(frozen=True)

    ipfs_gateway: str = Field(default=DEFAULT_IPFS_GATEWAY, description="IPFS HTTP gateway")
    max_depth: int = Field(default=16, ge=1, description="Maximum resolution hops")
    confirmations: int = Field(default=1, ge=1, description="Entrypoint confirmations")
    verify_checksums: bool = Field(default=False, description="Verify sha256:// digests")
    networks: Mapping[str, str] = Field(
        default_factory=lambda: _frozen_table(KNOWN_CHAIN_IDS),
        description="Chain id -> network name catalog",
    )
    token_metadata_callbacks: Mapping[str, str] = Field(
        default_factory=lambda: _frozen_table({}),
        description="Chain id -> token_metadata callback contract",
    )
    registry_callbacks: Mapping[str, str] = Field(
        default_factory=lambda: _frozen_table({}),
        description="Chain id -> token_metadata_registry callback contract",
    )
    http: HttpConfig = Field(default_factory=HttpConfig, description="HTTP fetcher limits")

    @field_validator("ipfs_gateway")
    @classmethod
    def _check_gateway(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("ipfs_gateway must be an http(s) URL")
        return value if value.endswith("/") else value + "/"

    @field_validator("networks", "token_metadata_callbacks", "registry_callbacks")
    @classmethod
    def _freeze_table(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _frozen_table(value)

    @field_serializer("networks", "token_metadata_callbacks", "registry_callbacks")
    def _dump_table(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a config from a dictionary.

        Raises:
            ConfigurationError: If the dictionary fails validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid resolver configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """Build a config from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the file is not valid YAML or fails validation.
        """
        try:
            data = load_yaml(config_path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}") from e
        return cls.from_dict(data)
