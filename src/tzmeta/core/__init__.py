"""Core layer: exceptions, structured logging, configuration, and metrics.

Sits above [tzmeta.models][tzmeta.models] and below
[tzmeta.resolver][tzmeta.resolver].

Attributes:
    TzMetaError: Root of the typed exception hierarchy.
        See [tzmeta.core.exceptions][].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][tzmeta.core.logger.Logger].
    ResolverConfig: Pydantic settings for the resolution engine.
        See [ResolverConfig][tzmeta.core.config.ResolverConfig].
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.

Examples:
    ```python
    from tzmeta.core import Logger, ResolverConfig

    config = ResolverConfig.from_yaml("config/resolver.yaml")
    logger = Logger("tzmeta.app")
    ```
"""

from .config import HttpConfig, ResolverConfig
from .exceptions import (
    ChainIdMismatchError,
    ChecksumMismatchError,
    ConfigurationError,
    ContractNotFoundError,
    DecodingError,
    DepthExceededError,
    ErrorCode,
    FetchCause,
    FetchResponse,
    FetchURLError,
    InvalidContractAddressError,
    NetworkMismatchError,
    NetworkNameMismatchError,
    NotEnoughCredentialsError,
    ReferenceCycleError,
    ResolutionLimitError,
    TzMetaError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .metrics import FETCH_COUNTER, RESOLVE_COUNTER, RESOLVE_DURATION_SECONDS
from .yaml import load_yaml


__all__ = [
    "FETCH_COUNTER",
    "RESOLVE_COUNTER",
    "RESOLVE_DURATION_SECONDS",
    "ChainIdMismatchError",
    "ChecksumMismatchError",
    "ConfigurationError",
    "ContractNotFoundError",
    "DecodingError",
    "DepthExceededError",
    "ErrorCode",
    "FetchCause",
    "FetchResponse",
    "FetchURLError",
    "HttpConfig",
    "InvalidContractAddressError",
    "Logger",
    "NetworkMismatchError",
    "NetworkNameMismatchError",
    "NotEnoughCredentialsError",
    "ReferenceCycleError",
    "ResolutionLimitError",
    "ResolverConfig",
    "StructuredFormatter",
    "TzMetaError",
    "format_kv_pairs",
    "load_yaml",
]
