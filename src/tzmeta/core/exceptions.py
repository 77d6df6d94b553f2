"""tzmeta exception hierarchy.

Provides typed exceptions for every failure the resolution engine can
detect. Each class carries an [ErrorCode][tzmeta.core.exceptions.ErrorCode]
and the payload needed to act on the failure, so callers can branch on
``except`` clauses or on ``error.code``.

Exception hierarchy:

```text
TzMetaError (base -- never raised directly)
├── ConfigurationError            -- invalid resolver configuration
├── ContractNotFoundError         -- address not deployed on the connected chain
├── InvalidContractAddressError   -- cross-contract reference with a bad address
├── NetworkMismatchError
│   ├── ChainIdMismatchError      -- asserted chain id differs from the live chain
│   └── NetworkNameMismatchError  -- asserted name differs from the expected network
├── NotEnoughCredentialsError     -- no callback contract for an entrypoint path
├── FetchURLError                 -- HTTP fetch failed or returned non-success
├── ChecksumMismatchError         -- fetched body does not match its sha256 digest
├── DecodingError                 -- hex, UTF-8 or JSON decoding failed
└── ResolutionLimitError
    ├── ReferenceCycleError       -- an (address, key) pair was revisited
    └── DepthExceededError        -- too many cross-contract hops
```

Note:
    Errors raised inside a recursive hop propagate unchanged; the caller of
    the top-level resolution sees the innermost failure.

See Also:
    [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver]: Raises
        every error in this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    """Stable identifiers for every error kind."""

    CONFIGURATION = "configuration"
    CONTRACT_NOT_FOUND = "contract_not_found"
    INVALID_CONTRACT_ADDRESS = "invalid_contract_address"
    INVALID_NETWORK_RPC_ID = "invalid_network_rpc_id"
    INVALID_NETWORK_NAME = "invalid_network_name"
    NOT_ENOUGH_CREDENTIALS = "not_enough_credentials"
    FETCH_URL_ERROR = "fetch_url_error"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    DECODING_ERROR = "decoding_error"
    REFERENCE_CYCLE = "reference_cycle"
    DEPTH_EXCEEDED = "depth_exceeded"


class TzMetaError(Exception):
    """Base exception for all tzmeta errors.

    Never raised directly -- always use a specific subclass.
    """

    code: ClassVar[ErrorCode]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(TzMetaError):
    """Invalid or missing configuration (YAML, dict, constructor arguments)."""

    code = ErrorCode.CONFIGURATION


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------


class ContractNotFoundError(TzMetaError, LookupError):
    """The address does not resolve to a deployed contract on the connected chain."""

    code = ErrorCode.CONTRACT_NOT_FOUND

    def __init__(self, address: str) -> None:
        super().__init__(f"Contract {address} was not found")
        self.address = address


class InvalidContractAddressError(TzMetaError, ValueError):
    """A cross-contract reference names an address that is not a valid ``KT1`` address."""

    code = ErrorCode.INVALID_CONTRACT_ADDRESS

    def __init__(self, address: str, reason: str | None = None) -> None:
        message = f"Invalid contract address {address}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.address = address
        self.reason = reason


# ---------------------------------------------------------------------------
# Network identity
# ---------------------------------------------------------------------------


class NetworkMismatchError(TzMetaError):
    """Base for network tags that disagree with the connected chain."""


class ChainIdMismatchError(NetworkMismatchError):
    """An asserted chain id differs from the chain id reported by the node."""

    code = ErrorCode.INVALID_NETWORK_RPC_ID

    def __init__(self, chain_id: str) -> None:
        super().__init__(
            f"Chain ID {chain_id} was specified, which is not the chain ID of the connected node"
        )
        self.chain_id = chain_id


class NetworkNameMismatchError(NetworkMismatchError):
    """An asserted network name differs from the declared or catalog network."""

    code = ErrorCode.INVALID_NETWORK_NAME

    def __init__(self, name: str) -> None:
        super().__init__(
            f"{name} network was specified, which is not the network of the connected node"
        )
        self.name = name


# ---------------------------------------------------------------------------
# Entrypoint paths
# ---------------------------------------------------------------------------


class NotEnoughCredentialsError(TzMetaError):
    """An entrypoint-based path has no callback contract configured.

    Attributes:
        field: Name of the missing configuration field
            (``token_metadata_callback`` or ``registry_callback``).
    """

    code = ErrorCode.NOT_ENOUGH_CREDENTIALS

    def __init__(self, field: str) -> None:
        super().__init__(
            f"{field} is required: no default callback contract is known for this chain"
        )
        self.field = field


# ---------------------------------------------------------------------------
# Remote metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Payload of a fetch that completed with a non-success status."""

    status: int
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class FetchCause:
    """Payload of a fetch that failed before a response was received."""

    error: BaseException


class FetchURLError(TzMetaError):
    """HTTP fetch of external, IPFS or checksummed metadata failed.

    Attributes:
        url: The URL that was fetched.
        payload: Either the non-success [FetchResponse][tzmeta.core.exceptions.FetchResponse]
            or the [FetchCause][tzmeta.core.exceptions.FetchCause] wrapping the
            transport error.
    """

    code = ErrorCode.FETCH_URL_ERROR

    def __init__(self, url: str, payload: FetchResponse | FetchCause) -> None:
        super().__init__(f"Error received while fetching {url}")
        self.url = url
        self.payload = payload


class ChecksumMismatchError(TzMetaError):
    """Fetched content does not hash to the digest of its ``sha256://`` URI."""

    code = ErrorCode.CHECKSUM_MISMATCH

    def __init__(self, url: str, expected: str, actual: str) -> None:
        super().__init__(f"SHA-256 of {url} is {actual}, expected {expected}")
        self.url = url
        self.expected = expected
        self.actual = actual


class DecodingError(TzMetaError, ValueError):
    """Hex, UTF-8 or JSON decoding of a stored or fetched value failed."""

    code = ErrorCode.DECODING_ERROR


# ---------------------------------------------------------------------------
# Recursion limits
# ---------------------------------------------------------------------------


class ResolutionLimitError(TzMetaError):
    """Base for recursion guards on cross-contract and registry hops."""


class ReferenceCycleError(ResolutionLimitError):
    """The same ``(address, key)`` pair was reached twice in one resolution."""

    code = ErrorCode.REFERENCE_CYCLE

    def __init__(self, address: str, key: str | None) -> None:
        super().__init__(f"Reference cycle detected at {address} key={key!r}")
        self.address = address
        self.key = key


class DepthExceededError(ResolutionLimitError):
    """More hops were needed than the configured maximum depth allows."""

    code = ErrorCode.DEPTH_EXCEEDED

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Resolution exceeded the maximum depth of {max_depth} hops")
        self.max_depth = max_depth
