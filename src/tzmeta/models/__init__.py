"""Pure frozen dataclasses with zero I/O for metadata locations and network context.

The models layer is the foundation of the package. It depends only on the
Python standard library. Every model uses ``@dataclass(frozen=True, slots=True)``
for immutability.

Attributes:
    classify: Total, order-sensitive classifier turning a TZIP-16 pointer
        string into one [MetadataUri][tzmeta.models.uri.MetadataUri] variant.
    NetworkContext: Per-call bundle of chain client, expected network id and
        callback contract overrides.
    ContractShape: Retrieval strategy selected for a contract.
    KNOWN_CHAIN_IDS: Catalog of well-known public networks (chain id -> name).

See Also:
    [tzmeta.models.uri][]: Metadata location variants.
    [tzmeta.models.network][]: Network context and tag helpers.
    [tzmeta.models.constants][]: Shared constants and enumerations.
"""

from .constants import (
    DEFAULT_IPFS_GATEWAY,
    KNOWN_CHAIN_IDS,
    ContractShape,
    UriKind,
)
from .network import NetworkContext, is_chain_id_tag
from .uri import (
    ChecksummedUrl,
    CrossContractRef,
    ExternalUrl,
    IpfsUri,
    MetadataUri,
    OpaqueUri,
    SameStoreKey,
    classify,
    is_external_url,
)


__all__ = [
    "DEFAULT_IPFS_GATEWAY",
    "KNOWN_CHAIN_IDS",
    "ChecksummedUrl",
    "ContractShape",
    "CrossContractRef",
    "ExternalUrl",
    "IpfsUri",
    "MetadataUri",
    "NetworkContext",
    "OpaqueUri",
    "SameStoreKey",
    "UriKind",
    "classify",
    "is_chain_id_tag",
    "is_external_url",
]
