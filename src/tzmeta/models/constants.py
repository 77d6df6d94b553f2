"""Shared constants for the models layer.

Defines enumerations and catalog tables that are used across multiple
modules. Placing them here avoids circular dependencies between the
models, resolver, and core layers.

See Also:
    [tzmeta.models.uri][]: Uses [UriKind][tzmeta.models.constants.UriKind]
        to tag every classified metadata location.
    [tzmeta.resolver.dispatch][]: Produces
        [ContractShape][tzmeta.models.constants.ContractShape] values.
    [tzmeta.resolver.network][]: Looks up
        [KNOWN_CHAIN_IDS][tzmeta.models.constants.KNOWN_CHAIN_IDS].
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final


class ContractShape(StrEnum):
    """Retrieval strategy selected for a contract's storage snapshot.

    Exactly one shape applies to a contract at a point in time. The
    [ShapeDispatcher][tzmeta.resolver.dispatch.ShapeDispatcher] evaluates
    a fixed priority ladder to pick it.

    Attributes:
        GENERIC_STORE: TZIP-16 ``metadata`` big-map keyed by arbitrary strings.
        TOKEN_INDEXED_BIGMAP: TZIP-12 ``token_metadata`` big-map keyed by token id.
        ENTRYPOINT_WITH_CALLBACK: Legacy ``token_metadata`` entrypoint that
            writes its answer into a callback contract.
        REGISTRY_ENTRYPOINT_WITH_CALLBACK: ``token_metadata_registry``
            entrypoint that reports the contract holding the metadata.
        RAW_FALLBACK: No known shape; the raw storage is the answer.
    """

    GENERIC_STORE = "generic_store"
    TOKEN_INDEXED_BIGMAP = "token_indexed_bigmap"
    ENTRYPOINT_WITH_CALLBACK = "entrypoint_with_callback"
    REGISTRY_ENTRYPOINT_WITH_CALLBACK = "registry_entrypoint_with_callback"
    RAW_FALLBACK = "raw_fallback"


class UriKind(StrEnum):
    """Variant tag of a classified metadata location string.

    See Also:
        [classify][tzmeta.models.uri.classify]: The classifier producing
            the variants tagged by these values.
    """

    EXTERNAL_URL = "external_url"
    IPFS = "ipfs"
    CHECKSUMMED_URL = "checksummed_url"
    SAME_STORE_KEY = "same_store_key"
    CROSS_CONTRACT_REF = "cross_contract_ref"
    OPAQUE = "opaque"


# Storage field and entrypoint names fixed by TZIP-12 / TZIP-16
METADATA_FIELD: Final[str] = "metadata"
TOKEN_METADATA_FIELD: Final[str] = "token_metadata"
TOKEN_METADATA_MAP_FIELD: Final[str] = "token_metadata_map"
TOKEN_INFO_FIELD: Final[str] = "token_info"
TOKEN_METADATA_ENTRYPOINT: Final[str] = "token_metadata"
TOKEN_METADATA_REGISTRY_ENTRYPOINT: Final[str] = "token_metadata_registry"

# Reserved TZIP-16 key holding the pointer to the canonical metadata
POINTER_KEY: Final[str] = ""
DEFAULT_TOKEN_ID: Final[str] = "0"

DEFAULT_IPFS_GATEWAY: Final[str] = "https://ipfs.io/ipfs/"

KNOWN_CHAIN_IDS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "NetXdQprcVkpaWU": "mainnet",
        "NetXnHfVqm9iesp": "ghostnet",
        "NetXjD3HPJJjmcd": "carthagenet",
        "NetXm8tYqnMWky1": "delphinet",
        "NetXSp4gfdanies": "edonet",
    }
)
