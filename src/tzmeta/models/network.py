"""
Per-call network context and network tag helpers.

A [NetworkContext][tzmeta.models.network.NetworkContext] bundles the chain
client with what the caller asserts about the network. It is built once per
top-level resolution and passed unchanged through recursive hops, except
that the expected network id is narrowed (never widened) after each
confirmed cross-contract reference.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tzmeta.chain.base import ChainClient


_CHAIN_ID_TAG_PATTERN = re.compile(r"Net[A-Za-z0-9]{12}")


def is_chain_id_tag(tag: str) -> bool:
    """Return True if *tag* is shaped like a chain id (``Net`` + 12 alphanumerics).

    The decision is purely syntactic; no catalog is consulted.
    """
    return _CHAIN_ID_TAG_PATTERN.fullmatch(tag) is not None


@dataclass(frozen=True, slots=True)
class NetworkContext:
    """Immutable bundle threaded through one resolution call.

    Attributes:
        client: Chain client used for contract loads and chain id queries.
        network_id: Caller-declared network name or chain id. When ``None``
            the live chain id is looked up in the network catalog.
        token_metadata_callback: Callback contract for the ``token_metadata``
            entrypoint, used when no configured default exists for the
            live chain.
        registry_callback: Callback contract for the
            ``token_metadata_registry`` entrypoint, same fallback rule.

    Examples:
        ```python
        context = NetworkContext(client=client, network_id="mainnet")
        narrowed = context.narrow("mainnet")
        ```
    """

    client: ChainClient
    network_id: str | None = None
    token_metadata_callback: str | None = None
    registry_callback: str | None = None

    def narrow(self, network_id: str | None) -> NetworkContext:
        """Return a copy whose expected network id is fixed to *network_id*."""
        return replace(self, network_id=network_id)
