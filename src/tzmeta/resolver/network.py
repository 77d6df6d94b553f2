"""
Network identity checks for cross-contract references.

A cross-contract reference may assert which network its target lives on,
either as a chain id (``NetXdQprcVkpaWU``) or as a network name
(``mainnet``). Chain ids are checked against the live chain; names are
checked against the network the caller declared, or failing that the
catalog name of the live chain id, since names cannot be read from a node.

See Also:
    [NetworkContext][tzmeta.models.network.NetworkContext]: The per-call
        context narrowed by
        [check_tag][tzmeta.resolver.network.NetworkResolver.check_tag].
    [ResolverConfig.networks][tzmeta.core.config.ResolverConfig]: Source of
        the chain id catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from tzmeta.core.exceptions import ChainIdMismatchError, NetworkNameMismatchError
from tzmeta.models.constants import KNOWN_CHAIN_IDS
from tzmeta.models.network import NetworkContext, is_chain_id_tag


logger = logging.getLogger("tzmeta.resolver.network")


class NetworkResolver:
    """Resolves expected network ids and validates asserted network tags.

    Args:
        catalog: Mapping of chain id to network name. Copied into a read-only
            view; defaults to
            [KNOWN_CHAIN_IDS][tzmeta.models.constants.KNOWN_CHAIN_IDS].
    """

    def __init__(self, catalog: Mapping[str, str] | None = None) -> None:
        self._catalog: Mapping[str, str] = MappingProxyType(
            dict(KNOWN_CHAIN_IDS if catalog is None else catalog)
        )

    @property
    def catalog(self) -> Mapping[str, str]:
        return self._catalog

    def network_name(self, chain_id: str) -> str | None:
        """Return the catalog name of *chain_id*, or ``None`` if unknown."""
        return self._catalog.get(chain_id)

    async def expected_network_id(
        self, context: NetworkContext, live_chain_id: str | None = None
    ) -> str | None:
        """Return the network the caller expects to be talking to.

        The caller-declared ``context.network_id`` wins; otherwise the live
        chain id is looked up in the catalog. ``None`` when neither is
        available, which is not an error by itself.

        Args:
            context: Context of the current hop.
            live_chain_id: Chain id already read from the node. Queried
                only when needed and not given.
        """
        if context.network_id:
            return context.network_id
        if live_chain_id is None:
            live_chain_id = await context.client.get_chain_id()
        return self.network_name(live_chain_id)

    async def check_tag(self, tag: str | None, context: NetworkContext) -> NetworkContext:
        """Validate *tag* against the connected chain.

        Args:
            tag: Network tag carried by a cross-contract reference, or
                ``None`` when the reference asserts none.
            context: Context of the current hop.

        Returns:
            *context* narrowed to the expected network id, for use by the
            recursive hop.

        Raises:
            ChainIdMismatchError: *tag* is chain-id shaped and differs from
                the live chain id.
            NetworkNameMismatchError: *tag* is a name and differs from the
                expected network id.
        """
        live_chain_id = await context.client.get_chain_id()
        expected = await self.expected_network_id(context, live_chain_id)

        if tag:
            if is_chain_id_tag(tag):
                if tag != live_chain_id:
                    raise ChainIdMismatchError(chain_id=tag)
            elif tag != expected:
                raise NetworkNameMismatchError(name=tag)

        logger.debug(
            "network_tag_checked tag=%s chain_id=%s expected=%s", tag, live_chain_id, expected
        )
        return context.narrow(expected)
