"""
Abstract collaborators for reading Tezos contracts.

The resolution engine does not talk to a node itself. It consumes these
interfaces, which an application implements on top of its RPC client or
indexer of choice:

    [ChainClient][tzmeta.chain.base.ChainClient]
        Live chain id and contract loading.
    [Contract][tzmeta.chain.base.Contract]
        Decoded storage, entrypoint presence, entrypoint invocation.
    [PendingOperation][tzmeta.chain.base.PendingOperation]
        An injected operation awaiting confirmation.
    [BigMap][tzmeta.chain.base.BigMap]
        Lazy big-map accessor. Storage fields holding big-maps must be
        instances of this class so that the
        [ShapeDispatcher][tzmeta.resolver.dispatch.ShapeDispatcher] can tell
        them apart from in-memory maps.

Note:
    Storage is expected as a ``Mapping`` from annotated field names to
    decoded values (``str``, ``int``, ``Mapping``, ``Sequence``, ``BigMap``).
    Values of a TZIP-16 store are the hex encoding of the stored bytes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from tzmeta.models.constants import POINTER_KEY


class BigMap(ABC):
    """Lazily-read big-map stored in a contract."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` when absent."""
        ...


class PendingOperation(ABC):
    """Operation injected by [Contract.invoke][tzmeta.chain.base.Contract.invoke]."""

    @abstractmethod
    async def confirm(self, confirmations: int = 1) -> None:
        """Wait until the operation is included and has *confirmations* blocks."""
        ...


class Contract(ABC):
    """Handle on a deployed contract."""

    address: str

    @abstractmethod
    async def storage(self) -> Any:
        """Return the decoded storage of the contract at the current head."""
        ...

    @abstractmethod
    def has_entrypoint(self, name: str) -> bool:
        """Return True if the contract exposes entrypoint *name*."""
        ...

    @abstractmethod
    async def invoke(self, entrypoint: str, *args: Any) -> PendingOperation:
        """Sign and inject a call to *entrypoint* with *args*."""
        ...


class ChainClient(ABC):
    """Connection to one Tezos network."""

    @abstractmethod
    async def get_chain_id(self) -> str:
        """Return the chain id reported by the node (``Net...``)."""
        ...

    @abstractmethod
    async def load_contract(self, address: str) -> Contract | None:
        """Return a handle on *address*, or ``None`` when no contract is deployed there."""
        ...


async def read_entry(container: Any, key: str) -> Any | None:
    """Read *key* from a big-map or an in-memory mapping.

    Returns ``None`` for absent keys and for containers of any other type.
    """
    if isinstance(container, BigMap):
        return await container.get(key)
    if isinstance(container, Mapping):
        return container.get(key)
    return None


async def is_pointer(container: Any) -> bool:
    """Return True if *container* holds a text-shaped TZIP-16 pointer entry."""
    return isinstance(await read_entry(container, POINTER_KEY), str)
