"""Abstract chain collaborators consumed by the resolution engine.

Attributes:
    ChainClient: Live chain id and contract loading.
    Contract: Storage, entrypoints and invocation of one contract.
    PendingOperation: Confirmation wait for an injected operation.
    BigMap: Lazy big-map accessor.
    read_entry: Uniform read over big-maps and in-memory mappings.
    is_pointer: Detects a TZIP-16 pointer entry (text-shaped ``""`` key).
"""

from .base import BigMap, ChainClient, Contract, PendingOperation, is_pointer, read_entry


__all__ = [
    "BigMap",
    "ChainClient",
    "Contract",
    "PendingOperation",
    "is_pointer",
    "read_entry",
]
