"""
Contract-shape dispatch.

Selects the retrieval strategy for a contract from its storage fields and
entrypoints. Contracts can expose several shapes at once (a big-map *and* a
legacy entrypoint); the ladder below is evaluated top to bottom and the
first match wins, so directly readable big-maps are preferred over
entrypoints that cost a transaction.

```text
1. token_metadata / token_metadata_registry entrypoint
   + storage.token_metadata is a BigMap        -> TOKEN_INDEXED_BIGMAP
2. storage.metadata is a BigMap                -> GENERIC_STORE
3. storage.token_metadata is a BigMap          -> TOKEN_INDEXED_BIGMAP
4. token_metadata entrypoint                   -> ENTRYPOINT_WITH_CALLBACK
5. token_metadata_registry entrypoint          -> REGISTRY_ENTRYPOINT_WITH_CALLBACK
6. anything else                               -> RAW_FALLBACK
```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tzmeta.chain.base import BigMap, Contract
from tzmeta.models.constants import (
    METADATA_FIELD,
    TOKEN_METADATA_ENTRYPOINT,
    TOKEN_METADATA_FIELD,
    TOKEN_METADATA_REGISTRY_ENTRYPOINT,
    ContractShape,
)


def _field(storage: Any, name: str) -> Any:
    if isinstance(storage, Mapping):
        return storage.get(name)
    return None


class ShapeDispatcher:
    """Stateless classifier of contracts into a [ContractShape][tzmeta.models.constants.ContractShape].

    Nothing is cached: storage may change between calls, so the shape is
    recomputed every time.
    """

    def classify(self, contract: Contract, storage: Any) -> ContractShape:
        """Return the shape of *contract* given its current *storage*."""
        has_token_entrypoint = contract.has_entrypoint(TOKEN_METADATA_ENTRYPOINT)
        has_registry_entrypoint = contract.has_entrypoint(TOKEN_METADATA_REGISTRY_ENTRYPOINT)
        token_bigmap = isinstance(_field(storage, TOKEN_METADATA_FIELD), BigMap)

        if (has_token_entrypoint or has_registry_entrypoint) and token_bigmap:
            return ContractShape.TOKEN_INDEXED_BIGMAP
        if isinstance(_field(storage, METADATA_FIELD), BigMap):
            return ContractShape.GENERIC_STORE
        if token_bigmap:
            return ContractShape.TOKEN_INDEXED_BIGMAP
        if has_token_entrypoint:
            return ContractShape.ENTRYPOINT_WITH_CALLBACK
        if has_registry_entrypoint:
            return ContractShape.REGISTRY_ENTRYPOINT_WITH_CALLBACK
        return ContractShape.RAW_FALLBACK
