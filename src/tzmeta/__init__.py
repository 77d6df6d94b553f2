r"""tzmeta -- Token metadata resolution for Tezos contracts (TZIP-16 / TZIP-12).

Resolves where a contract or token keeps its metadata (an on-chain store,
a token-indexed big-map, a callback entrypoint, another contract, an HTTP
or IPFS document) and returns the assembled JSON value.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
             resolver          Orchestrator, shape dispatch, network checks
            /   |    \
         core  chain  utils    Errors/logging/config/metrics, chain ABCs, codec/http
            \   |    /
             models            Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Metadata URI variants, network context, constants.
    core: Exceptions, structured logging, pydantic configuration, metrics.
    chain: Abstract chain client, contract, big-map and operation interfaces.
    utils: Hex/JSON codec, HTTP fetcher, address validation, chain id RPC.
    resolver: [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver].

Note:
    For lightweight usage, import directly from subpackages::

        from tzmeta.models import classify
        from tzmeta.core import ResolverConfig

    Top-level imports (``from tzmeta import MetadataResolver``) use lazy
    loading and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("tzmeta")

__all__ = [
    "BigMap",
    "ChainClient",
    "Contract",
    "ContractShape",
    "Logger",
    "MetadataResolver",
    "NetworkContext",
    "PendingOperation",
    "ResolverConfig",
    "TzMetaError",
    "classify",
    "resolve_metadata",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BigMap": ("tzmeta.chain", "BigMap"),
    "ChainClient": ("tzmeta.chain", "ChainClient"),
    "Contract": ("tzmeta.chain", "Contract"),
    "PendingOperation": ("tzmeta.chain", "PendingOperation"),
    "Logger": ("tzmeta.core", "Logger"),
    "ResolverConfig": ("tzmeta.core", "ResolverConfig"),
    "TzMetaError": ("tzmeta.core", "TzMetaError"),
    "ContractShape": ("tzmeta.models", "ContractShape"),
    "NetworkContext": ("tzmeta.models", "NetworkContext"),
    "classify": ("tzmeta.models", "classify"),
    "MetadataResolver": ("tzmeta.resolver", "MetadataResolver"),
    "resolve_metadata": ("tzmeta.resolver", "resolve_metadata"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'tzmeta' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
