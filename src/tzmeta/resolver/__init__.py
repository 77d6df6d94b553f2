"""Resolution layer: orchestrator, shape dispatcher, and network checks.

Sits at the top of the DAG and is the only layer that combines
[tzmeta.core][tzmeta.core], [tzmeta.chain][tzmeta.chain] and
[tzmeta.utils][tzmeta.utils].

Attributes:
    MetadataResolver: Resolves TZIP-16 / TZIP-12 metadata for a contract.
        See [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver].
    resolve_metadata: One-shot convenience wrapper around
        [MetadataResolver.resolve][tzmeta.resolver.resolver.MetadataResolver.resolve].
    ShapeDispatcher: Priority ladder selecting a
        [ContractShape][tzmeta.models.constants.ContractShape].
    NetworkResolver: Expected network id lookup and network tag validation.
"""

from .dispatch import ShapeDispatcher
from .network import NetworkResolver
from .resolver import MetadataResolver, resolve_metadata


__all__ = [
    "MetadataResolver",
    "NetworkResolver",
    "ShapeDispatcher",
    "resolve_metadata",
]
