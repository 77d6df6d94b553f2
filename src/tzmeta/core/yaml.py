"""YAML configuration loading for tzmeta.

Used by [ResolverConfig.from_yaml()][tzmeta.core.config.ResolverConfig.from_yaml]
and [MetadataResolver.from_yaml()][tzmeta.resolver.resolver.MetadataResolver.from_yaml]
to read resolver settings (IPFS gateway, callback contracts, HTTP limits).

Examples:
    ```python
    from tzmeta.core.yaml import load_yaml

    raw = load_yaml("config/resolver.yaml")
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Read a resolver settings file with ``yaml.safe_load``.

    An empty document yields ``{}``. Schema validation is left to
    [ResolverConfig][tzmeta.core.config.ResolverConfig].

    Raises:
        FileNotFoundError: *config_path* does not exist.
        yaml.YAMLError: The file is not valid YAML.
        ValueError: The top-level node is not a mapping.
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Resolver config not found: {path}")

    with path.open(encoding="utf-8") as stream:
        document = yaml.safe_load(stream)

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"Resolver config must be a mapping, got {type(document).__name__}")
    return document
