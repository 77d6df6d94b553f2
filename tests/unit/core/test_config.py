"""
Unit tests for core.config module.

Tests:
- HttpConfig defaults and bounds
- ResolverConfig defaults, gateway normalization, immutability
- from_dict() / from_yaml() factories and ConfigurationError wrapping
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tzmeta.core.config import HttpConfig, ResolverConfig
from tzmeta.core.exceptions import ConfigurationError
from tzmeta.models.constants import DEFAULT_IPFS_GATEWAY, KNOWN_CHAIN_IDS


# =============================================================================
# HttpConfig
# =============================================================================


class TestHttpConfig:
    """HttpConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = HttpConfig()
        assert config.timeout == 10.0
        assert config.max_size == 1_048_576
        assert config.proxy_url is None

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            HttpConfig(timeout=0)

    def test_max_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            HttpConfig(max_size=0)


# =============================================================================
# ResolverConfig
# =============================================================================


class TestResolverConfigDefaults:
    """ResolverConfig defaults."""

    def test_defaults(self) -> None:
        config = ResolverConfig()
        assert config.ipfs_gateway == DEFAULT_IPFS_GATEWAY
        assert config.max_depth == 16
        assert config.confirmations == 1
        assert config.verify_checksums is False
        assert config.token_metadata_callbacks == {}
        assert config.registry_callbacks == {}
        assert isinstance(config.http, HttpConfig)

    def test_networks_copied_from_catalog(self) -> None:
        config = ResolverConfig()
        assert config.networks == dict(KNOWN_CHAIN_IDS)
        assert config.networks is not KNOWN_CHAIN_IDS

    def test_frozen(self) -> None:
        config = ResolverConfig()
        with pytest.raises(ValidationError):
            config.max_depth = 3  # type: ignore[misc]


class TestResolverConfigTables:
    """Catalog and callback tables are read-only copies."""

    TABLES = ("networks", "token_metadata_callbacks", "registry_callbacks")

    @pytest.mark.parametrize("field", TABLES)
    def test_default_read_only(self, field: str) -> None:
        with pytest.raises(TypeError):
            getattr(ResolverConfig(), field)["NetXnew00000000"] = "x"

    @pytest.mark.parametrize("field", TABLES)
    def test_given_read_only(self, field: str) -> None:
        config = ResolverConfig(**{field: {"NetXdQprcVkpaWU": "KT1cb"}})
        with pytest.raises(TypeError):
            getattr(config, field)["NetXdQprcVkpaWU"] = "KT1other"

    @pytest.mark.parametrize("field", TABLES)
    def test_source_mutation_not_seen(self, field: str) -> None:
        source = {"NetXdQprcVkpaWU": "KT1cb"}
        config = ResolverConfig(**{field: source})
        source["NetXdQprcVkpaWU"] = "KT1other"
        assert getattr(config, field) == {"NetXdQprcVkpaWU": "KT1cb"}

    def test_dump_as_plain_dicts(self) -> None:
        dumped = ResolverConfig(registry_callbacks={"NetXdQprcVkpaWU": "KT1cb"}).model_dump()
        assert dumped["registry_callbacks"] == {"NetXdQprcVkpaWU": "KT1cb"}
        assert type(dumped["networks"]) is dict

    def test_equal_configs_compare_equal(self) -> None:
        assert ResolverConfig() == ResolverConfig()


class TestResolverConfigValidation:
    """Field validation."""

    def test_gateway_gets_trailing_slash(self) -> None:
        config = ResolverConfig(ipfs_gateway="https://gw.example.com/ipfs")
        assert config.ipfs_gateway == "https://gw.example.com/ipfs/"

    def test_gateway_requires_http_scheme(self) -> None:
        with pytest.raises(ValidationError, match="ipfs_gateway"):
            ResolverConfig(ipfs_gateway="ipfs.io/ipfs/")

    def test_max_depth_lower_bound(self) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(max_depth=0)

    def test_confirmations_lower_bound(self) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(confirmations=0)


# =============================================================================
# Factories
# =============================================================================


class TestFromDict:
    """ResolverConfig.from_dict()."""

    def test_nested_http(self) -> None:
        config = ResolverConfig.from_dict(
            {"http": {"timeout": 2.5, "proxy_url": "socks5://127.0.0.1:9050"}}
        )
        assert config.http.timeout == 2.5
        assert config.http.proxy_url == "socks5://127.0.0.1:9050"

    def test_callback_tables(self) -> None:
        config = ResolverConfig.from_dict(
            {"token_metadata_callbacks": {"NetXnHfVqm9iesp": "KT1cb"}}
        )
        assert config.token_metadata_callbacks == {"NetXnHfVqm9iesp": "KT1cb"}

    def test_networks_override(self) -> None:
        config = ResolverConfig.from_dict({"networks": {"NetXcustom00000": "customnet"}})
        assert config.networks == {"NetXcustom00000": "customnet"}

    def test_invalid_wrapped(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ResolverConfig.from_dict({"max_depth": "deep"})
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestFromYaml:
    """ResolverConfig.from_yaml()."""

    def test_loads_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "resolver.yaml"
        yaml_file.write_text(
            "max_depth: 8\n"
            "verify_checksums: true\n"
            "registry_callbacks:\n"
            "  NetXdQprcVkpaWU: KT1registry\n"
        )

        config = ResolverConfig.from_yaml(yaml_file)

        assert config.max_depth == 8
        assert config.verify_checksums is True
        assert config.registry_callbacks == {"NetXdQprcVkpaWU": "KT1registry"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ResolverConfig.from_yaml(tmp_path / "missing.yaml")

    def test_bad_yaml_wrapped(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("max_depth: [1\n")

        with pytest.raises(ConfigurationError, match="Cannot read"):
            ResolverConfig.from_yaml(yaml_file)

    def test_non_mapping_wrapped(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- 1\n")

        with pytest.raises(ConfigurationError):
            ResolverConfig.from_yaml(yaml_file)

    def test_invalid_values_wrapped(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "resolver.yaml"
        yaml_file.write_text("confirmations: -1\n")

        with pytest.raises(ConfigurationError, match="Invalid resolver configuration"):
            ResolverConfig.from_yaml(yaml_file)
